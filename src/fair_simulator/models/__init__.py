"""Result models — simulation and finance output contracts."""

from fair_simulator.models.results import (
    CapitalBudgetingResult,
    DCFResult,
    DSCRStressResult,
    FinancialOverlay,
    SimulationResults,
    WaccResult,
)

__all__ = [
    "CapitalBudgetingResult",
    "DCFResult",
    "DSCRStressResult",
    "FinancialOverlay",
    "SimulationResults",
    "WaccResult",
]
