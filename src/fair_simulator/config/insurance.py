"""Insurance policy and company archetypes.

The archetype (when one is selected) supplies the modeled policy; otherwise
the fallback terms apply:

  deductible     = 250,000
  coverage_limit = 10,000,000
"""

from __future__ import annotations

from pydantic import BaseModel, Field


DEFAULT_DEDUCTIBLE = 250_000.0
DEFAULT_COVERAGE_LIMIT = 10_000_000.0


class InsurancePolicy(BaseModel):
    """Deductible / limit applied identically to every trial in a run."""

    deductible: float = Field(
        default=DEFAULT_DEDUCTIBLE, ge=0,
        description="Retention: losses up to this amount are uninsured.",
    )
    coverage_limit: float = Field(
        default=DEFAULT_COVERAGE_LIMIT, ge=0,
        description="Maximum insurer payout above the deductible.",
    )


class ModeledInsurance(InsurancePolicy):
    """Archetype-level policy, including the premium paid for it."""

    annual_premium: float = Field(default=0.0, ge=0, description="Annual premium ($)")


class Archetype(BaseModel):
    """Company archetype — financial shape plus modeled insurance."""

    id: str
    display_name: str = ""
    industry: str = ""
    annual_revenue: float = Field(default=0.0, ge=0, description="Annual revenue ($)")
    ebitda_margin: float = Field(default=0.0, description="EBITDA margin (fraction)")
    cash: float = Field(default=0.0, ge=0)
    debt: float = Field(default=0.0, ge=0)
    downtime_impact_factor: float = Field(default=1.0, ge=0)
    modeled_insurance: ModeledInsurance | None = None


def resolve_policy(archetype: Archetype | None) -> InsurancePolicy:
    """Policy to simulate with: the archetype's modeled terms or the fallback."""
    if archetype is None or archetype.modeled_insurance is None:
        return InsurancePolicy()
    mi = archetype.modeled_insurance
    return InsurancePolicy(deductible=mi.deductible, coverage_limit=mi.coverage_limit)
