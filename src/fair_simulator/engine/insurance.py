"""Insurance layer — gross → net annual loss.

  gross ≤ deductible  → net = gross  (entirely retained)
  otherwise           → insured = min(gross − deductible, coverage_limit)
                        net     = gross − insured

So the retained loss is the deductible plus anything above
deductible + coverage_limit.
"""


def net_loss(gross: float, deductible: float, coverage_limit: float) -> float:
    """Net loss after applying deductible and coverage limit."""
    if gross <= deductible:
        return gross
    insured = min(gross - deductible, coverage_limit)
    return gross - insured
