"""Company profile & baseline loss profile — static scenario content."""

from pydantic import BaseModel, Field


class LossProfile(BaseModel):
    """Baseline FAIR loss profile shipped with the scenario (millions)."""

    gross_p90_millions: float = Field(default=6.0, ge=0, description="Gross P90 loss ($M)")
    net_p90_millions: float = Field(default=2.5, ge=0, description="Net P90 loss after insurance ($M)")
    mean_loss_millions: float = Field(default=1.2, ge=0, description="Mean loss per event ($M)")
    frequency_per_year: float = Field(default=0.4, ge=0, description="Loss events per year")
    top_driver: str = Field(default="P_WriteAccess")


class CompanyProfile(BaseModel):
    """Financial shape of the company under analysis."""

    name: str = Field(default="Meridian Freight Co.")
    sector: str = Field(default="Logistics")
    annual_revenue_millions: float = Field(default=850.0, ge=0, description="Annual revenue ($M)")
    ebitda_margin_percent: float = Field(default=14.0, description="EBITDA margin (%)")
    loss_profile: LossProfile = Field(default_factory=LossProfile)

    @property
    def ebitda_millions(self) -> float:
        return self.annual_revenue_millions * self.ebitda_margin_percent / 100
