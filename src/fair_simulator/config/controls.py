"""Security controls — which input variables each control mitigates.

A control's effect is fully determined by its maturity level (0–5):
0 = baseline (no mitigation), 5 = maximal mitigation.  Maturity lives in the
scenario as ``controls: {control_id: maturity}``; absent ids count as 0.
"""

from typing import Annotated

from pydantic import BaseModel, Field


MATURITY_MIN = 0
MATURITY_MAX = 5

ControlMaturity = Annotated[int, Field(ge=MATURITY_MIN, le=MATURITY_MAX)]


class ControlDefinition(BaseModel):
    """One mitigating control and the variables it scales."""

    id: str = Field(description="Stable identifier used as the maturity key")
    group: str = Field(default="", description="Grouping for display (Identity, Network, ...)")
    label: str = Field(default="", description="Human label")
    variable_ids: list[str] = Field(
        default_factory=list,
        description="Input variables whose distributions this control scales.",
    )


def default_control_definitions() -> list[ControlDefinition]:
    """Reference control catalogue for the file-server ransomware scenario."""
    return [
        ControlDefinition(
            id="threat_intel", group="Detect", label="Threat intelligence & blocking",
            variable_ids=["TEF"],
        ),
        ControlDefinition(
            id="mfa", group="Identity", label="MFA on remote access",
            variable_ids=["P_InitialAccess"],
        ),
        ControlDefinition(
            id="segmentation", group="Network", label="Network segmentation",
            variable_ids=["P_IFSReachable"],
        ),
        ControlDefinition(
            id="pam", group="Identity", label="Privileged access management",
            variable_ids=["P_WriteAccess"],
        ),
        ControlDefinition(
            id="edr", group="Detect", label="Endpoint detection & response",
            variable_ids=["T_DetectDays", "P_WriteAccess"],
        ),
        ControlDefinition(
            id="backups", group="Recover", label="Immutable backups",
            variable_ids=["T_RecoveryDays", "Cost_Recovery"],
        ),
        ControlDefinition(
            id="ir_retainer", group="Respond", label="Incident response retainer",
            variable_ids=["Cost_IR", "T_DetectDays"],
        ),
        ControlDefinition(
            id="bcp", group="Recover", label="Business continuity plan",
            variable_ids=["Cost_DowntimePerDay"],
        ),
        ControlDefinition(
            id="dlp", group="Protect", label="Data loss prevention & encryption",
            variable_ids=["P_Secondary"],
        ),
    ]
