"""
Pydantic schemas for the settings form and the rendered match summary.

The engine itself works on dataclasses and plain floats.  These models sit
at the edge: ``SettingsUpdate`` validates what the user typed into the
settings panel before it is staged, and ``InvestmentSummary`` is the
display-ready view of an analysis.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from betwise.core.budget_mode import BudgetMode, budget_mode_from_values
from betwise.core.stake_math import InvestmentAnalysis


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class SettingsUpdate(BaseModel):
    """
    Payload from the settings panel.

    Either field may be omitted to leave it unchanged in the staged copy.
    A positive value in one field switches the other off: sending both as
    positive numbers is rejected because it cannot be staged unambiguously.
    """

    target_payout: Optional[float] = Field(
        None, ge=0, description="Desired payout per side (target-payout mode)"
    )
    max_budget: Optional[float] = Field(
        None, ge=0, description="Total spend across both sides (maximum-budget mode)"
    )

    @field_validator("target_payout", "max_budget")
    @classmethod
    def validate_finite(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not math.isfinite(v):
            raise ValueError("amount must be a finite number")
        return v

    @model_validator(mode="after")
    def validate_single_mode(self) -> "SettingsUpdate":
        if (self.target_payout or 0) > 0 and (self.max_budget or 0) > 0:
            raise ValueError(
                "Set either target_payout or max_budget, not both. "
                "A positive max_budget disables the target payout."
            )
        return self

    def to_budget_mode(self) -> BudgetMode:
        return budget_mode_from_values(self.target_payout, self.max_budget)

    model_config = {
        "json_schema_extra": {
            "example": {
                "target_payout": 2100.0,
                "max_budget": 0.0,
            }
        }
    }


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

class InvestmentSummary(BaseModel):
    """Analysis of one match, with amounts rounded to two decimals for display."""

    match_id: int
    team1: str
    team2: str
    actual_investment: float
    recommended_investment: float
    win_profit: float
    team1_loss_scenario: float
    team2_loss_scenario: float
    team1_payout: float
    team2_payout: float

    @field_validator(
        "actual_investment",
        "recommended_investment",
        "win_profit",
        "team1_loss_scenario",
        "team2_loss_scenario",
        "team1_payout",
        "team2_payout",
    )
    @classmethod
    def round_cents(cls, v: float) -> float:
        return round(v, 2)

    @classmethod
    def from_analysis(
        cls, match_id: int, team1: str, team2: str, analysis: InvestmentAnalysis
    ) -> "InvestmentSummary":
        return cls(
            match_id=match_id,
            team1=team1,
            team2=team2,
            actual_investment=analysis.actual_investment,
            recommended_investment=analysis.recommended_investment,
            win_profit=analysis.win_profit,
            team1_loss_scenario=analysis.team1_loss_scenario,
            team2_loss_scenario=analysis.team2_loss_scenario,
            team1_payout=analysis.team1_payout,
            team2_payout=analysis.team2_payout,
        )
