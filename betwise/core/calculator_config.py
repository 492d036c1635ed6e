"""Calculator-level configuration: every tunable constant in one place.

:class:`CalculatorConfig` is a frozen dataclass.  Nowhere else in the
codebase should the stake denomination, the equalisation tolerance or the
currency symbol be hard-coded; the engine functions take them as keyword
arguments and the match book passes them through from its config.

Typical usage::

    from betwise.core.calculator_config import CalculatorConfig

    cfg = CalculatorConfig()

    # Override a single constant, e.g. for a bookmaker that takes 10s:
    from dataclasses import replace
    custom_cfg = replace(cfg, stake_denomination=10.0)

Environment-driven construction lives in
:func:`betwise.services.settings.get_calculator_config` so this module stays
free of I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from betwise.core.budget_mode import DEFAULT_TARGET_PAYOUT, BudgetMode, TargetPayout

BudgetFormula = Literal["literal", "budget_share"]

#: Recognised values for :attr:`CalculatorConfig.budget_formula`.
BUDGET_FORMULAS: Final[tuple[str, ...]] = ("literal", "budget_share")


@dataclass(frozen=True)
class CalculatorConfig:
    """Immutable configuration bundle for the stake calculator.

    Attributes:
        default_target_payout: Target payout used before the user saves
            settings.
        payout_tolerance: Display-only band around the target payout
            ("Target payout: ₹2100 ± ₹10").  Not used in arithmetic.
        stake_denomination: Recommendations are rounded to the nearest
            multiple of this amount.
        equalize_tolerance: Maximum payout difference (currency units)
            tolerated before a budget split is re-derived from the average
            payout.
        currency_symbol: Prefix for every rendered amount.
        budget_formula: Which maximum-budget recommendation formula to use:
            ``"literal"`` (odds share of the total payout divided by the
            budget) or ``"budget_share"`` (payout-equalising share of the
            budget).
    """

    default_target_payout: float = DEFAULT_TARGET_PAYOUT
    payout_tolerance: float = 10.0
    stake_denomination: float = 5.0
    equalize_tolerance: float = 1.0
    currency_symbol: str = "₹"
    budget_formula: BudgetFormula = "literal"

    def __post_init__(self) -> None:
        if self.budget_formula not in BUDGET_FORMULAS:
            raise ValueError(
                f"Unknown budget_formula {self.budget_formula!r}; "
                f"expected one of {', '.join(BUDGET_FORMULAS)}."
            )
        if self.stake_denomination <= 0:
            raise ValueError(
                f"stake_denomination must be positive, got {self.stake_denomination!r}."
            )

    def default_mode(self) -> BudgetMode:
        """Budget mode in force before any settings are saved."""
        return TargetPayout(self.default_target_payout)
