"""
Calculator settings: environment-driven config and the staged settings form.

The settings panel never edits the live budget mode directly.  Edits go to
a staged copy held by :class:`SettingsEditor`; ``save()`` commits the staged
values as a :data:`~betwise.core.budget_mode.BudgetMode` and ``discard()``
throws them away.
"""

import logging
import os
from typing import Optional, Tuple

from betwise.core.budget_mode import BudgetMode, budget_mode_from_values, budget_mode_values
from betwise.core.calculator_config import CalculatorConfig
from betwise.schemas import SettingsUpdate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------

def load_calculator_config() -> CalculatorConfig:
    """
    Build a :class:`CalculatorConfig` from ``BETWISE_*`` environment variables.

    Unset variables fall back to the dataclass defaults.  An unknown
    ``BETWISE_BUDGET_FORMULA`` raises ``ValueError``.
    """
    defaults = CalculatorConfig()
    return CalculatorConfig(
        default_target_payout=float(
            os.getenv("BETWISE_TARGET_PAYOUT", str(defaults.default_target_payout))
        ),
        payout_tolerance=float(
            os.getenv("BETWISE_PAYOUT_TOLERANCE", str(defaults.payout_tolerance))
        ),
        stake_denomination=float(
            os.getenv("BETWISE_STAKE_DENOMINATION", str(defaults.stake_denomination))
        ),
        equalize_tolerance=float(
            os.getenv("BETWISE_EQUALIZE_TOLERANCE", str(defaults.equalize_tolerance))
        ),
        currency_symbol=os.getenv("BETWISE_CURRENCY_SYMBOL", defaults.currency_symbol),
        budget_formula=os.getenv("BETWISE_BUDGET_FORMULA", defaults.budget_formula),
    )


# ---------------------------------------------------------------------------
# Staged settings
# ---------------------------------------------------------------------------

class SettingsEditor:
    """
    Staging copy of the settings form.

    The two form fields are kept as plain floats while staged so the panel
    can render them; the committed value is always a single
    :data:`BudgetMode`.  Setting either field to a positive amount zeroes
    the other in the staged copy.
    """

    def __init__(self, committed: BudgetMode):
        self._committed = committed
        self._staged_target, self._staged_budget = budget_mode_values(committed)

    @property
    def committed(self) -> BudgetMode:
        return self._committed

    @property
    def staged(self) -> Tuple[float, float]:
        """``(target_payout, max_budget)`` as currently staged."""
        return self._staged_target, self._staged_budget

    @property
    def is_dirty(self) -> bool:
        """True if the staged values differ from the committed mode."""
        return self.staged != budget_mode_values(self._committed)

    def stage(
        self,
        target_payout: Optional[float] = None,
        max_budget: Optional[float] = None,
    ) -> Tuple[float, float]:
        """
        Stage new form values.  Raises ``pydantic.ValidationError`` on
        negative, non-finite, or doubly-positive input; the staged copy is
        left untouched in that case.
        """
        update = SettingsUpdate(target_payout=target_payout, max_budget=max_budget)

        if update.target_payout is not None:
            self._staged_target = update.target_payout
            if update.target_payout > 0:
                self._staged_budget = 0.0

        if update.max_budget is not None:
            self._staged_budget = update.max_budget
            if update.max_budget > 0:
                self._staged_target = 0.0

        return self.staged

    def save(self) -> BudgetMode:
        """Commit the staged values and return the new mode."""
        self._committed = budget_mode_from_values(self._staged_target, self._staged_budget)
        # Re-sync so a zeroed field reads back the way it was committed
        self._staged_target, self._staged_budget = budget_mode_values(self._committed)
        logger.info("Settings saved: %s", self._committed)
        return self._committed

    def discard(self) -> None:
        """Drop staged edits and return to the committed values."""
        self._staged_target, self._staged_budget = budget_mode_values(self._committed)


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_calculator_config: Optional[CalculatorConfig] = None


def get_calculator_config() -> CalculatorConfig:
    global _calculator_config
    if _calculator_config is None:
        _calculator_config = load_calculator_config()
        logger.info("Calculator config loaded: %s", _calculator_config)
    return _calculator_config
