"""Stake arithmetic: the single source of truth for payouts and recommendations.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never reimplement the formulas in services or in
the dashboard.

The four pillars exposed are:

1. **Payout** - ``stake × decimal odds``.
2. **Recommended stake** - per-side recommendation in target-payout or
   maximum-budget mode, rounded to the stake denomination.
3. **Budget split** - divide a fixed budget across both sides of a match,
   re-deriving both stakes from the average payout when the ratio split
   leaves the two payouts apart.
4. **Investment analysis** - totals and profit/loss per outcome for one
   match.

Design decisions
----------------
* Absent values are ``None`` and count as zero.  Nothing here raises on
  numeric input: a calculator that is being typed into spends most of its
  life with half-filled fields, and every intermediate state must render.
  Non-finite floats are treated exactly like ``None``.
* Rounding is half-up (``floor(x + 0.5)``) rather than Python's
  round-half-to-even, so 2.5 units of denomination always round up.
  ``round(1062.5 / 5) * 5`` would give 1060 under banker's rounding; the
  calculator shows 1065.
* The maximum-budget recommendation keeps its historical formula by
  default: the odds share of the match's combined payout, divided by the
  budget.  This mixes a payout-denominated numerator with a budget divisor
  and usually rounds to 0.  ``budget_formula="budget_share"`` selects the
  payout-equalising share of the budget instead.  See DESIGN.md.

Run tests with::

    pytest tests/test_stake_math.py -v
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Final, Optional

from betwise.core.budget_mode import BudgetMode, MaxBudget

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

#: Stakes are placed in multiples of this amount.
STAKE_DENOMINATION: Final[float] = 5.0

#: Two payouts closer than this (currency units) count as equal; a budget
#: split whose payouts differ by more is re-derived from their average.
EQUALIZE_TOLERANCE: Final[float] = 1.0


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class TeamBet:
    """Bet state for one side of a match.

    ``odds`` and ``bet_amount`` are ``None`` while the field is empty.
    ``estimated_payout`` and ``recommended_amount`` are derived and kept in
    step by :class:`~betwise.services.match_book.MatchBook`.
    """

    odds: Optional[float] = None
    bet_amount: Optional[float] = None
    estimated_payout: float = 0.0
    recommended_amount: float = 0.0


@dataclass(slots=True)
class MatchBet:
    """A pairing of two named sides, each with independent bet state."""

    match_id: int
    team1: str = ""
    team2: str = ""
    team1_bet: TeamBet = field(default_factory=TeamBet)
    team2_bet: TeamBet = field(default_factory=TeamBet)

    def bet(self, side: int) -> TeamBet:
        """Return the :class:`TeamBet` for ``side`` (1 or 2)."""
        if side == 1:
            return self.team1_bet
        if side == 2:
            return self.team2_bet
        raise ValueError(f"side must be 1 or 2, got {side!r}.")

    def team(self, side: int) -> str:
        if side == 1:
            return self.team1
        if side == 2:
            return self.team2
        raise ValueError(f"side must be 1 or 2, got {side!r}.")


@dataclass(frozen=True)
class InvestmentAnalysis:
    """Derived totals for one match.  Computed on demand, never stored."""

    actual_investment: float
    recommended_investment: float
    win_profit: float
    team1_loss_scenario: float
    team2_loss_scenario: float
    team1_payout: float = 0.0
    team2_payout: float = 0.0


# ---------------------------------------------------------------------------
# Payout and rounding
# ---------------------------------------------------------------------------


def _num(value: Optional[float]) -> float:
    """Read an optional number, mapping ``None`` and non-finite values to 0."""
    if value is None:
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return value


def payout(amount: Optional[float], odds: Optional[float]) -> float:
    """Amount returned if the side wins: ``amount × odds``.

    Args:
        amount: Stake in currency units.  ``None`` counts as 0.
        odds: Decimal odds (stake multiplier).  ``None`` counts as 0.

    Returns:
        The payout, or 0.0 when either input is absent or not finite.

    Examples::

        payout(100, 2.0)   → 200.0
        payout(None, 2.0)  →   0.0
    """
    return _num(amount) * _num(odds)


def round_to_denomination(amount: float, denomination: float = STAKE_DENOMINATION) -> float:
    """Round ``amount`` to the nearest multiple of ``denomination``, halves up.

    Examples::

        round_to_denomination(1050.0)  → 1050.0
        round_to_denomination(216.67)  →  215.0
        round_to_denomination(1062.5)  → 1065.0
        round_to_denomination(inf)     →    0.0

    Non-finite amounts (overflowed divisions, ``inf − inf``) round to 0.
    """
    units = _num(amount) / denomination + 0.5
    if not math.isfinite(units):
        return 0.0
    return math.floor(units) * denomination


# ---------------------------------------------------------------------------
# Recommended stake
# ---------------------------------------------------------------------------


def recommended_stake(
    odds: Optional[float],
    mode: BudgetMode,
    *,
    other_odds: Optional[float] = None,
    total_payout: Optional[float] = 0.0,
    budget_formula: str = "literal",
    denomination: float = STAKE_DENOMINATION,
) -> float:
    """Recommend a stake for one side of a match.

    Target-payout mode::

        stake = target / odds

    Maximum-budget mode, ``budget_formula="literal"``::

        ratio = odds / (odds + other_odds)
        stake = total_payout × ratio / max_budget

    Maximum-budget mode, ``budget_formula="budget_share"``::

        stake = max_budget × other_odds / (odds + other_odds)

    The result is rounded to the nearest ``denomination``.

    Args:
        odds: Decimal odds for this side.
        mode: Active :data:`~betwise.core.budget_mode.BudgetMode`.
        other_odds: Decimal odds for the opposing side.  Only used in
            maximum-budget mode.
        total_payout: Combined estimated payout of both sides of the match.
            Only used by the literal maximum-budget formula.
        budget_formula: ``"literal"`` or ``"budget_share"``.
        denomination: Rounding unit.

    Returns:
        Recommended stake, a multiple of ``denomination``.  0.0 when ``odds``
        is absent or not positive, or when the maximum-budget formula has no
        odds to share between.

    Examples::

        recommended_stake(2.0, TargetPayout(2100))  → 1050.0
        recommended_stake(1.9, TargetPayout(2100))  → 1105.0
    """
    odds_value = _num(odds)
    if odds_value <= 0.0:
        return 0.0

    if isinstance(mode, MaxBudget):
        budget = _num(mode.amount)
        if budget <= 0.0:
            return 0.0
        other_value = max(_num(other_odds), 0.0)
        combined = odds_value + other_value
        if budget_formula == "budget_share":
            amount = budget * other_value / combined
        else:
            ratio = odds_value / combined
            amount = _num(total_payout) * ratio / budget
    else:
        amount = _num(mode.amount) / odds_value

    return round_to_denomination(amount, denomination)


# ---------------------------------------------------------------------------
# Budget split
# ---------------------------------------------------------------------------


def budget_split(
    odds: Optional[float],
    other_odds: Optional[float],
    max_budget: Optional[float],
    *,
    tolerance: float = EQUALIZE_TOLERANCE,
    denomination: float = STAKE_DENOMINATION,
) -> tuple[float, float]:
    """Split ``max_budget`` across both sides of a match.

    Algorithm
    ---------
    1. ``ratio = odds / other_odds``.
    2. ``stake = budget × ratio / (1 + ratio)``, ``other = budget − stake``.
    3. Compare the two payouts ``stake × odds`` and ``other × other_odds``.
    4. If they differ by more than ``tolerance``, re-derive both stakes from
       the average payout: ``stake = avg / odds``, ``other = avg / other_odds``.
       Both payouts are then equal before rounding.  The re-derived stakes
       are not constrained to sum to the budget.
    5. Round both to the nearest ``denomination``.

    Returns:
        ``(stake, other_stake)``.  ``(0.0, 0.0)`` when either odds value is
        absent or not positive.

    Examples::

        budget_split(2.0, 3.0, 500)  → (325.0, 215.0)
        budget_split(2.0, 2.0, 500)  → (250.0, 250.0)
    """
    odds_value = _num(odds)
    other_value = _num(other_odds)
    if odds_value <= 0.0 or other_value <= 0.0:
        return 0.0, 0.0

    budget = _num(max_budget)
    ratio = odds_value / other_value
    stake = budget * ratio / (1.0 + ratio)
    other_stake = budget - stake

    stake_payout = stake * odds_value
    other_payout = other_stake * other_value

    if abs(stake_payout - other_payout) > tolerance:
        average_payout = (stake_payout + other_payout) / 2.0
        stake = average_payout / odds_value
        other_stake = average_payout / other_value

    return (
        round_to_denomination(stake, denomination),
        round_to_denomination(other_stake, denomination),
    )


def budget_split_stake(
    odds: Optional[float],
    other_odds: Optional[float],
    max_budget: Optional[float],
    *,
    tolerance: float = EQUALIZE_TOLERANCE,
    denomination: float = STAKE_DENOMINATION,
) -> float:
    """Stake for the side priced at ``odds`` from :func:`budget_split`."""
    stake, _ = budget_split(
        odds, other_odds, max_budget, tolerance=tolerance, denomination=denomination
    )
    return stake


# ---------------------------------------------------------------------------
# Investment analysis
# ---------------------------------------------------------------------------


def analyze_investment(
    match: MatchBet,
    mode: BudgetMode,
    *,
    budget_formula: str = "literal",
    denomination: float = STAKE_DENOMINATION,
) -> InvestmentAnalysis:
    """Totals and per-outcome profit/loss for one match.

    * ``actual_investment``: sum of both stakes.
    * ``recommended_investment``: sum of both sides' :func:`recommended_stake`.
    * ``win_profit``: both payouts minus the total stake.  An aggregate
      indicator; when the two sides are opposing outcomes only one payout is
      ever collected.
    * ``teamN_loss_scenario``: net result when side N's stake is lost, i.e.
      the other side's payout minus the total stake.  In maximum-budget mode
      this is the same expression: the winning side's payout is meant to
      offset the whole spend.

    When either stake is absent (or zero) there is no hedge, and both loss
    scenarios are ``-actual_investment``.

    Never raises.  Calling it twice on an unchanged match gives equal
    results.
    """
    bet1, bet2 = match.team1_bet, match.team2_bet

    amount1 = _num(bet1.bet_amount)
    amount2 = _num(bet2.bet_amount)
    payout1 = payout(amount1, bet1.odds)
    payout2 = payout(amount2, bet2.odds)

    actual = amount1 + amount2
    total_payout = payout1 + payout2

    recommended = recommended_stake(
        bet1.odds,
        mode,
        other_odds=bet2.odds,
        total_payout=total_payout,
        budget_formula=budget_formula,
        denomination=denomination,
    ) + recommended_stake(
        bet2.odds,
        mode,
        other_odds=bet1.odds,
        total_payout=total_payout,
        budget_formula=budget_formula,
        denomination=denomination,
    )

    if not amount1 or not amount2:
        loss1 = loss2 = -actual
    else:
        loss1 = payout2 - actual
        loss2 = payout1 - actual

    return InvestmentAnalysis(
        actual_investment=actual,
        recommended_investment=recommended,
        win_profit=total_payout - actual,
        team1_loss_scenario=loss1,
        team2_loss_scenario=loss2,
        team1_payout=payout1,
        team2_payout=payout2,
    )
