"""
The match book: the ordered collection of matches on the calculator page.

Owns every :class:`~betwise.core.stake_math.MatchBet` and is the only place
they are mutated.  Implements:

    1. Stable ids - matches are keyed by an id assigned on insertion and
       never reused, so removing a match does not renumber the others.
    2. The per-side bet state machine:
         - editing odds clears the stake and payout, and recomputes the
           recommendation;
         - entering a valid stake computes the payout and zeroes the
           recommendation;
         - clearing the stake recomputes the recommendation.
    3. Settings changes - recommendations are recomputed for every side
       that has no stake when a new budget mode is committed.

All arithmetic is delegated to :mod:`betwise.core.stake_math`.
"""

import itertools
import logging
from typing import Dict, Iterator, Optional, Tuple

from betwise.core.budget_mode import BudgetMode, MaxBudget
from betwise.core.calculator_config import CalculatorConfig
from betwise.core.parsing import ParsedInput, parse_field
from betwise.core.stake_math import (
    InvestmentAnalysis,
    MatchBet,
    TeamBet,
    analyze_investment,
    budget_split,
    payout,
    recommended_stake,
)
from betwise.services.team_registry import resolve_team_name

logger = logging.getLogger(__name__)


class MatchNotFoundError(KeyError):
    """Raised when a match id is not in the book."""


class MatchBook:
    """
    Ordered, id-keyed collection of matches plus the active budget mode.

    ``side`` arguments are ``1`` or ``2``; anything else raises
    ``ValueError``.
    """

    def __init__(
        self,
        config: Optional[CalculatorConfig] = None,
        mode: Optional[BudgetMode] = None,
    ):
        self.config = config or CalculatorConfig()
        self.mode: BudgetMode = mode if mode is not None else self.config.default_mode()

        self._matches: Dict[int, MatchBet] = {}
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[MatchBet]:
        return iter(list(self._matches.values()))

    def __contains__(self, match_id: object) -> bool:
        return match_id in self._matches

    @property
    def ids(self) -> list:
        return list(self._matches)

    def get(self, match_id: int) -> MatchBet:
        try:
            return self._matches[match_id]
        except KeyError:
            raise MatchNotFoundError(match_id) from None

    def add_match(self, team1: str = "", team2: str = "") -> int:
        """Append a new empty match and return its id."""
        match_id = next(self._ids)
        match = MatchBet(match_id=match_id)
        self._matches[match_id] = match
        if team1:
            self.set_team(match_id, 1, team1)
        if team2:
            self.set_team(match_id, 2, team2)
        logger.debug("Match %d added (%d in book)", match_id, len(self._matches))
        return match_id

    def remove_match(self, match_id: int) -> None:
        self.get(match_id)
        del self._matches[match_id]
        logger.debug("Match %d removed (%d in book)", match_id, len(self._matches))

    def set_team(self, match_id: int, side: int, name: str) -> str:
        """
        Name one side of a match.  Names that resolve against the team list
        are stored in canonical form; anything else is kept as typed.
        """
        match = self.get(match_id)
        match.bet(side)  # validates side
        resolved = resolve_team_name(name) or name.strip()
        if side == 1:
            match.team1 = resolved
        else:
            match.team2 = resolved
        return resolved

    # ------------------------------------------------------------------
    # Bet state machine
    # ------------------------------------------------------------------

    def set_odds(self, match_id: int, side: int, text) -> ParsedInput:
        """Edit a side's odds.  Clears its stake and payout."""
        match = self.get(match_id)
        bet = match.bet(side)
        parsed = parse_field(text)

        bet.odds = parsed.value
        bet.bet_amount = None
        bet.estimated_payout = 0.0
        self._refresh_recommendations(match)

        logger.debug("Match %d side %d odds → %s (%s)", match_id, side, bet.odds, parsed.status)
        return parsed

    def set_bet_amount(self, match_id: int, side: int, text) -> ParsedInput:
        """
        Edit a side's stake.  A valid number sets the payout and zeroes the
        recommendation; empty or invalid text behaves like
        :meth:`clear_bet_amount`.
        """
        parsed = parse_field(text)
        if not parsed.is_valid:
            self.clear_bet_amount(match_id, side)
            return parsed

        match = self.get(match_id)
        bet = match.bet(side)
        bet.bet_amount = parsed.value
        bet.estimated_payout = payout(bet.bet_amount, bet.odds)
        bet.recommended_amount = 0.0
        # The other side's budget-mode recommendation depends on this payout
        self._refresh_recommendations(match)

        logger.debug(
            "Match %d side %d stake → %.2f, payout %.2f",
            match_id, side, bet.bet_amount, bet.estimated_payout,
        )
        return parsed

    def clear_bet_amount(self, match_id: int, side: int) -> None:
        match = self.get(match_id)
        bet = match.bet(side)
        bet.bet_amount = None
        bet.estimated_payout = 0.0
        self._refresh_recommendations(match)

    def apply_budget_mode(self, mode: BudgetMode) -> None:
        """Install a committed budget mode and recompute open recommendations."""
        self.mode = mode
        for match in self._matches.values():
            self._refresh_recommendations(match)
        logger.info("Budget mode %s applied to %d match(es)", mode, len(self._matches))

    def _refresh_recommendations(self, match: MatchBet) -> None:
        total_payout = match.team1_bet.estimated_payout + match.team2_bet.estimated_payout
        for bet, other in (
            (match.team1_bet, match.team2_bet),
            (match.team2_bet, match.team1_bet),
        ):
            if bet.bet_amount is not None:
                continue
            bet.recommended_amount = self._recommend(bet, other, total_payout)

    def _recommend(self, bet: TeamBet, other: TeamBet, total_payout: float) -> float:
        return recommended_stake(
            bet.odds,
            self.mode,
            other_odds=other.odds,
            total_payout=total_payout,
            budget_formula=self.config.budget_formula,
            denomination=self.config.stake_denomination,
        )

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def analyze(self, match_id: int) -> InvestmentAnalysis:
        return analyze_investment(
            self.get(match_id),
            self.mode,
            budget_formula=self.config.budget_formula,
            denomination=self.config.stake_denomination,
        )

    def split_budget(self, match_id: int) -> Tuple[float, float]:
        """Equalised budget split for a match; ``(0, 0)`` outside budget mode."""
        match = self.get(match_id)
        if not isinstance(self.mode, MaxBudget):
            return 0.0, 0.0
        return budget_split(
            match.team1_bet.odds,
            match.team2_bet.odds,
            self.mode.amount,
            tolerance=self.config.equalize_tolerance,
            denomination=self.config.stake_denomination,
        )

    def total_investment(self) -> float:
        """Sum of every stake entered across the book."""
        return sum(self.analyze(match_id).actual_investment for match_id in self._matches)
