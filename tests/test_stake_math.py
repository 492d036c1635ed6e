"""
Tests for stake_math.py
Run with: pytest tests/test_stake_math.py -v
"""

import copy

import pytest

from betwise.core.budget_mode import MaxBudget, TargetPayout
from betwise.core.stake_math import (
    InvestmentAnalysis,
    MatchBet,
    TeamBet,
    analyze_investment,
    budget_split,
    budget_split_stake,
    payout,
    recommended_stake,
    round_to_denomination,
)


def _match(odds1=None, amount1=None, odds2=None, amount2=None):
    return MatchBet(
        match_id=1,
        team1="Mumbai Indians",
        team2="Chennai Super Kings",
        team1_bet=TeamBet(odds=odds1, bet_amount=amount1),
        team2_bet=TeamBet(odds=odds2, bet_amount=amount2),
    )


class TestPayout:
    """Test payout = stake × odds"""

    @pytest.mark.parametrize("amount,odds", [(100, 2.0), (50, 3.0), (0, 5.0), (37.5, 1.84)])
    def test_product(self, amount, odds):
        assert payout(amount, odds) == amount * odds

    def test_absent_inputs_are_zero(self):
        assert payout(None, 2.0) == 0.0
        assert payout(100, None) == 0.0
        assert payout(None, None) == 0.0

    def test_non_finite_inputs_are_zero(self):
        assert payout(float("nan"), 2.0) == 0.0
        assert payout(100, float("inf")) == 0.0


class TestRoundToDenomination:
    """Test nearest-5 rounding policy"""

    def test_exact_multiple_unchanged(self):
        assert round_to_denomination(1050.0) == 1050.0

    def test_rounds_down(self):
        assert round_to_denomination(216.67) == 215.0

    def test_rounds_up(self):
        assert round_to_denomination(1103.0) == 1105.0

    def test_half_rounds_up(self):
        # Banker's rounding would give 1060
        assert round_to_denomination(1062.5) == 1065.0

    def test_custom_denomination(self):
        assert round_to_denomination(1234.0, 10.0) == 1230.0

    @pytest.mark.parametrize("amount", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rounds_to_zero(self, amount):
        assert round_to_denomination(amount) == 0.0

    def test_overflowed_target_division(self):
        # 2100 / 1e-320 overflows to inf
        assert recommended_stake(1e-320, TargetPayout(2100)) == 0.0


class TestRecommendedStakeTargetPayout:
    """Test target-payout mode: stake = target / odds"""

    def test_even_money(self):
        assert recommended_stake(2, TargetPayout(2100)) == 1050.0

    def test_rounded_to_five(self):
        # 2100 / 1.9 = 1105.26
        assert recommended_stake(1.9, TargetPayout(2100)) == 1105.0

    @pytest.mark.parametrize("odds", [1.1, 1.37, 1.9, 2.45, 3.3, 7.25, 12.0])
    def test_always_multiple_of_five(self, odds):
        stake = recommended_stake(odds, TargetPayout(2100))
        assert stake / 5 == pytest.approx(round(stake / 5))

    @pytest.mark.parametrize("odds", [None, 0, -2.0, float("nan")])
    def test_invalid_odds_give_zero(self, odds):
        assert recommended_stake(odds, TargetPayout(2100)) == 0.0

    def test_zero_target(self):
        assert recommended_stake(2.0, TargetPayout(0)) == 0.0


class TestRecommendedStakeMaxBudget:
    """Test maximum-budget mode formulas"""

    def test_literal_formula_small_payout_rounds_to_zero(self):
        # 350 × (2/5) / 500 = 0.28
        stake = recommended_stake(2.0, MaxBudget(500), other_odds=3.0, total_payout=350)
        assert stake == 0.0

    def test_literal_formula(self):
        # 50000 × (2/5) / 500 = 40
        stake = recommended_stake(2.0, MaxBudget(500), other_odds=3.0, total_payout=50000)
        assert stake == 40.0

    def test_literal_formula_without_payout(self):
        assert recommended_stake(2.0, MaxBudget(500), other_odds=3.0) == 0.0

    def test_budget_share_formula(self):
        # Payout-equalising share: 500 × 3/5 and 500 × 2/5
        stake1 = recommended_stake(
            2.0, MaxBudget(500), other_odds=3.0, budget_formula="budget_share"
        )
        stake2 = recommended_stake(
            3.0, MaxBudget(500), other_odds=2.0, budget_formula="budget_share"
        )
        assert stake1 == 300.0
        assert stake2 == 200.0
        assert stake1 * 2.0 == stake2 * 3.0

    def test_budget_share_without_other_odds(self):
        stake = recommended_stake(2.0, MaxBudget(500), budget_formula="budget_share")
        assert stake == 0.0

    def test_invalid_odds_give_zero(self):
        assert recommended_stake(None, MaxBudget(500), other_odds=3.0, total_payout=1e6) == 0.0


class TestBudgetSplit:
    """Test budget splitting with payout equalisation"""

    def test_equalisation_branch(self):
        # Ratio split 200/300 pays 400 vs 900 → re-derive from the 650 average
        assert budget_split(2.0, 3.0, 500) == (325.0, 215.0)

    def test_single_side_helper(self):
        assert budget_split_stake(2.0, 3.0, 500) == 325.0
        assert budget_split_stake(3.0, 2.0, 500) == 215.0

    def test_equal_odds_keep_ratio_split(self):
        assert budget_split(2.0, 2.0, 500) == (250.0, 250.0)

    @pytest.mark.parametrize("odds,other", [(None, 3.0), (2.0, None), (0, 3.0), (2.0, 0)])
    def test_missing_odds_allocate_nothing(self, odds, other):
        assert budget_split(odds, other, 500) == (0.0, 0.0)
        assert budget_split_stake(odds, other, 500) == 0.0

    def test_overflowing_split_allocates_nothing(self):
        # odds / other_odds overflows, so the ratio split is NaN
        assert budget_split(1e300, 1e-300, 1e300) == (0.0, 0.0)

    def test_results_are_multiples_of_five(self):
        stake, other = budget_split(1.83, 2.17, 1000)
        assert stake % 5 == 0
        assert other % 5 == 0


class TestAnalyzeInvestment:
    """Test per-match investment analysis"""

    def test_two_sided(self):
        result = analyze_investment(_match(2.0, 100, 3.0, 50), TargetPayout(2100))

        assert result.actual_investment == 150
        assert result.team1_payout == 200
        assert result.team2_payout == 150
        assert result.win_profit == 200
        assert result.team1_loss_scenario == 0
        assert result.team2_loss_scenario == 50

    def test_single_sided_collapses_losses(self):
        result = analyze_investment(_match(2.0, 100, 3.0, None), TargetPayout(2100))

        assert result.actual_investment == 100
        assert result.team1_loss_scenario == -100
        assert result.team2_loss_scenario == -100
        assert result.win_profit == 100

    def test_zero_amount_counts_as_absent(self):
        result = analyze_investment(_match(2.0, 100, 3.0, 0), TargetPayout(2100))

        assert result.team1_loss_scenario == -100
        assert result.team2_loss_scenario == -100

    def test_budget_mode_losses_use_other_side_payout(self):
        result = analyze_investment(_match(2.0, 100, 3.0, 50), MaxBudget(500))

        assert result.team1_loss_scenario == 0
        assert result.team2_loss_scenario == 50

    def test_recommended_investment_target_mode(self):
        # 2100/2 = 1050, 2100/3 = 700
        result = analyze_investment(_match(2.0, None, 3.0, None), TargetPayout(2100))
        assert result.recommended_investment == 1750

    def test_recommended_investment_budget_share(self):
        result = analyze_investment(
            _match(2.0, None, 3.0, None), MaxBudget(500), budget_formula="budget_share"
        )
        assert result.recommended_investment == 500

    def test_empty_match(self):
        result = analyze_investment(_match(), TargetPayout(2100))
        assert result == InvestmentAnalysis(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def test_idempotent_and_pure(self):
        match = _match(2.0, 100, 3.0, 50)
        before = copy.deepcopy(match)

        first = analyze_investment(match, TargetPayout(2100))
        second = analyze_investment(match, TargetPayout(2100))

        assert first == second
        assert match == before


class TestMatchBet:
    def test_side_lookup(self):
        match = _match(2.0, 100, 3.0, 50)
        assert match.bet(1) is match.team1_bet
        assert match.bet(2) is match.team2_bet
        assert match.team(2) == "Chennai Super Kings"

    @pytest.mark.parametrize("side", [0, 3, "1"])
    def test_invalid_side(self, side):
        with pytest.raises(ValueError):
            _match().bet(side)
