"""
Display helpers: currency formatting and the per-outcome scenario table.
"""

from typing import Optional

import pandas as pd

from betwise.core.stake_math import InvestmentAnalysis, MatchBet

DEFAULT_CURRENCY_SYMBOL = "₹"

SCENARIO_COLUMNS = ["Outcome", "Stake", "Payout", "Net"]


def format_currency(value: Optional[float], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Two-decimal currency string.

    format_currency(1050)   → '₹1050.00'
    format_currency(-150)   → '-₹150.00'
    format_currency(None)   → '₹0.00'
    """
    value = float(value or 0.0)
    if value < 0:
        return f"-{symbol}{abs(value):.2f}"
    return f"{symbol}{value:.2f}"


def _label(name: str, fallback: str) -> str:
    return name or fallback


def scenario_frame(match: MatchBet, analysis: InvestmentAnalysis) -> pd.DataFrame:
    """
    One row per outcome of the match.

    Net is the analysis loss scenario for the side that loses: if team 1
    wins, team 2's stake is lost, so the row carries ``team2_loss_scenario``.
    """
    team1 = _label(match.team1, "Team 1")
    team2 = _label(match.team2, "Team 2")

    rows = [
        {
            "Outcome": f"{team1} wins",
            "Stake": match.team1_bet.bet_amount or 0.0,
            "Payout": analysis.team1_payout,
            "Net": analysis.team2_loss_scenario,
        },
        {
            "Outcome": f"{team2} wins",
            "Stake": match.team2_bet.bet_amount or 0.0,
            "Payout": analysis.team2_payout,
            "Net": analysis.team1_loss_scenario,
        },
    ]
    return pd.DataFrame(rows, columns=SCENARIO_COLUMNS)


def format_frame(frame: pd.DataFrame, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> pd.DataFrame:
    """Copy of a scenario frame with money columns rendered as strings."""
    formatted = frame.copy()
    for column in ("Stake", "Payout", "Net"):
        formatted[column] = formatted[column].map(lambda v: format_currency(v, symbol))
    return formatted
