"""
Streamlit Dashboard for BetWise
Two-sided stake calculator: payouts, recommendations and outcome scenarios
"""

import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import plotly.graph_objects as go
import streamlit as st
from dotenv import load_dotenv

from betwise.core.budget_mode import MaxBudget
from betwise.schemas import InvestmentSummary
from betwise.services.scenarios import format_currency, format_frame, scenario_frame
from betwise.services.settings import get_calculator_config
from betwise.services.team_registry import IPL_TEAMS
from dashboard.utils import (
    CUSTOM_TEAM,
    MAX_BUDGET_KEY,
    SETTINGS_ERROR_KEY,
    TARGET_PAYOUT_KEY,
    discard_settings,
    ensure_settings_widgets,
    field_warning,
    get_match_book,
    get_settings_editor,
    save_settings,
    stage_settings,
    widget_key,
)

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="BetWise Pro",
    page_icon="🏏",
    layout="wide",
    initial_sidebar_state="expanded",
)

config = get_calculator_config()
book = get_match_book()
editor = get_settings_editor()


def money(value) -> str:
    return format_currency(value, config.currency_symbol)


# ==============================================================================
# CALLBACKS
# ==============================================================================

def _on_odds_change(match_id: int, side: int):
    key = widget_key(match_id, f"odds{side}")
    parsed = book.set_odds(match_id, side, st.session_state[key])
    # Editing odds clears the stake field as well as its payout
    st.session_state[widget_key(match_id, f"amount{side}")] = ""
    st.session_state[f"{key}_parsed"] = parsed


def _on_amount_change(match_id: int, side: int):
    key = widget_key(match_id, f"amount{side}")
    st.session_state[f"{key}_parsed"] = book.set_bet_amount(
        match_id, side, st.session_state[key]
    )


def _on_team_change(match_id: int, side: int):
    choice = st.session_state[widget_key(match_id, f"team{side}")]
    if choice != CUSTOM_TEAM:
        book.set_team(match_id, side, choice)


def _on_custom_team_change(match_id: int, side: int):
    book.set_team(match_id, side, st.session_state[widget_key(match_id, f"custom{side}")])


def _remove_match(match_id: int):
    book.remove_match(match_id)
    for name in list(st.session_state.keys()):
        if name.startswith(widget_key(match_id, "")):
            del st.session_state[name]


# ==============================================================================
# SIDEBAR: SETTINGS
# ==============================================================================

with st.sidebar:
    st.title("🏏 BetWise Pro")
    st.caption("Odds & stake calculator")
    st.markdown("---")

    st.subheader("Settings")
    ensure_settings_widgets(st.session_state, editor)

    max_budget = st.number_input(
        "Maximum Budget",
        min_value=0.0,
        step=50.0,
        key=MAX_BUDGET_KEY,
        on_change=stage_settings,
        args=(st.session_state, editor, MAX_BUDGET_KEY),
        help="A positive budget switches recommendations to budget mode.",
    )
    st.number_input(
        "Target Payout",
        min_value=0.0,
        step=50.0,
        key=TARGET_PAYOUT_KEY,
        on_change=stage_settings,
        args=(st.session_state, editor, TARGET_PAYOUT_KEY),
        disabled=max_budget > 0,
    )
    if st.session_state.get(SETTINGS_ERROR_KEY):
        st.error(f"Invalid settings: {st.session_state[SETTINGS_ERROR_KEY]}")

    col_save, col_discard = st.columns(2)
    col_save.button(
        "Save",
        type="primary",
        on_click=save_settings,
        args=(st.session_state, editor, book),
        disabled=not editor.is_dirty,
    )
    col_discard.button(
        "Discard",
        on_click=discard_settings,
        args=(st.session_state, editor),
        disabled=not editor.is_dirty,
    )

    mode = book.mode
    if isinstance(mode, MaxBudget):
        st.info(f"Budget mode: {money(mode.amount)} across both sides")
    else:
        st.info(
            f"Target payout: {money(mode.amount)} ± "
            f"{money(config.payout_tolerance)}"
        )

    st.markdown("---")
    st.metric("Total Invested", money(book.total_investment()))
    st.metric("Matches", len(book))


# ==============================================================================
# MATCHES
# ==============================================================================

st.title("BetWise Pro")

team_options = [""] + IPL_TEAMS + [CUSTOM_TEAM]

for match in book:
    mid = match.match_id
    title = f"{match.team1 or 'Team 1'} vs {match.team2 or 'Team 2'}"

    with st.expander(title, expanded=True):
        side_cols = st.columns(2)

        for side, col in zip((1, 2), side_cols):
            bet = match.bet(side)
            with col:
                team_key = widget_key(mid, f"team{side}")
                current = match.team(side)
                if team_key not in st.session_state:
                    st.session_state[team_key] = current if current in IPL_TEAMS else ""
                choice = st.selectbox(
                    f"Team {side}",
                    team_options,
                    key=team_key,
                    on_change=_on_team_change,
                    args=(mid, side),
                )
                if choice == CUSTOM_TEAM:
                    st.text_input(
                        "Custom team name",
                        key=widget_key(mid, f"custom{side}"),
                        on_change=_on_custom_team_change,
                        args=(mid, side),
                    )

                odds_key = widget_key(mid, f"odds{side}")
                st.text_input(
                    "Odds",
                    key=odds_key,
                    placeholder="Enter odds value",
                    on_change=_on_odds_change,
                    args=(mid, side),
                )
                field_warning(st.session_state.get(f"{odds_key}_parsed"), "Odds")

                amount_key = widget_key(mid, f"amount{side}")
                st.text_input(
                    "Bet Amount",
                    key=amount_key,
                    placeholder="Enter bet amount",
                    on_change=_on_amount_change,
                    args=(mid, side),
                )
                field_warning(st.session_state.get(f"{amount_key}_parsed"), "Bet amount")

                c1, c2 = st.columns(2)
                c1.metric("Estimated Payout", money(bet.estimated_payout))
                c2.metric("Recommended Bet", money(bet.recommended_amount))

        analysis = book.analyze(mid)
        summary = InvestmentSummary.from_analysis(mid, match.team1, match.team2, analysis)

        st.markdown("---")
        m1, m2, m3 = st.columns(3)
        m1.metric("Actual Investment", money(summary.actual_investment))
        m2.metric("Recommended Investment", money(summary.recommended_investment))
        m3.metric(
            "Win Profit",
            money(summary.win_profit),
            delta="positive" if summary.win_profit > 0 else "negative",
        )

        if isinstance(book.mode, MaxBudget):
            split1, split2 = book.split_budget(mid)
            st.caption(
                f"Budget split: {money(split1)} on {match.team1 or 'Team 1'}, "
                f"{money(split2)} on {match.team2 or 'Team 2'}"
            )

        frame = scenario_frame(match, analysis)
        table_col, chart_col = st.columns(2)
        with table_col:
            st.dataframe(format_frame(frame, config.currency_symbol), width="stretch")
        with chart_col:
            fig = go.Figure(go.Bar(
                x=frame["Outcome"],
                y=frame["Net"],
                marker_color=["green" if v >= 0 else "red" for v in frame["Net"]],
            ))
            fig.update_layout(height=220, margin=dict(l=10, r=10, t=10, b=10))
            st.plotly_chart(fig, width="stretch")

        st.button("Remove match", key=widget_key(mid, "remove"), on_click=_remove_match, args=(mid,))

if not len(book):
    st.info("No matches yet. Add one to start calculating.")

if st.button("➕ Add match"):
    book.add_match()
    st.rerun()
