"""Shared session helpers for the dashboard."""

import logging

import streamlit as st
from pydantic import ValidationError

from betwise.services.match_book import MatchBook
from betwise.services.settings import SettingsEditor, get_calculator_config

logger = logging.getLogger(__name__)


def get_match_book() -> MatchBook:
    """The session's match book, created with one empty match on first use."""
    if "match_book" not in st.session_state:
        book = MatchBook(config=get_calculator_config())
        book.add_match()
        st.session_state["match_book"] = book
    return st.session_state["match_book"]


def get_settings_editor() -> SettingsEditor:
    if "settings_editor" not in st.session_state:
        st.session_state["settings_editor"] = SettingsEditor(get_match_book().mode)
    return st.session_state["settings_editor"]


TARGET_PAYOUT_KEY = "settings_target_payout"
MAX_BUDGET_KEY = "settings_max_budget"
SETTINGS_ERROR_KEY = "settings_error"


def sync_settings_widgets(state, editor: SettingsEditor) -> None:
    """Write the editor's staged values into the settings widgets' state."""
    target_payout, max_budget = editor.staged
    state[TARGET_PAYOUT_KEY] = float(target_payout)
    state[MAX_BUDGET_KEY] = float(max_budget)


def ensure_settings_widgets(state, editor: SettingsEditor) -> None:
    """Seed the settings widgets from the editor on first render only."""
    if TARGET_PAYOUT_KEY not in state or MAX_BUDGET_KEY not in state:
        sync_settings_widgets(state, editor)


def stage_settings(state, editor: SettingsEditor, changed: str) -> None:
    """
    Stage the widget that just changed.  A rejected value is reported under
    ``settings_error`` and the widgets snap back to the staged copy.
    """
    state.pop(SETTINGS_ERROR_KEY, None)
    try:
        if changed == MAX_BUDGET_KEY:
            editor.stage(max_budget=state[MAX_BUDGET_KEY])
        else:
            editor.stage(target_payout=state[TARGET_PAYOUT_KEY])
    except ValidationError as exc:
        logger.warning("Rejected settings: %s", exc)
        state[SETTINGS_ERROR_KEY] = exc.errors()[0]["msg"]
    sync_settings_widgets(state, editor)


def save_settings(state, editor: SettingsEditor, book: MatchBook) -> None:
    book.apply_budget_mode(editor.save())
    sync_settings_widgets(state, editor)


def discard_settings(state, editor: SettingsEditor) -> None:
    editor.discard()
    state.pop(SETTINGS_ERROR_KEY, None)
    sync_settings_widgets(state, editor)


def widget_key(match_id: int, name: str) -> str:
    """Session-state key for a per-match widget, stable across removals."""
    return f"m{match_id}_{name}"


def field_warning(parsed, label: str) -> None:
    if parsed is not None and parsed.status == "invalid":
        st.warning(f"{label} is not a number; treated as empty.")


CUSTOM_TEAM = "Custom…"
