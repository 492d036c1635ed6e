"""
Tests for the dashboard's settings-form callbacks
Run with: pytest tests/test_dashboard_utils.py -v
"""

from betwise.core.budget_mode import MaxBudget, TargetPayout
from betwise.services.match_book import MatchBook
from betwise.services.settings import SettingsEditor
from dashboard.utils import (
    MAX_BUDGET_KEY,
    SETTINGS_ERROR_KEY,
    TARGET_PAYOUT_KEY,
    discard_settings,
    ensure_settings_widgets,
    save_settings,
    stage_settings,
)


def _form(mode=TargetPayout(2100)):
    editor = SettingsEditor(mode)
    state = {}
    ensure_settings_widgets(state, editor)
    return state, editor


class TestSeeding:
    """Test the widgets start from the committed mode"""

    def test_seeded_from_committed(self):
        state, _ = _form(MaxBudget(500))
        assert state[TARGET_PAYOUT_KEY] == 0.0
        assert state[MAX_BUDGET_KEY] == 500.0

    def test_zero_target_shown_as_zero(self):
        state, _ = _form(TargetPayout(0))
        assert state[TARGET_PAYOUT_KEY] == 0.0

    def test_existing_widget_values_kept(self):
        state, editor = _form()
        state[TARGET_PAYOUT_KEY] = 3000.0
        ensure_settings_widgets(state, editor)
        assert state[TARGET_PAYOUT_KEY] == 3000.0


class TestStaging:

    def test_budget_edit_zeroes_target(self):
        state, editor = _form()
        state[MAX_BUDGET_KEY] = 900.0

        stage_settings(state, editor, MAX_BUDGET_KEY)

        assert editor.staged == (0.0, 900.0)
        assert state[TARGET_PAYOUT_KEY] == 0.0
        assert editor.is_dirty

    def test_target_edit_staged(self):
        state, editor = _form()
        state[TARGET_PAYOUT_KEY] = 3000.0

        stage_settings(state, editor, TARGET_PAYOUT_KEY)

        assert editor.staged == (3000.0, 0.0)

    def test_rejected_value_reported_and_reset(self):
        state, editor = _form()
        state[MAX_BUDGET_KEY] = -50.0

        stage_settings(state, editor, MAX_BUDGET_KEY)

        assert state[SETTINGS_ERROR_KEY]
        assert state[MAX_BUDGET_KEY] == 0.0
        assert editor.staged == (2100.0, 0.0)

    def test_next_good_edit_clears_error(self):
        state, editor = _form()
        state[MAX_BUDGET_KEY] = -50.0
        stage_settings(state, editor, MAX_BUDGET_KEY)

        state[MAX_BUDGET_KEY] = 400.0
        stage_settings(state, editor, MAX_BUDGET_KEY)

        assert SETTINGS_ERROR_KEY not in state


class TestSaveAndDiscard:

    def test_discard_resets_widgets(self):
        state, editor = _form()
        state[MAX_BUDGET_KEY] = 900.0
        stage_settings(state, editor, MAX_BUDGET_KEY)

        discard_settings(state, editor)

        assert state[MAX_BUDGET_KEY] == 0.0
        assert state[TARGET_PAYOUT_KEY] == 2100.0
        assert not editor.is_dirty

    def test_discard_clears_error(self):
        state, editor = _form()
        state[TARGET_PAYOUT_KEY] = -1.0
        stage_settings(state, editor, TARGET_PAYOUT_KEY)

        discard_settings(state, editor)

        assert SETTINGS_ERROR_KEY not in state

    def test_save_applies_mode_to_book(self):
        book = MatchBook()
        mid = book.add_match()
        book.set_odds(mid, 1, "2")
        state, editor = _form(book.mode)
        state[TARGET_PAYOUT_KEY] = 3000.0
        stage_settings(state, editor, TARGET_PAYOUT_KEY)

        save_settings(state, editor, book)

        assert book.mode == TargetPayout(3000.0)
        assert book.get(mid).team1_bet.recommended_amount == 1500.0
        assert not editor.is_dirty

    def test_save_budget_mode(self):
        book = MatchBook()
        state, editor = _form(book.mode)
        state[MAX_BUDGET_KEY] = 500.0
        stage_settings(state, editor, MAX_BUDGET_KEY)

        save_settings(state, editor, book)

        assert book.mode == MaxBudget(500.0)
        assert state[MAX_BUDGET_KEY] == 500.0
        assert state[TARGET_PAYOUT_KEY] == 0.0
