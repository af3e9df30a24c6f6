"""Tests for the palette session state machine."""

from unittest.mock import MagicMock

import pytest

from cmdpal.ui.command_palette import (
    CategoryInfo,
    Direction,
    FocusTarget,
    PaletteSession,
    PaletteState,
)
from conftest import make_command


@pytest.fixture
def session(sample_catalog):
    return PaletteSession(catalog=sample_catalog)


@pytest.fixture
def open_session(session):
    session.open()
    return session


class TestPaletteStateDefaults:
    """Tests for the state snapshot."""

    def test_defaults(self):
        state = PaletteState()
        assert state.is_open is False
        assert state.query == ""
        assert state.results == ()
        assert state.selected_index == -1

    def test_closed_session_state(self, session):
        state = session.state
        assert state.is_open is False
        assert state.results == ()
        assert state.selected_index == -1


class TestOpenAndClose:
    """Tests for the open/close lifecycle."""

    def test_open_populates_results(self, open_session):
        state = open_session.state
        assert state.is_open is True
        assert state.query == ""
        assert len(state.results) == 5
        assert state.selected_index == 0

    def test_open_notifies_host_and_requests_focus(self, sample_catalog):
        on_open_change = MagicMock()
        on_focus_request = MagicMock()
        session = PaletteSession(
            catalog=sample_catalog,
            on_open_change=on_open_change,
            on_focus_request=on_focus_request,
        )
        session.open()
        on_open_change.assert_called_once_with(True)
        on_focus_request.assert_called_once_with(FocusTarget.INPUT)

    def test_open_twice_is_noop(self, sample_catalog):
        on_open_change = MagicMock()
        session = PaletteSession(catalog=sample_catalog, on_open_change=on_open_change)
        session.open()
        session.query_changed("save")
        session.open()
        assert session.state.query == "save"
        on_open_change.assert_called_once_with(True)

    def test_dismiss_closes_and_resets(self, sample_catalog):
        on_open_change = MagicMock()
        on_focus_request = MagicMock()
        session = PaletteSession(
            catalog=sample_catalog,
            on_open_change=on_open_change,
            on_focus_request=on_focus_request,
        )
        session.open()
        session.query_changed("file")
        session.navigate(Direction.NEXT)
        session.dismiss()

        state = session.state
        assert state.is_open is False
        assert state.query == ""
        assert state.results == ()
        assert on_open_change.call_args_list[-1].args == (False,)
        assert on_focus_request.call_args_list[-1].args == (FocusTarget.TRIGGER,)
        for command in sample_catalog:
            command.action.assert_not_called()

    def test_dismiss_when_closed_is_noop(self, sample_catalog):
        on_open_change = MagicMock()
        session = PaletteSession(catalog=sample_catalog, on_open_change=on_open_change)
        session.dismiss()
        on_open_change.assert_not_called()

    def test_reopen_starts_fresh(self, open_session):
        open_session.query_changed("save")
        open_session.navigate(Direction.NEXT)
        open_session.dismiss()
        open_session.open()
        assert open_session.state.query == ""
        assert open_session.state.selected_index == 0
        assert len(open_session.state.results) == 5

    def test_generation_changes_on_open_and_close(self, session):
        start = session.generation
        session.open()
        opened = session.generation
        session.dismiss()
        assert start < opened < session.generation


class TestQueryChanged:
    """Tests for query edits."""

    def test_query_filters_results(self, open_session):
        open_session.query_changed("file")
        labels = [r.command.label for r in open_session.state.results]
        assert labels[0] == "New File"
        assert "Toggle Sidebar" not in labels

    def test_query_edit_resets_selection(self, open_session):
        open_session.navigate(Direction.NEXT)
        open_session.navigate(Direction.NEXT)
        assert open_session.state.selected_index == 2
        open_session.query_changed("e")
        assert open_session.state.selected_index == 0

    def test_query_ignored_when_closed(self, session):
        session.query_changed("file")
        assert session.state.query == ""
        assert session.state.results == ()

    def test_stale_generation_dropped(self, open_session):
        stale = open_session.generation
        open_session.dismiss()
        open_session.open()
        open_session.query_changed("save", generation=stale)
        assert open_session.state.query == ""

    def test_current_generation_applied(self, open_session):
        open_session.query_changed("save", generation=open_session.generation)
        assert open_session.state.query == "save"

    def test_no_results(self, open_session):
        open_session.query_changed("zzzz")
        assert open_session.state.results == ()
        assert open_session.state.selected_index == -1


class TestNavigation:
    """Tests for wraparound navigation and hover."""

    @pytest.fixture
    def three_results(self):
        catalog = [make_command(c, f"Item {c}") for c in "abc"]
        session = PaletteSession(catalog=catalog)
        session.open()
        return session

    def test_next_wraps_to_top(self, three_results):
        three_results.hover(2)
        three_results.navigate(Direction.NEXT)
        assert three_results.state.selected_index == 0

    def test_prev_wraps_to_bottom(self, three_results):
        three_results.navigate(Direction.PREV)
        assert three_results.state.selected_index == 2

    def test_navigate_accepts_strings(self, three_results):
        three_results.navigate("next")
        assert three_results.state.selected_index == 1
        three_results.navigate("prev")
        assert three_results.state.selected_index == 0

    def test_selected_result_follows_navigation(self, three_results):
        three_results.navigate(Direction.PREV)
        assert three_results.selected_result() is three_results.state.results[2]
        three_results.navigate(Direction.NEXT)
        assert three_results.selected_result() is three_results.state.results[0]

    def test_navigate_on_empty_results_is_noop(self, open_session):
        open_session.query_changed("zzzz")
        open_session.navigate(Direction.NEXT)
        assert open_session.state.selected_index == -1

    def test_navigate_when_closed_is_noop(self, session):
        updates = MagicMock()
        session.on_state_update = updates
        session.navigate(Direction.NEXT)
        updates.assert_not_called()

    def test_hover_sets_selection(self, three_results):
        three_results.hover(1)
        assert three_results.state.selected_index == 1

    def test_hover_out_of_range_ignored(self, three_results):
        three_results.hover(1)
        three_results.hover(7)
        three_results.hover(-1)
        assert three_results.state.selected_index == 1

    def test_hover_does_not_execute(self, three_results):
        three_results.hover(2)
        assert three_results.is_open
        three_results.selected_result().command.action.assert_not_called()


class TestSelect:
    """Tests for executing the selected command."""

    def test_select_runs_action_once_and_closes(self, sample_catalog):
        session = PaletteSession(catalog=sample_catalog)
        session.open()
        session.query_changed("toggle")
        result = session.select()

        assert result.command.id == "toggle-sidebar"
        sample_catalog[3].action.assert_called_once_with()
        for index, command in enumerate(sample_catalog):
            if index != 3:
                command.action.assert_not_called()
        assert session.is_open is False
        assert session.state.query == ""

    def test_select_on_empty_results_is_noop(self, open_session, sample_catalog):
        open_session.query_changed("zzzz")
        before = open_session.state
        assert open_session.select() is None
        assert open_session.is_open
        assert open_session.state == before
        for command in sample_catalog:
            command.action.assert_not_called()

    def test_select_when_closed_is_noop(self, session, sample_catalog):
        assert session.select() is None
        for command in sample_catalog:
            command.action.assert_not_called()

    def test_select_uses_current_selection(self, open_session, sample_catalog):
        open_session.navigate(Direction.NEXT)
        result = open_session.select()
        # Alphabetical: Find in Files, Go to File, ...
        assert result.command.id == "go-to-file"
        sample_catalog[0].action.assert_called_once_with()

    def test_failing_action_still_closes(self):
        on_open_change = MagicMock()
        failing = make_command("boom", "Explode", action=MagicMock(side_effect=RuntimeError("boom")))
        session = PaletteSession(catalog=[failing], on_open_change=on_open_change)
        session.open()

        with pytest.raises(RuntimeError, match="boom"):
            session.select()

        assert session.is_open is False
        assert on_open_change.call_args_list[-1].args == (False,)

    def test_activate_selects_and_runs(self, open_session, sample_catalog):
        result = open_session.activate(4)
        # Fifth alphabetically is Toggle Sidebar
        assert result.command.id == "toggle-sidebar"
        sample_catalog[3].action.assert_called_once_with()
        assert open_session.is_open is False

    def test_activate_out_of_range_is_noop(self, open_session):
        assert open_session.activate(42) is None
        assert open_session.is_open

    def test_recent_selection_runs_original_action(self, sample_catalog):
        session = PaletteSession(catalog=sample_catalog, recents=[sample_catalog[4]])
        session.open()
        result = session.select()
        assert result.is_recent
        assert result.command.id == "save-all"
        sample_catalog[4].action.assert_called_once_with()


class TestHostChanges:
    """Tests for catalog/recents/settings changes from the host."""

    def test_catalog_change_keeps_query(self, open_session):
        open_session.query_changed("file")
        open_session.set_catalog([make_command("x", "File Browser")])
        state = open_session.state
        assert state.query == "file"
        assert [r.command.label for r in state.results] == ["File Browser"]

    def test_catalog_change_clamps_selection(self, open_session):
        open_session.navigate(Direction.PREV)
        assert open_session.state.selected_index == 4
        open_session.set_catalog([make_command("x", "One"), make_command("y", "Two")])
        assert open_session.state.selected_index == 1

    def test_catalog_change_keeps_valid_selection(self, open_session, sample_catalog):
        open_session.navigate(Direction.NEXT)
        open_session.set_catalog(sample_catalog + [make_command("z", "Zoom In")])
        assert open_session.state.selected_index == 1

    def test_recents_change(self, open_session, sample_catalog):
        open_session.set_recents([sample_catalog[1]])
        first = open_session.state.results[0]
        assert first.is_recent
        assert first.command.id == "find-in-files"

    def test_show_recent_off(self, sample_catalog):
        session = PaletteSession(catalog=sample_catalog, recents=[sample_catalog[1]], show_recent=False)
        session.open()
        assert not any(r.is_recent for r in session.state.results)
        session.set_show_recent(True)
        assert session.state.results[0].is_recent

    def test_max_results_change(self, open_session):
        open_session.set_max_results(2)
        assert len(open_session.state.results) == 2

    def test_categories_change(self, open_session):
        open_session.set_categories({"navigation": CategoryInfo("Go", "➡")})
        go_to_file = next(r for r in open_session.state.results if r.command.id == "go-to-file")
        assert go_to_file.category_info == CategoryInfo("Go", "➡")

    def test_changes_while_closed_apply_on_open(self, session):
        session.set_catalog([make_command("x", "Only")])
        assert session.state.results == ()
        session.open()
        assert [r.command.id for r in session.state.results] == ["x"]

    def test_state_update_callback(self, sample_catalog):
        updates = MagicMock()
        session = PaletteSession(catalog=sample_catalog, on_state_update=updates)
        session.open()
        session.query_changed("save")
        last_state = updates.call_args.args[0]
        assert isinstance(last_state, PaletteState)
        assert last_state.query == "save"
        assert last_state.is_open is True
