"""Tests for the navigation state machine.

Covers re-filtering on edits, selection and page movement, edge conversion
between cursor and selection, auto-accept, submit/cancel outcomes, and the
message-mode termination hook.
"""

from __future__ import annotations

import unittest

from lazymenu.menu import actions
from lazymenu.menu.actions import ActionKind
from lazymenu.menu.controller import NavigationController, first_line
from lazymenu.menu.matching import build_candidates, filter_matches
from lazymenu.menu.pagination import RowCapacity, WidthCapacity
from lazymenu.menu.session import Outcome, SessionState
from lazymenu.menu.text_buffer import BUFFER_SIZE

SELECT_NEXT = actions.simple(ActionKind.SELECT_NEXT)
SELECT_PREV = actions.simple(ActionKind.SELECT_PREV)


def _rows(lines, rows: int = 3, **kwargs) -> NavigationController:
    return NavigationController(build_candidates(lines), RowCapacity(rows), **kwargs)


def _bar(lines, budget: int = 100, **kwargs) -> NavigationController:
    return NavigationController(build_candidates(lines), WidthCapacity(budget=budget, measure=len), **kwargs)


def _type(controller: NavigationController, text: str):
    outcome = None
    for ch in text:
        outcome = controller.dispatch(actions.insert_text(ch))
    return outcome


def _selected_text(controller: NavigationController) -> str | None:
    selected = controller.session.selected
    return None if selected is None else selected.text


class ControllerFilteringTests(unittest.TestCase):
    def test_session_starts_with_full_list_and_first_item_selected(self) -> None:
        controller = _rows(["a", "b", "c"])

        self.assertEqual([item.text for item in controller.session.matches], ["a", "b", "c"])
        self.assertEqual(controller.session.window.selected, 0)
        self.assertEqual(controller.session.query, "")

    def test_blank_candidate_leads_view_for_empty_query(self) -> None:
        controller = _rows(["b", "", "c"])
        self.assertEqual([item.text for item in controller.session.matches], ["", "b", "c"])

        _type(controller, "c")
        controller.dispatch(actions.simple(ActionKind.DELETE_BACKWARD))

        self.assertEqual(controller.session.query, "")
        self.assertEqual([item.text for item in controller.session.matches], ["", "b", "c"])

    def test_backspace_matches_direct_filter(self) -> None:
        lines = ["banana", "bar", "cab", "abacus", "ban"]
        controller = _rows(lines)
        _type(controller, "ban")

        controller.dispatch(actions.simple(ActionKind.DELETE_BACKWARD))

        self.assertEqual(controller.session.query, "ba")
        self.assertEqual(controller.session.matches, filter_matches(build_candidates(lines), "ba"))

    def test_selection_survives_refilter_when_still_matched(self) -> None:
        controller = _rows(["alpha", "beta", "alphabet"])
        controller.dispatch(SELECT_NEXT)
        self.assertEqual(_selected_text(controller), "beta")

        _type(controller, "a")
        self.assertEqual([item.text for item in controller.session.matches], ["alpha", "alphabet", "beta"])
        self.assertEqual(_selected_text(controller), "beta")

        _type(controller, "l")
        self.assertEqual(_selected_text(controller), "alpha")

    def test_case_insensitive_controller_matches_any_case(self) -> None:
        controller = _rows(["apple", "APP"], case_sensitive=False)

        _type(controller, "app")

        self.assertEqual([item.text for item in controller.session.matches], ["APP", "apple"])

    def test_no_matches_leaves_nothing_selected(self) -> None:
        controller = _rows(["a", "b"])

        _type(controller, "zz")

        self.assertEqual(controller.session.matches, [])
        self.assertIsNone(controller.session.selected)

    def test_unchanged_edit_does_not_reanchor_window(self) -> None:
        controller = _rows(["a", "b", "c", "d", "e"])
        controller.dispatch(SELECT_NEXT)
        before = controller.session.window

        outcome = controller.dispatch(actions.simple(ActionKind.DELETE_BACKWARD))

        self.assertIsNone(outcome)
        self.assertEqual(controller.session.window, before)

    def test_rejected_insert_leaves_buffer_and_view_unchanged(self) -> None:
        controller = _rows([])
        controller.dispatch(actions.insert_text("a" * (BUFFER_SIZE - 1)))
        query = controller.session.query
        window = controller.session.window

        outcome = controller.dispatch(actions.insert_text("b"))

        self.assertIsNone(outcome)
        self.assertEqual(controller.session.query, query)
        self.assertEqual(controller.session.window, window)

    def test_paste_is_cut_at_first_line_break(self) -> None:
        controller = _rows(["foo", "bar"])

        controller.dispatch(actions.paste_text("fo\r\nignored"))

        self.assertEqual(controller.session.query, "fo")
        self.assertEqual([item.text for item in controller.session.matches], ["foo"])

    def test_empty_paste_is_noop(self) -> None:
        controller = _rows(["foo"])
        self.assertIsNone(controller.dispatch(actions.paste_text("\nsecond")))
        self.assertEqual(controller.session.query, "")

    def test_first_line_handles_both_separators(self) -> None:
        self.assertEqual(first_line("a\nb"), "a")
        self.assertEqual(first_line("a\rb\nc"), "a")
        self.assertEqual(first_line("plain"), "plain")


class ControllerSelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller = _rows(["a", "b", "c", "d", "e"])

    def test_select_last_fills_final_page_backward(self) -> None:
        self.controller.dispatch(actions.simple(ActionKind.SELECT_LAST))

        window = self.controller.session.window
        self.assertEqual(window.first, 2)
        self.assertIsNone(window.last)
        self.assertEqual(_selected_text(self.controller), "e")

    def test_select_next_at_last_match_is_noop(self) -> None:
        self.controller.dispatch(actions.simple(ActionKind.SELECT_LAST))
        before = self.controller.session.window

        self.assertIsNone(self.controller.dispatch(SELECT_NEXT))

        self.assertEqual(self.controller.session.window, before)

    def test_select_prev_at_first_match_is_noop(self) -> None:
        before = self.controller.session.window
        self.controller.dispatch(SELECT_PREV)
        self.assertEqual(self.controller.session.window, before)

    def test_select_next_past_window_anchors_at_new_selection(self) -> None:
        for _ in range(3):
            self.controller.dispatch(SELECT_NEXT)

        window = self.controller.session.window
        self.assertEqual((window.first, window.last, window.selected), (3, None, 3))

    def test_select_prev_before_window_jumps_to_previous_page(self) -> None:
        for _ in range(3):
            self.controller.dispatch(SELECT_NEXT)

        self.controller.dispatch(SELECT_PREV)

        window = self.controller.session.window
        self.assertEqual((window.first, window.last, window.selected), (0, 3, 2))

    def test_page_navigation(self) -> None:
        self.controller.dispatch(actions.simple(ActionKind.SELECT_NEXT_PAGE))
        window = self.controller.session.window
        self.assertEqual((window.first, window.selected), (3, 3))

        self.controller.dispatch(actions.simple(ActionKind.SELECT_NEXT_PAGE))
        self.assertEqual(self.controller.session.window, window)

        self.controller.dispatch(actions.simple(ActionKind.SELECT_PREV_PAGE))
        window = self.controller.session.window
        self.assertEqual((window.first, window.selected), (0, 0))

    def test_select_first_returns_to_top(self) -> None:
        self.controller.dispatch(actions.simple(ActionKind.SELECT_LAST))
        self.controller.dispatch(actions.simple(ActionKind.SELECT_FIRST))
        self.assertEqual(self.controller.session.window.first, 0)
        self.assertEqual(_selected_text(self.controller), "a")

    def test_set_capacity_keeps_selection_visible(self) -> None:
        self.controller.dispatch(actions.simple(ActionKind.SELECT_LAST))

        self.controller.set_capacity(RowCapacity(1))

        window = self.controller.session.window
        self.assertEqual(window.selected, 4)
        self.assertTrue(window.contains(4, 5))


class ControllerCursorTests(unittest.TestCase):
    def test_horizontal_right_at_buffer_end_selects_next(self) -> None:
        controller = _bar(["xa", "xb", "xc"])
        _type(controller, "x")

        controller.dispatch(actions.move_cursor(+1))

        self.assertEqual(_selected_text(controller), "xb")
        self.assertEqual(controller.session.buffer.cursor, 1)

    def test_horizontal_left_selects_previous_before_moving_cursor(self) -> None:
        controller = _bar(["xa", "xb", "xc"])
        _type(controller, "x")
        controller.dispatch(SELECT_NEXT)

        controller.dispatch(actions.move_cursor(-1))
        self.assertEqual(_selected_text(controller), "xa")
        self.assertEqual(controller.session.buffer.cursor, 1)

        controller.dispatch(actions.move_cursor(-1))
        self.assertEqual(controller.session.buffer.cursor, 0)

    def test_row_mode_cursor_moves_never_change_selection(self) -> None:
        controller = _rows(["xa", "xb"])
        _type(controller, "x")

        controller.dispatch(actions.move_cursor(+1))
        self.assertEqual(_selected_text(controller), "xa")

        controller.dispatch(SELECT_NEXT)
        controller.dispatch(actions.move_cursor(-1))
        self.assertEqual(_selected_text(controller), "xb")
        self.assertEqual(controller.session.buffer.cursor, 0)

    def test_line_start_moves_cursor_only_when_first_selected(self) -> None:
        controller = _rows(["xa", "xb"])
        _type(controller, "x")

        controller.dispatch(actions.simple(ActionKind.LINE_START))
        self.assertEqual(controller.session.buffer.cursor, 0)

        controller.dispatch(SELECT_NEXT)
        controller.dispatch(actions.simple(ActionKind.LINE_START))
        self.assertEqual(_selected_text(controller), "xa")

    def test_line_end_moves_cursor_then_selects_last(self) -> None:
        controller = _rows(["xa", "xb", "xc"])
        _type(controller, "x")
        controller.dispatch(actions.simple(ActionKind.LINE_START))

        controller.dispatch(actions.simple(ActionKind.LINE_END))
        self.assertTrue(controller.session.buffer.at_end)
        self.assertEqual(_selected_text(controller), "xa")

        controller.dispatch(actions.simple(ActionKind.LINE_END))
        self.assertEqual(_selected_text(controller), "xc")


class ControllerOutcomeTests(unittest.TestCase):
    def test_return_early_accepts_single_match(self) -> None:
        controller = _rows(["only"], return_early=True)
        self.assertFalse(controller.session.finished)

        outcome = _type(controller, "o")

        self.assertEqual(outcome, Outcome(SessionState.ACCEPTED, "only"))
        self.assertTrue(controller.session.finished)

    def test_return_early_waits_while_several_match(self) -> None:
        controller = _rows(["one", "two"], return_early=True)
        self.assertIsNone(_type(controller, "o"))
        self.assertEqual(_type(controller, "n"), Outcome(SessionState.ACCEPTED, "one"))

    def test_submit_returns_selected_text(self) -> None:
        controller = _rows(["alpha", "beta"])
        _type(controller, "b")

        outcome = controller.dispatch(actions.submit())

        self.assertEqual(outcome, Outcome(SessionState.ACCEPTED, "beta"))
        self.assertTrue(outcome.accepted)

    def test_raw_submit_returns_typed_text(self) -> None:
        controller = _rows(["alpha", "beta"])
        _type(controller, "b")

        outcome = controller.dispatch(actions.submit(raw=True))

        self.assertEqual(outcome, Outcome(SessionState.ACCEPTED, "b"))

    def test_submit_without_matches_returns_typed_text(self) -> None:
        controller = _rows(["alpha"])
        _type(controller, "new entry")

        self.assertEqual(controller.dispatch(actions.submit()).payload, "new entry")

    def test_accept_completion_copies_selection_into_buffer(self) -> None:
        controller = _rows(["apple", "apricot"])
        _type(controller, "ap")
        controller.dispatch(SELECT_NEXT)

        self.assertIsNone(controller.dispatch(actions.simple(ActionKind.ACCEPT_COMPLETION)))

        self.assertEqual(controller.session.query, "apricot")
        self.assertTrue(controller.session.buffer.at_end)
        self.assertEqual([item.text for item in controller.session.matches], ["apricot"])

    def test_accept_completion_without_selection_is_noop(self) -> None:
        controller = _rows(["apple"])
        _type(controller, "zz")

        controller.dispatch(actions.simple(ActionKind.ACCEPT_COMPLETION))

        self.assertEqual(controller.session.query, "zz")

    def test_cancel_is_final(self) -> None:
        controller = _rows(["a"])

        outcome = controller.dispatch(actions.simple(ActionKind.CANCEL))

        self.assertEqual(outcome, Outcome(SessionState.CANCELLED, ""))
        self.assertFalse(outcome.accepted)
        self.assertIs(controller.dispatch(actions.submit()), outcome)
        self.assertIs(controller.dismiss(), outcome)


class MessageModeTests(unittest.TestCase):
    def test_message_mode_shows_master_list_and_ignores_actions(self) -> None:
        controller = _bar(["second", "first"], message_mode=True)

        for action in (actions.insert_text("f"), actions.simple(ActionKind.CANCEL), actions.submit()):
            self.assertIsNone(controller.dispatch(action))

        self.assertEqual([item.text for item in controller.session.matches], ["second", "first"])
        self.assertEqual(controller.session.query, "")

    def test_dismiss_accepts_with_empty_payload(self) -> None:
        controller = _bar(["hello"], message_mode=True)

        outcome = controller.dismiss()

        self.assertEqual(outcome, Outcome(SessionState.ACCEPTED, ""))
        self.assertIs(controller.dispatch(actions.simple(ActionKind.CANCEL)), outcome)


if __name__ == "__main__":
    unittest.main()
