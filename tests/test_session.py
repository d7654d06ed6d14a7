import curses

import pytest

from typingmaster.session import (
    ACTIVE,
    COMPLETE,
    CORRECT,
    CURRENT,
    IDLE,
    INCORRECT,
    PENDING,
    TypingSession,
    classify_characters,
    key_to_char,
)


def type_text(session, text):
    for char in text:
        session.accept_key(char)


def test_new_session_is_idle(clock):
    session = TypingSession("hello", clock=clock)

    assert session.state == IDLE
    assert session.start_time is None
    assert session.wpm == 0
    assert session.accuracy == 100


def test_first_key_sets_start_time_once(clock):
    session = TypingSession("hello", clock=clock)

    session.accept_key("h")
    first = session.start_time
    clock.advance(5)
    session.accept_key("e")

    assert first == 1000.0
    assert session.start_time == first
    assert session.state == ACTIVE


def test_ignored_key_still_starts_timer(clock):
    session = TypingSession("hello", clock=clock)

    assert session.accept_key("Shift") is False
    assert session.typed_text == ""
    assert session.start_time == 1000.0


def test_backspace_removes_last_character(clock):
    session = TypingSession("hello", clock=clock)
    type_text(session, "hx")

    assert session.accept_key("Backspace") is True
    assert session.typed_text == "h"


def test_backspace_on_empty_is_noop(clock):
    session = TypingSession("hello", clock=clock)

    assert session.accept_key("Backspace") is False
    assert session.typed_text == ""


@pytest.mark.parametrize("key", [curses.KEY_BACKSPACE, 127, 8, "\x7f", "\b"])
def test_curses_delete_keys(clock, key):
    session = TypingSession("hello", clock=clock)
    type_text(session, "he")

    session.accept_key(key)

    assert session.typed_text == "h"


def test_integer_key_codes_append_characters(clock):
    session = TypingSession("hi", clock=clock)

    session.accept_key(ord("h"))

    assert session.typed_text == "h"


@pytest.mark.parametrize("key", ["Enter", "Tab", "\t", "\n", "", curses.KEY_LEFT, curses.KEY_RESIZE, -1])
def test_non_printable_keys_are_ignored(key):
    assert key_to_char(key) is None


def test_typed_text_never_exceeds_target(clock):
    session = TypingSession("abc", clock=clock)

    type_text(session, "abcdefgh")

    assert session.typed_text == "abc"
    assert len(session.typed_text) <= len(session.target_text)


def test_completes_exactly_at_full_length(clock):
    session = TypingSession("abc", clock=clock)

    type_text(session, "ab")
    assert session.completed is False

    session.accept_key("c")
    assert session.completed is True
    assert session.state == COMPLETE


def test_complete_session_ignores_further_keys(clock):
    session = TypingSession("abc", clock=clock)
    type_text(session, "abc")

    assert session.accept_key("Backspace") is False
    assert session.typed_text == "abc"
    assert session.completed is True


def test_metrics_computed_on_completion(clock):
    session = TypingSession("hello world", clock=clock)
    session.accept_key("h")
    clock.advance(6)  # 0.1 minutes
    type_text(session, "ellx world")

    # 11 chars / 5 = 2.2 words over 0.1 minutes
    assert session.wpm == 22
    # 10 of 11 characters match
    assert session.accuracy == 91


def test_exact_typing_gives_full_accuracy(clock):
    session = TypingSession("exact", clock=clock)
    session.accept_key("e")
    clock.advance(3)
    type_text(session, "xact")

    assert session.accuracy == 100


def test_accuracy_ignores_corrected_mistakes(clock):
    session = TypingSession("abc", clock=clock)
    type_text(session, "x")
    session.accept_key("Backspace")
    clock.advance(1)
    type_text(session, "abc")

    assert session.accuracy == 100


def test_accuracy_in_range_for_all_wrong(clock):
    session = TypingSession("abc", clock=clock)
    session.accept_key("x")
    clock.advance(1)
    type_text(session, "yz")

    assert session.accuracy == 0


def test_compute_metrics_without_input_is_not_computed(clock):
    session = TypingSession("abc", clock=clock)

    assert session.compute_metrics() is None
    assert session.wpm == 0
    assert session.accuracy == 100


def test_zero_elapsed_time_gives_zero_wpm(clock):
    session = TypingSession("ab", clock=clock)
    type_text(session, "ab")

    assert session.completed is True
    assert session.wpm == 0
    assert session.accuracy == 100


def test_reset_keeps_target_and_restarts_timer(clock):
    session = TypingSession("abc", clock=clock)
    type_text(session, "abc")

    session.reset()
    assert session.target_text == "abc"
    assert session.typed_text == ""
    assert session.start_time is None
    assert session.completed is False
    assert (session.wpm, session.accuracy) == (0, 100)

    clock.advance(30)
    session.accept_key("a")
    assert session.start_time == 1030.0


def test_load_replaces_target_and_resets(clock):
    session = TypingSession("abc", clock=clock)
    type_text(session, "ab")

    session.load("new text")

    assert session.target_text == "new text"
    assert session.typed_text == ""
    assert session.state == IDLE


def test_progress_and_live_wpm(clock):
    session = TypingSession("abcdefghij", clock=clock)
    assert session.live_wpm() == 0

    session.accept_key("a")
    clock.advance(12)  # 0.2 minutes
    type_text(session, "bcde")

    assert session.progress == 50
    # 5 chars = 1 word over 0.2 minutes
    assert session.live_wpm() == 5


def test_classify_characters():
    assert classify_characters("abcd", "ax") == [CORRECT, INCORRECT, CURRENT, PENDING]


def test_classify_complete_has_no_cursor():
    assert classify_characters("ab", "ab") == [CORRECT, CORRECT]


def test_classify_untouched_text():
    assert classify_characters("ab", "") == [CURRENT, PENDING]
