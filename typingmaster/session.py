"""Typing session state machine: keystroke scoring, timing and metrics."""

import curses
import logging
import time

logger = logging.getLogger(__name__)

IDLE = "idle"
ACTIVE = "active"
COMPLETE = "complete"

# Per-character render classes
CORRECT = "correct"
INCORRECT = "incorrect"
CURRENT = "current"
PENDING = "pending"

DELETE_KEYS = ("Backspace", "\x7f", "\b", curses.KEY_BACKSPACE, 127, 8)

DEFAULT_WPM = 0
DEFAULT_ACCURACY = 100


def is_delete_key(key):
    return key in DELETE_KEYS


def key_to_char(key):
    """Return the printable character a key represents, or None.

    Accepts either a string (browser-style key names such as "a" or
    "Shift") or an integer key code as returned by curses getch().
    """
    if isinstance(key, int):
        if key < 0 or key >= curses.KEY_MIN or key in DELETE_KEYS:
            return None
        try:
            key = chr(key)
        except (ValueError, OverflowError):
            return None
    if not isinstance(key, str) or len(key) != 1:
        return None
    if not key.isprintable():
        return None
    return key


def count_correct_characters(target_text, typed_text):
    return sum(1 for typed, expected in zip(typed_text, target_text) if typed == expected)


def classify_characters(target_text, typed_text):
    """Classify every position of the target text for rendering.

    Positions already typed are CORRECT or INCORRECT, the position at the
    cursor is CURRENT and everything after it is PENDING.
    """
    typed_length = len(typed_text)
    classes = []
    for index, expected in enumerate(target_text):
        if index < typed_length:
            classes.append(CORRECT if typed_text[index] == expected else INCORRECT)
        elif index == typed_length:
            classes.append(CURRENT)
        else:
            classes.append(PENDING)
    return classes


class TypingSession:
    """Tracks one attempt at typing a passage."""

    def __init__(self, target_text, clock=time.time):
        self.target_text = target_text
        self.clock = clock
        self.typed_text = ""
        self.start_time = None
        self.completed = False
        self.wpm = DEFAULT_WPM
        self.accuracy = DEFAULT_ACCURACY

    @property
    def state(self):
        if self.completed:
            return COMPLETE
        if self.start_time is None:
            return IDLE
        return ACTIVE

    @property
    def progress(self):
        """Percentage of the target text typed so far"""
        if not self.target_text:
            return 100
        return round(len(self.typed_text) / len(self.target_text) * 100)

    def accept_key(self, key):
        """Apply one keystroke. Returns True if the typed text changed."""
        if self.completed:
            return False

        if self.start_time is None:
            self.start_time = self.clock()

        changed = False
        if is_delete_key(key):
            if self.typed_text:
                self.typed_text = self.typed_text[:-1]
                changed = True
        else:
            char = key_to_char(key)
            if char is not None and len(self.typed_text) < len(self.target_text):
                self.typed_text += char
                changed = True

        if changed and len(self.typed_text) == len(self.target_text):
            self.completed = True
            self.compute_metrics()
            logger.info("Session complete: %s WPM, %s%% accuracy", self.wpm, self.accuracy)

        return changed

    def _elapsed_minutes(self):
        return (self.clock() - self.start_time) / 60

    def compute_metrics(self):
        """Compute final WPM and accuracy.

        Returns (wpm, accuracy), or None when nothing has been typed yet, in
        which case the stored metrics are left at their current values.
        """
        if not self.typed_text or self.start_time is None:
            return None

        elapsed_minutes = self._elapsed_minutes()
        words_typed = len(self.target_text) / 5
        if elapsed_minutes > 0:
            self.wpm = round(words_typed / elapsed_minutes)
        else:
            self.wpm = 0

        correct = count_correct_characters(self.target_text, self.typed_text)
        self.accuracy = round(correct / len(self.typed_text) * 100)
        return self.wpm, self.accuracy

    def live_wpm(self):
        """WPM based on characters typed so far, for the stats bar while active"""
        if self.completed:
            return self.wpm
        if self.start_time is None or not self.typed_text:
            return DEFAULT_WPM
        elapsed_minutes = self._elapsed_minutes()
        if elapsed_minutes <= 0:
            return DEFAULT_WPM
        return round((len(self.typed_text) / 5) / elapsed_minutes)

    def classify(self):
        return classify_characters(self.target_text, self.typed_text)

    def reset(self):
        """Start the same passage over"""
        self.typed_text = ""
        self.start_time = None
        self.completed = False
        self.wpm = DEFAULT_WPM
        self.accuracy = DEFAULT_ACCURACY

    def load(self, target_text):
        """Switch to a new passage"""
        self.target_text = target_text
        self.reset()
