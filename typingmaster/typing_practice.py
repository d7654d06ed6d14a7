#!/usr/bin/env python3
"""
Typing Practice Interface for Typing Master
Renders the passage with per-character feedback and live stats.
"""

import curses

from .language_utils import display_width, get_language_code
from .passages import load_news_passage, random_passage
from .session import CORRECT, CURRENT, INCORRECT, TypingSession

CTRL_N = "\x0e"
CTRL_R = "\x12"
ESCAPE = "\x1b"

HELP_TEXT = "Type the text above. Backspace: delete, Ctrl+R: reset, Ctrl+N: new text, Esc: back"


def layout_positions(text, max_width):
    """Map every character of text to a (line, column) cell.

    Words move to the next line when they would not fit. Text without
    spaces (Japanese) wraps per character. Wide characters take two cells.
    """
    positions = []
    line, x = 0, 0
    for index, char in enumerate(text):
        if char != " " and (index == 0 or text[index - 1] == " "):
            end = text.find(" ", index)
            word = text[index:] if end == -1 else text[index:end]
            if x > 0 and x + display_width(word) > max_width and display_width(word) <= max_width:
                line, x = line + 1, 0

        char_width = max(1, display_width(char))
        if x + char_width > max_width:
            line, x = line + 1, 0
        positions.append((line, x))
        x += char_width
    return positions


class TypingPracticeInterface:
    """Typing practice screen with real-time feedback"""

    def __init__(self, title, text, language, ui, next_passage=None):
        self.title = title
        self.ui = ui
        self.language = language
        self.session = TypingSession(text)
        self.next_passage = next_passage or (lambda: (random_passage(language), None))
        self.notice = ""
        self.text_scroll_offset = 0

    def load_new_passage(self, stdscr):
        self.notice = "⏳ Loading new text..."
        self.draw_screen(stdscr)
        stdscr.refresh()

        text, warning = self.next_passage()
        self.session.load(text)
        self.text_scroll_offset = 0
        self.notice = f"⚠️ {warning}" if warning else ""

    def draw_stats(self, stdscr, width):
        session = self.session
        stats = (f"Speed: {session.live_wpm()} WPM  |  "
                 f"Accuracy: {session.accuracy}%  |  "
                 f"Progress: {len(session.typed_text)}/{len(session.target_text)} "
                 f"({session.progress}%)")
        try:
            header = f"Typing Practice ({get_language_code(self.language)}) - {self.title}"
            stdscr.addstr(0, 1, header[:width - 2], curses.A_BOLD)
            stdscr.addstr(1, 1, stats[:width - 2], curses.color_pair(5))
        except curses.error:
            pass

    def draw_text_area(self, stdscr, top, height, width):
        """Draw the passage with per-character colors, scrolling to keep the cursor visible"""
        text = self.session.target_text
        max_width = width - 4
        positions = layout_positions(text, max_width)
        classes = self.session.classify()

        cursor = min(len(self.session.typed_text), len(text) - 1) if text else 0
        cursor_line = positions[cursor][0] if positions else 0
        if cursor_line >= self.text_scroll_offset + height:
            self.text_scroll_offset = cursor_line - height + 1
        elif cursor_line < self.text_scroll_offset:
            self.text_scroll_offset = cursor_line

        for index, char in enumerate(text):
            line, x = positions[index]
            row = line - self.text_scroll_offset
            if row < 0 or row >= height:
                continue

            kind = classes[index]
            if kind == CORRECT:
                attr = curses.color_pair(2) | curses.A_BOLD
            elif kind == INCORRECT:
                attr = curses.color_pair(3) | curses.A_BOLD | curses.A_UNDERLINE
            elif kind == CURRENT:
                attr = curses.color_pair(4)
            else:
                attr = curses.A_DIM
            try:
                stdscr.addstr(top + row, 2 + x, char, attr)
            except curses.error:
                pass

    def draw_footer(self, stdscr, height, width):
        session = self.session
        lines = []
        if session.completed:
            lines.append(f"🎉 Excellent completion! Speed: {session.wpm} WPM • Accuracy: {session.accuracy}%")
            lines.append("Ctrl+R: try again, Ctrl+N: new text, Esc: back")
        else:
            lines.append(HELP_TEXT)
        if self.notice:
            lines.append(self.notice)

        for i, line in enumerate(lines):
            try:
                stdscr.addstr(height - len(lines) + i, 1, line[:width - 2])
            except curses.error:
                pass

    def draw_screen(self, stdscr):
        height, width = stdscr.getmaxyx()
        stdscr.erase()
        self.draw_stats(stdscr, width)
        try:
            stdscr.addstr(2, 0, "─" * (width - 1))
        except curses.error:
            pass
        self.draw_text_area(stdscr, top=3, height=max(1, height - 7), width=width)
        self.draw_footer(stdscr, height, width)
        stdscr.refresh()

    def handle_key(self, key, stdscr):
        """Handle one key. Returns False when the user leaves the screen."""
        if key in (ESCAPE, 27):
            return False
        if key == curses.KEY_RESIZE:
            return True
        if key == CTRL_R:
            self.session.reset()
            self.notice = ""
        elif key == CTRL_N:
            self.load_new_passage(stdscr)
        else:
            was_complete = self.session.completed
            self.session.accept_key(key)
            if self.session.completed and not was_complete:
                self.ui.log_to_file_only(
                    f"🏁 {self.title}: {self.session.wpm} WPM, {self.session.accuracy}% accuracy")
        return True

    def run(self):
        """Main typing practice loop"""
        stdscr = self.ui.stdscr
        stdscr.clear()
        stdscr.timeout(250)  # Redraw periodically so live WPM keeps moving

        try:
            while True:
                self.draw_screen(stdscr)
                try:
                    key = stdscr.get_wch()
                except curses.error:
                    continue  # No input (timeout)
                if not self.handle_key(key, stdscr):
                    break
        except KeyboardInterrupt:
            pass
        finally:
            stdscr.timeout(-1)
            stdscr.clear()
            stdscr.refresh()

        return self.session


def run_typing_practice(ui):
    """Main entry point for typing practice"""
    ui.log("📝 Starting typing practice...")

    language_names = ["English", "Japanese"]
    selected_lang_index = ui.show_menu("Select Language:", language_names)
    if selected_lang_index == -1:
        ui.log("❌ No language selected")
        return
    language = language_names[selected_lang_index].lower()

    source_options = [
        "Built-in passages",
        "News passages (fetched from the web)",
    ]
    selected_source_index = ui.show_menu("Select Text Source:", source_options)
    if selected_source_index == -1:
        ui.log("❌ No text source selected")
        return
    use_news = selected_source_index == 1

    def next_passage():
        if not use_news:
            return random_passage(language), None

        ui.set_status(f"Fetching {language} text...")
        text, warning = load_news_passage(language)
        if warning:
            ui.log(f"⚠️ {warning}")
        else:
            ui.log("📰 Loaded passage from news page")
        ui.set_status("Ready")
        return text, warning

    text, warning = next_passage()
    title = "News" if use_news and not warning else "Built-in"

    practice = TypingPracticeInterface(
        title=title,
        text=text,
        language=language,
        ui=ui,
        next_passage=next_passage,
    )
    if warning:
        practice.notice = f"⚠️ {warning}"

    session = practice.run()
    if session.completed:
        ui.log(f"🏆 Finished: {session.wpm} WPM, {session.accuracy}% accuracy")
    else:
        ui.log("👋 Left typing practice")
    ui.refresh_display()
