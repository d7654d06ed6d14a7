"""Configuration and UI classes."""

import os
import tempfile
import curses
from datetime import datetime

from .language_utils import display_width


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


# Configuration constants
USER_AGENT = os.getenv(
    "TYPING_MASTER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)
FETCH_TIMEOUT = _env_float("TYPING_MASTER_FETCH_TIMEOUT", None)  # None = no timeout
MAX_CANDIDATES = 5
MAX_PASSAGE_LENGTH = 300
MIN_SENTENCE_CUT = 200

DEFAULT_SOURCES = {
    "english": os.getenv("TYPING_MASTER_ENGLISH_URL", "https://www.foxnews.com/"),
    "japanese": os.getenv("TYPING_MASTER_JAPANESE_URL", "https://www3.nhk.or.jp/news/"),
}

SERVICE_URL = os.getenv("TYPING_MASTER_SERVICE_URL")  # e.g. http://127.0.0.1:5000
SERVICE_HOST = os.getenv("TYPING_MASTER_HOST", "127.0.0.1")
SERVICE_PORT = _env_int("TYPING_MASTER_PORT", 5000)

LOG_FILE = os.getenv(
    "TYPING_MASTER_LOG_FILE",
    os.path.join(tempfile.gettempdir(), "typingmaster.log"),
)
LOG_LEVEL = os.getenv("TYPING_MASTER_LOG_LEVEL", "INFO")


class NCursesUI:
    def __init__(self, log_file=None):
        self.stdscr = None
        self.height = 0
        self.width = 0
        self.log_lines = []
        self.status = "Ready"
        self.log_file = log_file
        self.scroll_offset = 0             # For scrolling through logs

    def init_colors(self):
        curses.start_color()
        curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLUE)    # Header
        curses.init_pair(2, curses.COLOR_GREEN, curses.COLOR_BLACK)   # Correct
        curses.init_pair(3, curses.COLOR_RED, curses.COLOR_BLACK)     # Incorrect
        curses.init_pair(4, curses.COLOR_BLACK, curses.COLOR_YELLOW)  # Next char
        curses.init_pair(5, curses.COLOR_CYAN, curses.COLOR_BLACK)    # Info
        curses.init_pair(6, curses.COLOR_BLACK, curses.COLOR_WHITE)   # Menu selection

    def setup_screen(self, stdscr):
        self.stdscr = stdscr
        self.height, self.width = stdscr.getmaxyx()
        curses.curs_set(0)  # Hide cursor
        stdscr.keypad(True)
        stdscr.leaveok(True)
        self.init_colors()
        stdscr.clear()

    def draw_header(self):
        title = "⌨️ Typing Master"
        self.stdscr.attron(curses.color_pair(1) | curses.A_BOLD)
        x = max(0, (self.width - display_width(title)) // 2)
        self.stdscr.addstr(0, x, title)
        self.stdscr.attroff(curses.color_pair(1) | curses.A_BOLD)

    def draw_status(self):
        visible_lines = self.height - 6
        total_lines = len(self.log_lines)
        if total_lines > visible_lines:
            scroll_info = f" | Scroll: {self.scroll_offset}/{max(0, total_lines - visible_lines)}"
        else:
            scroll_info = ""

        status_line = f"Status: {self.status}{scroll_info}"
        self.stdscr.move(self.height - 1, 0)
        self.stdscr.clrtoeol()
        self.stdscr.addstr(self.height - 1, 0, status_line[:self.width - 1])

    def draw_log_window(self, start_row=3, height=None):
        if height is None:
            height = self.height - 5

        self.stdscr.addstr(start_row - 1, 0, "┌" + "─" * (self.width - 2) + "┐")
        for i in range(height):
            self.stdscr.addstr(start_row + i, 0, "│" + " " * (self.width - 2) + "│")
        try:
            self.stdscr.addstr(start_row + height, 0, "└" + "─" * (self.width - 2) + "┘")
        except curses.error:
            pass  # Writing the bottom-right cell raises but still draws

        visible_lines = height - 1
        end = len(self.log_lines) - self.scroll_offset
        start = max(0, end - visible_lines)
        for i, line in enumerate(self.log_lines[start:end]):
            try:
                self.stdscr.addstr(start_row + i, 2, line[:self.width - 4])
            except curses.error:
                pass

    def log(self, message):
        timestamp = datetime.now().strftime("%H:%M:%S")
        formatted_message = f"[{timestamp}] {message}"

        self.log_lines.append(formatted_message)
        if len(self.log_lines) > 1000:  # Keep log manageable
            self.log_lines = self.log_lines[-500:]

        self.log_to_file_only(message)
        self.refresh_display()

    def log_to_file_only(self, message):
        """Log message only to file, not to ncurses display"""
        if not self.log_file:
            return
        timestamp = datetime.now().strftime("%H:%M:%S")
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"[{timestamp}] {message}\n")
        except OSError:
            pass  # Don't fail the UI if logging fails

    def set_status(self, status):
        self.status = status
        self.refresh_display()

    def refresh_display(self):
        if self.stdscr:
            self.height, self.width = self.stdscr.getmaxyx()
            self.draw_header()
            self.draw_log_window()
            self.draw_status()
            self.stdscr.refresh()

    def show_menu(self, title, options):
        max_visible_options = max(1, min(len(options), self.height - 8))
        menu_height = max_visible_options + 6  # Title + borders + instructions
        instructions = "↑↓: Navigate, Enter: Select, Esc: Back"
        menu_width = min(
            self.width,
            max(len(title), len(instructions), max(display_width(opt) for opt in options)) + 8,
        )
        start_y = max(0, (self.height - menu_height) // 2)
        start_x = max(0, (self.width - menu_width) // 2)

        menu_win = curses.newwin(menu_height, menu_width, start_y, start_x)
        menu_win.keypad(True)

        current = 0
        scroll_offset = 0

        def draw_menu():
            menu_win.clear()
            menu_win.box()

            menu_win.attron(curses.color_pair(1) | curses.A_BOLD)
            menu_win.addstr(1, max(1, (menu_width - len(title)) // 2), title[:menu_width - 2])
            menu_win.attroff(curses.color_pair(1) | curses.A_BOLD)

            for i in range(max_visible_options):
                option_index = scroll_offset + i
                if option_index >= len(options):
                    break

                y = 3 + i
                option = options[option_index][:menu_width - 6]
                if option_index == current:
                    menu_win.attron(curses.color_pair(6))
                    menu_win.addstr(y, 2, f"> {option}")
                    menu_win.attroff(curses.color_pair(6))
                else:
                    menu_win.addstr(y, 2, f"  {option}")

            menu_win.addstr(menu_height - 2, 2, instructions[:menu_width - 4])
            menu_win.refresh()

        draw_menu()

        while True:
            key = menu_win.getch()

            if key == curses.KEY_UP:
                current = (current - 1) % len(options)
            elif key == curses.KEY_DOWN:
                current = (current + 1) % len(options)
            elif key == 10 or key == 13:  # Enter
                self.refresh_display()
                return current
            elif key == 27:  # Escape
                self.refresh_display()
                return -1

            # Keep current selection visible
            if current < scroll_offset:
                scroll_offset = current
            elif current >= scroll_offset + max_visible_options:
                scroll_offset = current - max_visible_options + 1

            draw_menu()


# Global UI instance
ui = NCursesUI(log_file=LOG_FILE)
