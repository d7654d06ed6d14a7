"""Main application logic and entry points."""

import argparse
import curses
import logging
import sys

from wasabi import Printer

from .config import LOG_FILE, LOG_LEVEL, SERVICE_HOST, SERVICE_PORT, SERVICE_URL, ui
from .typing_practice import run_typing_practice

msg = Printer()


def main_app(stdscr):
    """Main application loop with menu interface."""
    ui.setup_screen(stdscr)
    ui.log("⌨️ Typing Master Started")
    if SERVICE_URL:
        ui.log(f"🌐 Using passage service at {SERVICE_URL}")
    ui.refresh_display()

    try:
        while True:
            choice = ui.show_menu("Main Menu", [
                "Typing Practice",
                "Exit"
            ])

            if choice == 0:
                run_typing_practice(ui)
            elif choice == 1 or choice == -1:
                ui.log("👋 Goodbye!")
                break

    except KeyboardInterrupt:
        ui.log("🛑 Interrupted by user.")


def setup_logging(to_file=False):
    # Anything written to stderr would corrupt the curses screen
    if to_file:
        logging.basicConfig(filename=LOG_FILE, level=LOG_LEVEL,
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=LOG_LEVEL,
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def run_service(host=SERVICE_HOST, port=SERVICE_PORT, debug=False):
    """Run the passage service (blocking)."""
    from .web import create_app

    setup_logging()
    msg.info(f"Starting passage service on http://{host}:{port}")
    msg.info("POST /api/fetch-text, GET /api/passage, GET /health")
    try:
        create_app().run(host=host, port=port, debug=debug)
    except OSError as e:
        msg.fail(f"Could not start passage service: {e}")
        sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(prog="typingmaster",
                                     description="Typing practice with live speed and accuracy")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="run the passage service")
    serve.add_argument("--host", default=SERVICE_HOST)
    serve.add_argument("--port", type=int, default=SERVICE_PORT)
    serve.add_argument("--debug", action="store_true")
    return parser


def main(argv=None):
    """Entry point function."""
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        run_service(host=args.host, port=args.port, debug=args.debug)
        return

    setup_logging(to_file=True)
    try:
        curses.wrapper(main_app)
    except Exception as e:
        logging.getLogger(__name__).exception("Fatal error")
        msg.fail(f"Fatal error: {e}")
        sys.exit(1)
    msg.good("Bye!")
