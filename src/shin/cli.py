import argparse
import curses
import sys

from shin import __version__
from shin.app import Composer, run_composer
from shin.config import load_config
from shin.debug_log import DebugLogger
from shin.store import HistoryStoreError, open_history


def main(argv=None):
    p = argparse.ArgumentParser(
        description="Compose a shell command with history recall, run it, print its output"
    )
    p.add_argument("-v", "--version", action="version",
                   version=f"%(prog)s {__version__}")
    p.add_argument("-c", "--config", default="default",
                   help="Configuration name or path (searches the user config dir, ./configs/, or use full path)")
    p.add_argument("--history", default=None, metavar="PATH",
                   help="History database path (default: per-user data directory)")
    p.add_argument("-d", "--debug", action="store_true", default=False,
                   help="Enable debug logging to shin.log in current directory")
    args = p.parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        p.error(str(e))

    if args.history is not None:
        config.history.path = args.history

    # Without history there is nothing to compose against
    try:
        store = open_history(config.history.path)
    except HistoryStoreError as e:
        print(f"shin: {e}", file=sys.stderr)
        return 1

    logger = DebugLogger()
    if args.debug:
        logger.start()

    composer = Composer(store, config=config, logger=logger)
    try:
        surface = curses.wrapper(run_composer, composer)
    finally:
        logger.stop()
        store.close()

    for error in logger.errors:
        print(f"shin: {error}", file=sys.stderr)
    for text in surface.committed:
        sys.stdout.write(text)
    if surface.committed:
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
