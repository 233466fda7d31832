"""
Main entry point for xapdesk.
Loads settings, configures logging and launches the control surface.
"""

import argparse
import sys

from xapdesk import __version__


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="xapdesk",
        description="Control surface for a remote HTTP mixing engine.",
    )
    parser.add_argument("--url", dest="base_url", help="engine base URL (default http://127.0.0.1:1337)")
    parser.add_argument("--device", dest="device_id", type=int, help="engine device id (default 0)")
    parser.add_argument("--poll-ms", dest="poll_interval_ms", type=int,
                        help="state poll interval in milliseconds (default 1000)")
    parser.add_argument("--timeout", dest="request_timeout_s", type=float,
                        help="per-request timeout in seconds (default 2.0)")
    parser.add_argument("--miss-limit", dest="poll_miss_limit", type=int,
                        help="missed polls before the connection counts as lost (default 3)")
    parser.add_argument("--discard-stale", dest="discard_stale_replies", action="store_true",
                        default=None, help="drop replies older than the last one applied")
    parser.add_argument("--log-level", default=None,
                        help="console log level: debug, info, warning, error")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args, settings):
    """Overlay command-line options on loaded settings. Raises ValueError if out of range."""
    return settings.with_overrides(
        base_url=args.base_url,
        device_id=args.device_id,
        poll_interval_ms=args.poll_interval_ms,
        request_timeout_s=args.request_timeout_s,
        poll_miss_limit=args.poll_miss_limit,
        discard_stale_replies=args.discard_stale_replies,
    )


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    # Initialize logger first
    from xapdesk.utils.logger import logger, parse_log_level
    from xapdesk.config import load_settings

    if args.log_level:
        logger.set_level(parse_log_level(args.log_level))
    if args.log_file:
        logger.enable_file_logging(args.log_file)

    try:
        settings = settings_from_args(args, load_settings())
    except ValueError as e:
        parser.error(str(e))

    logger.info("=" * 40, component="APP")
    logger.info(f"xapdesk {__version__} starting", component="APP")
    logger.info(f"Engine: {settings.base_url} (device {settings.device_id})", component="APP")
    logger.info(f"Poll every {settings.poll_interval_ms} ms, timeout {settings.request_timeout_s}s",
                component="APP")
    if settings.discard_stale_replies:
        logger.info("Stale replies are discarded", component="APP")
    logger.info("=" * 40, component="APP")

    from PyQt5.QtWidgets import QApplication
    from xapdesk.gui.main_frame import MainFrame

    app = QApplication(sys.argv[:1])
    window = MainFrame(settings)
    window.show()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
