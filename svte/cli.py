"""Command-line entry point."""

import argparse
import logging as py_logging
import sys

from svte import __version__
from svte.config import load_config
from svte.errors import ExitCode, SvteError, user_facing_error
from svte.logging import configure_logging

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _log_level_type(value):
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser():
    parser = argparse.ArgumentParser(
        prog="svte",
        description="A small tabbed terminal built on GTK 3 and VTE.",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="run the self-check and exit (0 when every check passes)",
    )
    parser.add_argument("--version", action="version", version=f"svte {__version__}")
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", default=None)
    return parser


def _load_toolkit():
    try:
        from svte import window
    except (ImportError, ValueError) as exc:
        raise SvteError(
            f"cannot load GTK/VTE: {exc}",
            code=ExitCode.TOOLKIT_ERROR,
            hint="install PyGObject with the Gtk 3.0 and Vte 2.91 typelibs",
        ) from exc
    return window


def launch_gui(config):
    window = _load_toolkit()
    return window.run(config)


def run_self_check(config):
    from svte.selfcheck import CheckResult, SelfCheckRunner, print_report

    try:
        window = _load_toolkit()
    except SvteError as exc:
        py_logging.getLogger(__name__).debug("Toolkit unavailable", exc_info=True)
        return print_report([CheckResult("toolkit versions", False, exc.message)])
    runner = SelfCheckRunner(window.GdkKeys, window.toolkit_versions, window.to_rgba, config)
    return runner.report()


def main(argv=None, gui_launcher=None, self_check=None):
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    logger = configure_logging(level=namespace.log_level, log_file=namespace.log_file)

    try:
        config = load_config()
        if namespace.test:
            logger.debug("Running self-check")
            return int((self_check or run_self_check)(config))
        logger.debug("Starting GUI")
        result = (gui_launcher or launch_gui)(config)
        return int(result or 0)
    except SvteError as exc:
        logger.error(
            "Handled SvteError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
