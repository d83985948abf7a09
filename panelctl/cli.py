"""Command line entry point: start the panel and serve the HTTP interface."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from panelctl.errors import PanelError
from panelctl.panel import Panel
from panelctl.server import create_app
from panelctl.uart import Uart

log = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_HTTP_PORT = 80
DEFAULT_STORAGE_DIR = "panel-data"
DEFAULT_LOG_LEVEL = "INFO"


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the controller command."""
    parser = argparse.ArgumentParser(
        prog="panelctl",
        description="Drive an AM03127 LED panel over a serial line and serve an HTTP API for it.",
    )
    parser.add_argument("device", help="serial device the panel is connected to")
    parser.add_argument(
        "--storage-dir",
        default=DEFAULT_STORAGE_DIR,
        help=f"directory holding stored pages and schedules (default: {DEFAULT_STORAGE_DIR})",
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"address the HTTP server listens on (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_HTTP_PORT,
        help=f"port the HTTP server listens on (default: {DEFAULT_HTTP_PORT})",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"logging verbosity (default: {DEFAULT_LOG_LEVEL})",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Open the panel, replay stored content and serve HTTP until stopped."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        uart = Uart(args.device)
    except PanelError as exc:
        print(f"panelctl: cannot open {args.device}: {exc}", file=sys.stderr)
        return 1

    with Panel(uart, args.storage_dir) as panel:
        try:
            panel.init()
        except PanelError as exc:
            log.error("Failed to initialize panel: %s", exc)
            return 1
        app = create_app(panel)
        log.info("Serving on %s:%d", args.host, args.port)
        app.run(host=args.host, port=args.port, threaded=True)
    return 0