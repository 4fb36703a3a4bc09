"""Command line entry point: serve an application or list registrations."""

import argparse
import logging
import time
from typing import List, Optional

from robotsession.framework import Framework, get_framework
from robotsession.utils.loading import import_app

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rf-session",
        description="Serve applications through robotsession server backends.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        help="Log level (e.g., INFO, DEBUG).",
    )
    parser.add_argument(
        "--config",
        dest="config",
        help="YAML settings file applied before command line options.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Serve an application until interrupted.")
    serve.add_argument("app", help="Application reference as module:attribute.")
    serve.add_argument("--server", dest="server", help="Registered server name.")
    serve.add_argument("--host", dest="host", help="Interface to bind.")
    serve.add_argument("--port", dest="port", type=int, help="Port to listen on.")

    subparsers.add_parser("list", help="List registered drivers and servers.")
    return parser


def _serve(framework: Framework, args: argparse.Namespace) -> int:
    app = import_app(args.app)
    if args.server:
        framework.config.set_server(args.server)
    handle = framework.start_server(app, port=args.port, host=args.host)
    print(f"Serving {args.app} at {handle.url} (press Ctrl+C to stop)")
    try:
        while handle.is_running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        handle.stop()
    return 0


def _list(framework: Framework) -> int:
    print("Drivers:")
    for name in framework.drivers.names():
        print(f"  {name}")
    print("Servers:")
    for name in framework.servers.names():
        marker = " (selected)" if name == framework.config.server_name else ""
        print(f"  {name}{marker}")
    return 0


def main(argv: Optional[List[str]] = None, framework: Optional[Framework] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    framework = framework or get_framework()
    framework.apply_env()
    if args.config:
        framework.load_settings(args.config)

    if args.command == "serve":
        return _serve(framework, args)
    return _list(framework)


if __name__ == "__main__":
    raise SystemExit(main())
