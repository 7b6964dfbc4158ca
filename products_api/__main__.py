"""
CLI entry point.

Usage:
    python -m products_api serve --port 3000
"""

import argparse
import logging

import uvicorn

from products_api.core.config import settings

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API under uvicorn.

    Startup completes only after a required database is reachable; on
    SIGINT/SIGTERM in-flight requests get ``shutdown_grace_seconds``.
    """
    logger.info("Starting %s at http://%s:%d", settings.project_name, args.host, args.port)
    uvicorn.run(
        "products_api.main:app",
        host=args.host,
        port=args.port,
        reload=False,
        log_config=None,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Products API")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
