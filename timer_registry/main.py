"""Command line entry point: serve the timer registry over HTTPS."""
import argparse
import sys

import uvicorn
from loguru import logger

from .api import create_app
from .config import settings


def setup_logging(level: str) -> None:
    """Replace loguru's default sink with one at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
            "<cyan>{extra[module]}</cyan> - <level>{message}</level>"
        ),
    )
    logger.configure(extra={"module": "main"})


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Timer registry service")
    parser.add_argument(
        "--host", default=settings.host,
        help="Hostname resolvable via DNS, or 'localhost'",
    )
    parser.add_argument("--port", type=int, default=settings.port, help="The https port")
    parser.add_argument("--certfile", default=settings.cert_file, help="Certificate file")
    parser.add_argument("--keyfile", default=settings.key_file, help="Key file")
    parser.add_argument(
        "--insecure", action="store_true",
        help="Serve plain HTTP without certificate and key",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(settings.log_level)

    if not args.host or (not args.insecure and (not args.certfile or not args.keyfile)):
        logger.critical(
            "One or more required fields missing: serverCertFile, serverKeyFile, hostname or port"
        )
        sys.exit(1)

    app = create_app(settings)
    scheme = "HTTP" if args.insecure else "HTTPS"
    logger.info(f"Starting {scheme} server on {args.host} and port {args.port}")

    ssl_options = {}
    if not args.insecure:
        ssl_options = {"ssl_certfile": args.certfile, "ssl_keyfile": args.keyfile}
    uvicorn.run(app, host=args.host, port=args.port, log_level="info", **ssl_options)


if __name__ == "__main__":
    main()
