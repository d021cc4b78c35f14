"""CLI entry point for the Signoff API server."""

import argparse
import os

from signoff.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="signoff-server",
        description="Signoff API server: multi-level monetary approvals",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: SQLite database with tables created at startup",
    )
    args = parser.parse_args(argv)

    if args.local:
        os.environ["SIGNOFF_LOCAL_MODE"] = "1"

    import uvicorn

    uvicorn.run("signoff.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
