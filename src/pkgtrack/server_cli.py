"""CLI entry point for the pkgtrack API server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="pkgtrack-server",
        description="pkgtrack API server — package review coordination registry",
    )
    parser.add_argument("--host", default=None, help="Bind host (default: PKGTRACK_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: PKGTRACK_PORT or 8080)")
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async URL, e.g. sqlite+aiosqlite:///pkgtrack.db",
    )
    args = parser.parse_args(argv)

    # Settings are read at import time, so overrides go through the environment
    if args.database_url:
        os.environ["PKGTRACK_DATABASE_URL"] = args.database_url

    import uvicorn

    from pkgtrack.config import Settings

    resolved = Settings()
    uvicorn.run(
        "pkgtrack.main:app",
        host=args.host or resolved.host,
        port=args.port or resolved.port,
    )


if __name__ == "__main__":
    main()
