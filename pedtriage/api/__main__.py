"""Start the PedTriage API with Uvicorn."""
from __future__ import annotations

import argparse
import sys

import uvicorn

from .core.config import settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the PedTriage FastAPI service")
    parser.add_argument("--host", default=settings.api_host, help="Bind address (API_HOST)")
    parser.add_argument("--port", type=int, default=settings.api_port, help="Bind port (API_PORT)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    uvicorn.run(
        "pedtriage.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
