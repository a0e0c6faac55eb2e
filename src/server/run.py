"""CLI entry point for launching the FastAPI app with uvicorn."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from src.todo_api.config import Config
from src.todo_api.logger import setup_logger

from .app import create_app
from .dependencies import build_app_context


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Todo API server.")
    parser.add_argument("--config", type=Path, help="Path to app_config.yaml")
    parser.add_argument("--host", help="Bind address (default: from config)")
    parser.add_argument("--port", type=int, help="Port (default: from config)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run the server."""
    args = parse_args(argv)
    config = Config.from_yaml(args.config)
    setup_logger(log_level=config.log_level, log_file=config.log_file)

    app = create_app(build_app_context(config))
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )


if __name__ == "__main__":
    main()
