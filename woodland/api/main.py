"""
Woodland engine API server entry point.

Run with:
    python -m woodland.api.main

Or with uvicorn directly:
    uvicorn woodland.api.main:get_app --factory --reload --port 8000
"""

import argparse
import logging
import os

import uvicorn

from ..config import load_config
from .server import create_app

CONFIG_DIR_ENV = "WOODLAND_CONFIG_DIR"


def get_app():
    """Factory function for creating the FastAPI app."""
    config_dir = os.environ.get(CONFIG_DIR_ENV, ".")
    return create_app(load_config(config_dir))


def main():
    """Main entry point for the Woodland engine API server."""
    parser = argparse.ArgumentParser(description="Woodland engine API server")
    parser.add_argument(
        "--config-dir",
        default=".",
        help="Directory holding .woodland_config.json (default: current directory)",
    )
    parser.add_argument("--host", help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, help="Port to bind to (overrides config)")
    parser.add_argument("--log-level", help="Log level (overrides config)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()
    config = load_config(args.config_dir)

    host = args.host or config["host"]
    port = args.port or config["port"]
    log_level = (args.log_level or config["log_level"]).upper()

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("woodland.api")
    logger.info("Starting Woodland engine API on %s:%d", host, port)

    os.environ[CONFIG_DIR_ENV] = args.config_dir

    uvicorn.run(
        "woodland.api.main:get_app",
        factory=True,
        host=host,
        port=port,
        reload=args.reload,
        log_level=log_level.lower(),
    )


if __name__ == "__main__":
    main()
