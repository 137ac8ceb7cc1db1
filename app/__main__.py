"""Run the Graph Studio development server: ``python -m app``."""

from __future__ import annotations

import argparse
import os

from common.logging import get_logger

from . import create_app

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5001


def _resolve_port(value: str | None) -> int:
    if not value:
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid port '{value}'. Set GRAPH_STUDIO_PORT to a number.") from exc
    if not 0 < port < 65536:
        raise SystemExit(f"Port {port} is out of range.")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Graph Studio development server")
    parser.add_argument("--host", default=os.getenv("GRAPH_STUDIO_HOST", DEFAULT_HOST))
    parser.add_argument("--port", default=os.getenv("GRAPH_STUDIO_PORT") or os.getenv("PORT"))
    parser.add_argument("--config", default=None, help="Config class name, e.g. TestingConfig")
    parser.add_argument("--debug", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    port = _resolve_port(args.port)
    app = create_app(args.config)
    logger = get_logger()
    for manifest in app.config["PLUGIN_MANIFESTS"]:
        logger.info("plugin %s mounted at /api/%s", manifest["title"], manifest["blueprint"])
    limits = app.config["PLUGIN_SETTINGS"].get("graph_studio", {}).get("limits", {})
    if limits:
        logger.info("resolution limits from config.yml: %s", ", ".join(sorted(limits)))
    app.run(host=args.host, port=port, debug=args.debug)


if __name__ == "__main__":
    main()
