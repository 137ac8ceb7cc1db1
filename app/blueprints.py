"""Blueprint registration helpers."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Iterable

from flask import Blueprint, Flask

from common.logging import get_logger

PLUGIN_PACKAGE = "plugins"


def _plugin_root(package: str = PLUGIN_PACKAGE) -> Path:
    return Path(__file__).resolve().parent.parent / package


def iter_plugin_packages(package: str = PLUGIN_PACKAGE) -> Iterable[str]:
    """Yield dotted import paths of every plugin package."""

    module_path = _plugin_root(package)
    if not module_path.exists():
        return
    for module_info in pkgutil.iter_modules([str(module_path)]):
        if module_info.ispkg:
            yield f"{package}.{module_info.name}"


def _iter_blueprints(package: str = PLUGIN_PACKAGE) -> list[Blueprint]:
    blueprints: list[Blueprint] = []
    for dotted in iter_plugin_packages(package):
        module = importlib.import_module(f"{dotted}.api")
        module_blueprints = getattr(module, "blueprints", None)
        if module_blueprints:
            blueprints.extend(module_blueprints)
            continue
        blueprint = getattr(module, "bp", None)
        if blueprint is not None:
            blueprints.append(blueprint)
    return blueprints


def register_plugin_blueprints(app: Flask) -> None:
    logger = get_logger()
    for bp in _iter_blueprints():
        app.register_blueprint(bp)
        logger.debug("registered blueprint %s at %s", bp.name, bp.url_prefix)


__all__ = ["iter_plugin_packages", "register_plugin_blueprints"]
