"""Feature modules and how they are mounted on the app.

Every package under ``vocabpractice_app.modules`` exposes a blueprint and a
``module_metadata`` dict in its ``__init__``; its ``routes`` submodule
attaches the views. The metadata decides the URL prefix and whether the
module is mounted at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string

MODULES_PACKAGE = "vocabpractice_app.modules"


@dataclass(frozen=True)
class ModuleDefinition:
    """One feature module: its package name and the blueprint it exports."""

    name: str
    blueprint_attr: str

    @property
    def package(self) -> str:
        return f"{MODULES_PACKAGE}.{self.name}"

    @property
    def metadata(self) -> dict:
        return getattr(import_string(self.package), "module_metadata", {})

    @property
    def enabled(self) -> bool:
        return bool(self.metadata.get("enabled", True))

    @property
    def url_prefix(self) -> Optional[str]:
        return self.metadata.get("url_prefix")

    def load_blueprint(self) -> Blueprint:
        """Import the routes (so views are attached) and return the blueprint."""

        routes = import_string(f"{self.package}.routes")
        blueprint = getattr(routes, self.blueprint_attr, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(f"{self.package}.routes.{self.blueprint_attr} is not a Blueprint")
        return blueprint


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Mount every enabled module on ``app``."""

    for module in modules:
        if not module.enabled:
            app.logger.info("Module %s is disabled, skipping", module.name)
            continue
        app.register_blueprint(module.load_blueprint(), url_prefix=module.url_prefix)
        app.logger.debug("Mounted module %s at %s", module.name, module.url_prefix or "/")


def register_default_modules(app: Flask) -> None:
    register_modules(app, DEFAULT_MODULES)


DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("landing", "landing_bp"),
    ModuleDefinition("auth", "auth_bp"),
    ModuleDefinition("practice", "practice_bp"),
    ModuleDefinition("word_sets", "word_sets_bp"),
    ModuleDefinition("api", "api_bp"),
)
