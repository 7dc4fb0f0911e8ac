"""Declarative registration of the blueprint-backed feature modules.

A feature module exposes ``blueprint``, an optional ``module_metadata`` dict
and an optional ``setup_module(app)`` hook. The table at the bottom lists the
modules mounted by ``create_app``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    import_path: str
    attribute: str = "blueprint"
    url_prefix: Optional[str] = None

    def load(self) -> ModuleType:
        return import_string(self.import_path)

    def load_blueprint(self) -> Blueprint:
        blueprint = getattr(self.load(), self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(f"{self.import_path}.{self.attribute} is not a Flask Blueprint: {blueprint!r}")
        return blueprint

    def metadata(self) -> dict:
        return dict(getattr(self.load(), "module_metadata", None) or {})

    def resolved_prefix(self) -> Optional[str]:
        """Explicit prefix first, then the one the module advertises."""
        return self.url_prefix or self.metadata().get("url_prefix")

    def setup(self, app: Flask) -> None:
        hook = getattr(self.load(), "setup_module", None)
        if callable(hook):
            hook(app)


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Run each enabled module's setup hook, then mount its blueprint."""

    for module in modules:
        if not module.metadata().get("enabled", True):
            app.logger.info("Module %s is disabled; skipping", module.import_path)
            continue

        blueprint = module.load_blueprint()
        module.setup(app)
        prefix = module.resolved_prefix()
        app.register_blueprint(blueprint, url_prefix=prefix)
        app.logger.debug("Mounted %s at %s", module.import_path, prefix or "/")


def register_default_modules(app: Flask) -> None:
    register_modules(app, DEFAULT_MODULES)


DEFAULT_MODULES: Sequence[ModuleDefinition] = (
    ModuleDefinition("vocabreview_app.modules.quiz"),
    ModuleDefinition("vocabreview_app.modules.progress"),
)
