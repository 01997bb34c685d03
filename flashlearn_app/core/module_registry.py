"""Declarative registration of the blueprint-backed FlashLearn modules.

A module package exposes a blueprint, an optional ``module_metadata`` dict
and an optional ``setup_module(app)`` hook that imports its routes and
connects its signal receivers. Modules whose metadata says
``'enabled': False`` are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Dict, List, Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Where a module lives and where its blueprint is mounted."""

    import_path: str
    attribute: str
    url_prefix: Optional[str] = None
    version: str = "1.0"

    def import_module(self) -> ModuleType:
        return import_string(self.import_path)

    def metadata(self) -> Dict[str, Any]:
        return dict(getattr(self.import_module(), "module_metadata", None) or {})

    def is_enabled(self) -> bool:
        return bool(self.metadata().get("enabled", True))

    def setup(self, app: Flask) -> None:
        """Run ``setup_module(app)`` if the package defines one."""
        hook = getattr(self.import_module(), "setup_module", None)
        if callable(hook):
            hook(app)

    def load_blueprint(self) -> Blueprint:
        blueprint = getattr(self.import_module(), self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                f"{self.import_path}.{self.attribute} should be a Flask Blueprint, "
                f"got {type(blueprint).__name__}"
            )
        return blueprint


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> List[ModuleDefinition]:
    """Set up and mount each enabled module. Returns the ones registered."""

    registered = []
    for module in modules:
        name = module.metadata().get("name", module.import_path)
        if not module.is_enabled():
            app.logger.info("Module %s is disabled, skipping", name)
            continue

        module.setup(app)
        app.register_blueprint(module.load_blueprint(), url_prefix=module.url_prefix)
        registered.append(module)
        app.logger.debug("Module %s v%s mounted at %s", name, module.version, module.url_prefix or "/")
    return registered


DEFAULT_MODULES: Sequence[ModuleDefinition] = (
    ModuleDefinition("flashlearn_app.modules.main", "main_bp", url_prefix="/api"),
    ModuleDefinition("flashlearn_app.modules.auth", "auth_bp", url_prefix="/api/auth"),
    ModuleDefinition("flashlearn_app.modules.cards", "cards_bp", url_prefix="/api/cards"),
)


def register_default_modules(app: Flask) -> List[ModuleDefinition]:
    return register_modules(app, DEFAULT_MODULES)
