"""Rext scaffold configuration.

Typed inputs for a single scaffold or teardown run. All settings use Pydantic
v2 models so they are validated at construction time and can be saved to and
restored from JSON when a run needs to be reproduced.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


DEFAULT_APP_NAME = "my-rext-app"

# Placeholder tokens replaced by the renderer, mapped to the config field
# that supplies the value.
PLACEHOLDERS: dict[str, str] = {
    "{app_name}": "app_name",
}


class Module(str, Enum):
    """A named group of catalog entries that are generated together."""

    CORE = "core"
    ADMIN = "admin"
    VUE = "vue"
    QUEUE = "queue"
    EMAIL = "email"


class DestroyStrategy(str, Enum):
    """Where destroy gets its picture of what generation created.

    ``FIXED`` checks against the hardcoded minimal scaffold layout.
    ``CATALOG`` derives the layout from the catalog entries of the selected
    modules, so non-default module combinations are reversed as well.
    """

    FIXED = "fixed"
    CATALOG = "catalog"


class GenerationConfig(BaseModel):
    """What to generate: the app name to substitute and the modules to include."""

    app_name: str = Field(
        default=DEFAULT_APP_NAME,
        description="Application name substituted for {app_name} in templates",
    )
    modules: set[Module] = Field(
        default_factory=lambda: {Module.CORE},
        description="Only catalog entries from these modules are generated",
    )

    def placeholder_values(self) -> dict[str, str]:
        """Return the ``{token: value}`` mapping used for substitution."""
        return {token: str(getattr(self, field)) for token, field in PLACEHOLDERS.items()}

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path the file was written to.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GenerationConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
