"""Template loading and placeholder substitution.

Template payloads ship inside the package under
``rext_scaffold/scaffolder/templates/`` and are located through a Jinja2
``FileSystemLoader``.  They are *not* evaluated as Jinja2 templates: the only
transformation is a literal, single-pass replacement of the known placeholder
tokens (currently just ``{app_name}``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from rext_scaffold.config import GenerationConfig
from rext_scaffold.errors import TemplateNotFoundError
from rext_scaffold.scaffolder.catalog import FileDescriptor


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Rendered output
# ---------------------------------------------------------------------------


@dataclass
class RenderedFile:
    """A catalog entry with its final content and resolved location."""

    absolute_path: Path
    directory_path: Path
    display_name: str
    content: str
    needs_directory: bool


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Loads bundled template payloads and fills in placeholders.

    Substitution scans the raw content once.  A value that itself contains a
    placeholder token is inserted verbatim and never expanded again.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir), encoding="utf-8"),
            keep_trailing_newline=True,
            autoescape=select_autoescape([]),
        )

    # -- Raw payloads ------------------------------------------------------

    def load_source(self, template_path: str) -> str:
        """Return the raw content of a bundled template.

        Raises:
            TemplateNotFoundError: If no template exists at *template_path*.
        """
        try:
            source, _filename, _uptodate = self.env.loader.get_source(self.env, template_path)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(template_path) from exc
        return source

    def list_templates(self) -> list[str]:
        """Return every bundled template path, sorted."""
        return sorted(self.env.list_templates())

    # -- Substitution ------------------------------------------------------

    def substitute(self, content: str, config: GenerationConfig) -> str:
        """Replace every placeholder token in *content* in a single pass."""
        values = config.placeholder_values()
        pattern = re.compile("|".join(re.escape(token) for token in values))
        return pattern.sub(lambda match: values[match.group(0)], content)

    def render(
        self,
        descriptor: FileDescriptor,
        config: GenerationConfig,
        base_dir: str | Path,
    ) -> RenderedFile:
        """Render one catalog entry for a project rooted at *base_dir*."""
        base = Path(base_dir)
        content = self.substitute(self.load_source(descriptor.content_source), config)
        return RenderedFile(
            absolute_path=descriptor.full_path(base),
            directory_path=descriptor.directory_path(base),
            display_name=descriptor.display_name,
            content=content,
            needs_directory=descriptor.needs_directory,
        )

    def render_all(
        self,
        descriptors: Iterable[FileDescriptor],
        config: GenerationConfig,
        base_dir: str | Path,
    ) -> list[RenderedFile]:
        """Render every descriptor in order."""
        return [self.render(d, config, base_dir) for d in descriptors]
