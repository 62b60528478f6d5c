"""Rext scaffolder -- generates and destroys Rext application trees.

Quick usage::

    from rext_scaffold.config import GenerationConfig, Module
    from rext_scaffold.scaffolder import ProjectGenerator

    config = GenerationConfig(app_name="blog", modules={Module.CORE})
    generator = ProjectGenerator(config, "/tmp/blog")
    generator.generate()
    ...
    generator.destroy()
"""

from rext_scaffold.scaffolder.catalog import (
    FileDescriptor,
    FileIdentity,
    catalog,
    get_descriptor,
    select,
)
from rext_scaffold.scaffolder.destroyer import (
    MINIMAL_LAYOUT,
    DirectoryExpectation,
    ProjectLayout,
    destroy,
    layout_from_catalog,
)
from rext_scaffold.scaffolder.generator import ProjectGenerator
from rext_scaffold.scaffolder.guard import check
from rext_scaffold.scaffolder.materializer import materialize
from rext_scaffold.scaffolder.templates import RenderedFile, TemplateRenderer

__all__ = [
    "MINIMAL_LAYOUT",
    "DirectoryExpectation",
    "FileDescriptor",
    "FileIdentity",
    "ProjectGenerator",
    "ProjectLayout",
    "RenderedFile",
    "TemplateRenderer",
    "catalog",
    "check",
    "destroy",
    "get_descriptor",
    "layout_from_catalog",
    "materialize",
    "select",
]
