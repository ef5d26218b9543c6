"""Composable chains of classical ciphers, encodings and modern primitives."""

from .core import (
    CATEGORIES,
    TRANSFORM_REGISTRY,
    CatalogEntry,
    Transform,
    catalog,
    create_transform,
    load_plugins,
    register_transform,
    set_verbose,
)
from .pipeline import DEFAULT_SOURCE_TEXT, Evaluation, Pipeline
from .settings import ConfigEditor, Field, FieldRecorder, OverrideEditor, apply_overrides
from . import transforms

__version__ = "1.0.0"

__all__ = [
    "CATEGORIES",
    "TRANSFORM_REGISTRY",
    "CatalogEntry",
    "ConfigEditor",
    "DEFAULT_SOURCE_TEXT",
    "Evaluation",
    "Field",
    "FieldRecorder",
    "OverrideEditor",
    "Pipeline",
    "Transform",
    "apply_overrides",
    "catalog",
    "create_transform",
    "load_plugins",
    "register_transform",
    "set_verbose",
    "transforms",
]
