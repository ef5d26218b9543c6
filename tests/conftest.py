"""Pytest configuration for cipher_pipeline tests."""

import pytest

from cipher_pipeline import TRANSFORM_REGISTRY, Pipeline, create_transform
from cipher_pipeline.settings import apply_overrides


@pytest.fixture
def restore_registry():
    """Undo any registrations a test makes (plugins, throwaway transforms)."""
    saved = dict(TRANSFORM_REGISTRY)
    yield TRANSFORM_REGISTRY
    TRANSFORM_REGISTRY.clear()
    TRANSFORM_REGISTRY.update(saved)


@pytest.fixture
def pipeline():
    return Pipeline()


@pytest.fixture
def make_stage():
    """Create a transform and apply textual settings, failing on bad ones."""
    def _make(name, **settings):
        stage = create_transform(name)
        assert stage is not None, name
        editor = apply_overrides(stage, {k: str(v) for k, v in settings.items()})
        assert editor.errors == []
        assert editor.unused() == []
        return stage
    return _make
