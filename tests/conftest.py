"""Shared fixtures for the Angular client generator tests."""

from __future__ import annotations

import logging

import pytest

from ngcodegen.naming import TypeScriptNaming
from ngcodegen.postprocess import OperationAndModelPostProcessor
from ngcodegen.semver import resolve_features
from ngcodegen.type_resolver import SchemaTypeResolver


@pytest.fixture
def naming() -> TypeScriptNaming:
    return TypeScriptNaming()


@pytest.fixture
def resolver(naming) -> SchemaTypeResolver:
    return SchemaTypeResolver(model_namer=naming.to_model_name)


@pytest.fixture
def modern_processor(resolver, naming) -> OperationAndModelPostProcessor:
    """Post-processor for Angular 6 (HttpClient available)."""
    return OperationAndModelPostProcessor(resolve_features("6.0.0"), resolver, naming)


@pytest.fixture
def legacy_processor(resolver, naming) -> OperationAndModelPostProcessor:
    """Post-processor for Angular 4.0 (legacy Http client)."""
    return OperationAndModelPostProcessor(resolve_features("4.0.0"), resolver, naming)


@pytest.fixture
def gen_logger():
    """The ngcodegen root logger, restored after the test."""
    logger = logging.getLogger("ngcodegen")
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
