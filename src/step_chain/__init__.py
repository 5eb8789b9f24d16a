from . import helpers  # noqa: F401 - registers the built-in fluent extensions
from .case import FunctionalTestCase, TestBatch
from .config import BatchDefaults, ConfigError, load_batch_defaults
from .kernel import (
    ConstructionError,
    DuplicateExtensionError,
    ElementNotFoundError,
    LeafStep,
    ScenarioRunner,
    Sequence,
    Step,
    StepError,
    StepRuntime,
    WaitTimeoutError,
    current_scope,
    extension,
)

# Batch is the historical name for a Sequence.
Batch = Sequence

__all__ = [
    "Batch",
    "BatchDefaults",
    "ConfigError",
    "ConstructionError",
    "DuplicateExtensionError",
    "ElementNotFoundError",
    "FunctionalTestCase",
    "LeafStep",
    "ScenarioRunner",
    "Sequence",
    "Step",
    "StepError",
    "StepRuntime",
    "TestBatch",
    "WaitTimeoutError",
    "current_scope",
    "extension",
    "load_batch_defaults",
]
