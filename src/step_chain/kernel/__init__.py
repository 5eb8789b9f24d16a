from .adapter import Body, Done, wrap_async, wrap_sync
from .errors import ConstructionError, DuplicateExtensionError, ElementNotFoundError, StepError, WaitTimeoutError
from .extensions import EXTENSIONS, ExtensionRegistry, UnknownExtensionError, extension
from .runner import ScenarioRunner, format_failure
from .runtime import StepRuntime
from .scope import current_scope
from .sequence import Sequence
from .step import DEFAULT_STEP_MS, LeafStep, Step

__all__ = [
    "Body",
    "Done",
    "wrap_async",
    "wrap_sync",
    "ConstructionError",
    "DuplicateExtensionError",
    "ElementNotFoundError",
    "StepError",
    "WaitTimeoutError",
    "EXTENSIONS",
    "ExtensionRegistry",
    "UnknownExtensionError",
    "extension",
    "ScenarioRunner",
    "format_failure",
    "StepRuntime",
    "current_scope",
    "Sequence",
    "DEFAULT_STEP_MS",
    "LeafStep",
    "Step",
]
