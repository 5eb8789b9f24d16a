# Importing the helper modules registers the built-in fluent extensions.
from .interaction import best_effort, click, set_value, wait_and_click, wait_for_element
from .timing import DEFAULT_TIMEOUT_MESSAGE, debug, wait, wait_until

__all__ = [
    "best_effort",
    "click",
    "set_value",
    "wait_and_click",
    "wait_for_element",
    "DEFAULT_TIMEOUT_MESSAGE",
    "debug",
    "wait",
    "wait_until",
]
