from __future__ import annotations

import pytest
from pydantic import ValidationError

from step_chain.config.models import BatchDefaults


def test_builtin_defaults() -> None:
    defaults = BatchDefaults()
    assert (defaults.timeout, defaults.short_wait, defaults.poll) == (10000, 100, 200)


def test_short_wait_accepts_camel_case_alias() -> None:
    assert BatchDefaults.model_validate({"shortWait": 5}).short_wait == 5
    assert BatchDefaults(short_wait=7).short_wait == 7


def test_merged_returns_copy_with_overrides() -> None:
    base = BatchDefaults(timeout=3000)
    merged = base.merged({"poll": 50, "shortWait": 25, "timeout": None})
    assert merged == BatchDefaults(timeout=3000, short_wait=25, poll=50)
    assert base == BatchDefaults(timeout=3000)


def test_merged_without_overrides_is_same_value() -> None:
    base = BatchDefaults()
    assert base.merged(None) is base
    assert base.merged({}) is base


def test_defaults_are_frozen() -> None:
    with pytest.raises(ValidationError):
        BatchDefaults().timeout = 5  # type: ignore[misc]


def test_defaults_reject_unknown_and_non_positive_values() -> None:
    with pytest.raises(ValidationError):
        BatchDefaults.model_validate({"retries": 3})
    with pytest.raises(ValidationError):
        BatchDefaults(timeout=0)
    with pytest.raises(ValidationError):
        BatchDefaults().merged({"poll": -1})
