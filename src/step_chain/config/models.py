from __future__ import annotations

from collections.abc import Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Millisecond defaults shared by a batch and every nested batch created from it.
DEFAULT_TIMEOUT_MS = 10000
DEFAULT_SHORT_WAIT_MS = 100
DEFAULT_POLL_MS = 200

_KEY_ALIASES = {"shortWait": "short_wait"}


class BatchDefaults(BaseModel):
    # Frozen value record: nested batches get a copy, never a live reference.
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    # upper bound for explicit waits
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    # pause after simulated input events
    short_wait: int = Field(
        default=DEFAULT_SHORT_WAIT_MS,
        gt=0,
        validation_alias=AliasChoices("short_wait", "shortWait"),
    )
    # polling interval for condition waits
    poll: int = Field(default=DEFAULT_POLL_MS, gt=0)

    def merged(self, overrides: Mapping[str, object] | None = None) -> BatchDefaults:
        # None means "inherit"; anything else wins over the current value.
        update = {_KEY_ALIASES.get(k, k): v for k, v in (overrides or {}).items() if v is not None}
        if not update:
            return self
        return BatchDefaults.model_validate({**self.model_dump(), **update})
