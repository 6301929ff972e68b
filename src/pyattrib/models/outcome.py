"""Per-sink dispatch outcomes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SinkOutcome(BaseModel):
    """Result of delivering one event to one sink."""

    model_config = ConfigDict(frozen=True)

    sink: str
    ok: bool
    error: str | None = None


class DispatchResult(BaseModel):
    """Outcome of one dispatch across every registered sink."""

    model_config = ConfigDict(frozen=True)

    event: str
    params: dict[str, Any] = Field(default_factory=dict)
    outcomes: dict[str, SinkOutcome] = Field(default_factory=dict)

    @property
    def succeeded(self) -> list[str]:
        return [name for name, outcome in self.outcomes.items() if outcome.ok]

    @property
    def failed(self) -> list[str]:
        return [name for name, outcome in self.outcomes.items() if not outcome.ok]

    @property
    def all_ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes.values())
