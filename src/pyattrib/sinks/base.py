"""Backend sink contract.

A sink is a thin adapter over one external analytics or attribution
backend.  The dispatcher only relies on the structural interface below,
so hosts can plug in their own SDK bridges or test doubles.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BackendSink(Protocol):
    """Structural interface every sink implements."""

    name: str

    async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
        ...


@runtime_checkable
class ScreenViewSink(BackendSink, Protocol):
    """A sink with a dedicated screen-view call (Firebase-style)."""

    async def log_screen_view(self, screen_name: str, screen_class: str) -> None:
        ...
