"""Local launch/sign-up flags.

The flag store belongs to the host app (typically its key-value storage).
Only the protocol is consumed here; :class:`InMemoryFlagStore` is provided
for hosts without persistence and for tests.
"""

from __future__ import annotations

from typing import Protocol

FIRST_LAUNCH_KEY = "first_launch"
USER_SIGNED_UP_KEY = "user_signed_up"


class FlagStore(Protocol):
    async def is_first_launch(self) -> bool:
        ...

    async def mark_app_launched(self) -> None:
        ...

    async def is_user_signed_up(self) -> bool:
        ...

    async def mark_user_signed_up(self) -> None:
        ...

    async def clear_all(self) -> None:
        ...


class InMemoryFlagStore:
    """Process-local :class:`FlagStore`; flags are lost on restart."""

    def __init__(self) -> None:
        self._flags: dict[str, bool] = {}

    async def is_first_launch(self) -> bool:
        return FIRST_LAUNCH_KEY not in self._flags

    async def mark_app_launched(self) -> None:
        self._flags[FIRST_LAUNCH_KEY] = True

    async def is_user_signed_up(self) -> bool:
        return self._flags.get(USER_SIGNED_UP_KEY, False)

    async def mark_user_signed_up(self) -> None:
        self._flags[USER_SIGNED_UP_KEY] = True

    async def clear_all(self) -> None:
        self._flags.clear()
