"""Port: external tag-listing tool. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ToolRunner(Protocol):
    """Produces the raw tag listing (exiftool -listx XML)."""

    @property
    def available(self) -> bool: ...

    async def run(self) -> bytes:
        """Return the listing bytes; raise ToolExecutionError on failure.

        Cancelling the awaiting task must stop any process still running.
        """
        ...
