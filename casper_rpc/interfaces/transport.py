"""Transport protocol for JSON-RPC calls."""
from typing import Any, Protocol


class Transport(Protocol):
    """Issues one JSON-RPC call and returns the decoded ``result`` member."""

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any: ...
