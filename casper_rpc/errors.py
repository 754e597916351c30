"""Errors raised by the Casper RPC client."""
from __future__ import annotations

from typing import Any


class CasperRpcError(RuntimeError):
    """JSON-RPC error object reported by the node."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(f"RPC Error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data

    @classmethod
    def from_json(cls, error: dict[str, Any]) -> CasperRpcError:
        return cls(
            code=int(error.get("code", 0)),
            message=str(error.get("message", "")),
            data=error.get("data"),
        )

    def __str__(self) -> str:
        if self.data:
            return f"code={self.code}, message={self.message}, data={self.data}"
        return f"code={self.code}, message={self.message}"
