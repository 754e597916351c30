"""Casper node JSON-RPC transport over aiohttp."""
import itertools
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import NodeConfig
from ..errors import CasperRpcError

logger = logging.getLogger(__name__)

_request_ids = itertools.count(1)

# JSON-RPC 2.0 "Invalid Request", reused for malformed replies
INVALID_RESPONSE = -32600


class CasperNodeRpcClient:
    """Posts JSON-RPC 2.0 requests to a single Casper node endpoint.

    Network and HTTP errors raised by aiohttp propagate unchanged; an
    ``error`` member in the response raises :class:`CasperRpcError`.
    """

    def __init__(self, config: NodeConfig) -> None:
        self.rpc_url = config.rpc_url
        self.timeout = config.rpc_timeout
        self.headers = dict(config.headers)

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Make one RPC call and return its ``result`` member."""
        payload: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": next(_request_ids),
            "method": method,
        }
        if params is not None:
            payload["params"] = params

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        logger.debug("RPC call %s to %s", method, self.rpc_url)
        async with aiohttp.ClientSession(connector=connector, headers=self.headers) as session:
            async with session.post(
                self.rpc_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                response.raise_for_status()
                body = await response.json()

        if not isinstance(body, dict):
            raise CasperRpcError(INVALID_RESPONSE, "Invalid JSON-RPC response", body)

        error = body.get("error")
        # exactly one of "result" / "error" must be present
        if (error is not None) == ("result" in body) or (
            error is not None and not isinstance(error, dict)
        ):
            raise CasperRpcError(INVALID_RESPONSE, "Invalid JSON-RPC response", body)

        if error is not None:
            rpc_error = CasperRpcError.from_json(error)
            logger.debug("RPC call %s failed: %s", method, rpc_error)
            raise rpc_error

        return body["result"]
