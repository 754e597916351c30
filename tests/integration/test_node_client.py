"""Integration tests for the node transport and the client on top of it."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from casper_rpc.client import CasperClient
from casper_rpc.config import NodeConfig
from casper_rpc.errors import CasperRpcError
from casper_rpc.models import Uref
from casper_rpc.rpc.node_client import CasperNodeRpcClient

UREF_STR = "uref-" + "ab" * 32 + "-007"


@pytest.fixture()
def transport(sample_node_config: NodeConfig) -> CasperNodeRpcClient:
    return CasperNodeRpcClient(sample_node_config)


def _mock_response(response_data: dict | None = None, status_error: Exception | None = None):
    mock_response = AsyncMock()
    mock_response.json = AsyncMock(return_value=response_data or {})
    mock_response.raise_for_status = MagicMock(side_effect=status_error)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)
    return mock_response


def _mock_session(*responses, error: Exception | None = None):
    """Create a mock aiohttp session returning the given responses in order."""
    mock_session = AsyncMock()
    if error:
        mock_session.post = MagicMock(side_effect=error)
    else:
        mock_session.post = MagicMock(side_effect=list(responses))
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    return mock_session


class TestCall:
    @pytest.mark.asyncio
    async def test_successful_call(self, transport: CasperNodeRpcClient) -> None:
        mock_session = _mock_session(
            _mock_response({"jsonrpc": "2.0", "id": 1, "result": {"api_version": "1.5.6"}})
        )

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session) as session_cls:
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                result = await transport.call("info_get_status")

        assert result == {"api_version": "1.5.6"}
        assert session_cls.call_args.kwargs["headers"] == {"Authorization": "secret-key"}

    @pytest.mark.asyncio
    async def test_envelope_omits_params_when_absent(self, transport: CasperNodeRpcClient) -> None:
        mock_session = _mock_session(_mock_response({"result": {}}))

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                await transport.call("chain_get_state_root_hash")

        args, kwargs = mock_session.post.call_args
        assert args == ("https://node.example.com/rpc",)
        payload = kwargs["json"]
        assert payload["jsonrpc"] == "2.0"
        assert payload["method"] == "chain_get_state_root_hash"
        assert "params" not in payload
        assert isinstance(payload["id"], int)

    @pytest.mark.asyncio
    async def test_envelope_carries_params(self, transport: CasperNodeRpcClient) -> None:
        mock_session = _mock_session(_mock_response({"result": {}}))
        params = {"block_identifier": {"Height": 5}}

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                await transport.call("chain_get_block", params)

        assert mock_session.post.call_args.kwargs["json"]["params"] == params

    @pytest.mark.asyncio
    async def test_rpc_error_raises(self, transport: CasperNodeRpcClient) -> None:
        mock_session = _mock_session(
            _mock_response(
                {"jsonrpc": "2.0", "error": {"code": -32001, "message": "block not known", "data": None}}
            )
        )

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                with pytest.raises(CasperRpcError) as exc_info:
                    await transport.call("chain_get_block", {})

        assert exc_info.value.code == -32001
        assert exc_info.value.message == "block not known"

    @pytest.mark.asyncio
    async def test_reply_without_result_or_error_raises(self, transport: CasperNodeRpcClient) -> None:
        mock_session = _mock_session(_mock_response({"jsonrpc": "2.0", "id": 1}))

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                with pytest.raises(CasperRpcError, match="Invalid JSON-RPC response") as exc_info:
                    await transport.call("info_get_status")

        assert exc_info.value.code == -32600
        assert exc_info.value.data == {"jsonrpc": "2.0", "id": 1}

    @pytest.mark.asyncio
    async def test_non_object_reply_raises(self, transport: CasperNodeRpcClient) -> None:
        mock_response = _mock_response()
        mock_response.json = AsyncMock(return_value=[{"result": {}}])
        mock_session = _mock_session(mock_response)

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                with pytest.raises(CasperRpcError, match="Invalid JSON-RPC response"):
                    await transport.call("info_get_status")

    @pytest.mark.asyncio
    async def test_reply_with_result_and_error_raises(self, transport: CasperNodeRpcClient) -> None:
        mock_session = _mock_session(
            _mock_response({"result": {}, "error": {"code": -1, "message": "x"}})
        )

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                with pytest.raises(CasperRpcError, match="Invalid JSON-RPC response"):
                    await transport.call("info_get_status")

    @pytest.mark.asyncio
    async def test_null_error_with_result_is_success(self, transport: CasperNodeRpcClient) -> None:
        mock_session = _mock_session(_mock_response({"result": {"ok": True}, "error": None}))

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                assert await transport.call("info_get_status") == {"ok": True}

    @pytest.mark.asyncio
    async def test_http_error_propagates(self, transport: CasperNodeRpcClient) -> None:
        status_error = aiohttp.ClientResponseError(
            request_info=MagicMock(), history=(), status=503, message="Service Unavailable"
        )
        mock_session = _mock_session(_mock_response(status_error=status_error))

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                with pytest.raises(aiohttp.ClientResponseError) as exc_info:
                    await transport.call("info_get_status")

        assert exc_info.value is status_error

    @pytest.mark.asyncio
    async def test_connection_error_propagates(self, transport: CasperNodeRpcClient) -> None:
        error = aiohttp.ClientConnectionError("connection refused")
        mock_session = _mock_session(error=error)

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                with pytest.raises(aiohttp.ClientConnectionError) as exc_info:
                    await transport.call("info_get_status")

        assert exc_info.value is error
        assert mock_session.post.call_count == 1


class TestClientOverTransport:
    @pytest.mark.asyncio
    async def test_balance_round_trip(self, sample_node_config: NodeConfig) -> None:
        mock_session = _mock_session(
            _mock_response({"result": {"api_version": "1.5.6", "state_root_hash": "abc123"}}),
            _mock_response({"result": {"api_version": "1.5.6", "balance_value": "42", "merkle_proof": ""}}),
        )
        client = CasperClient.from_config(sample_node_config)

        with patch("casper_rpc.rpc.node_client.aiohttp.ClientSession", return_value=mock_session):
            with patch("casper_rpc.rpc.node_client.aiohttp.TCPConnector"):
                result = await client.get_balance(Uref.from_string(UREF_STR))

        assert result.balance_value == 42
        first, second = (c.kwargs["json"] for c in mock_session.post.call_args_list)
        assert first["method"] == "chain_get_state_root_hash"
        assert "params" not in first
        assert second["method"] == "state_get_balance"
        assert second["params"] == {"state_root_hash": "abc123", "purse_uref": UREF_STR}
