"""Shared test fixtures and sample data."""
from __future__ import annotations

import copy
import textwrap
from pathlib import Path
from typing import Any

import pytest

from casper_rpc.config import AppConfig, NodeConfig
from casper_rpc.models import Deploy, Uref

STATE_ROOT_HASH = "abc123"
BLOCK_HASH = "09ac52260ab5c3b53a75a4e3f5d7b52ad4ef0e1b5e47b85cf1fa1a1b2c3d4e5f"
PURSE_UREF = "uref-" + "ab" * 32 + "-007"
PUBLIC_KEY_HEX = "01" + "cd" * 32
API_VERSION = "1.5.6"


# ---------------------------------------------------------------------------
# Recording transport
# ---------------------------------------------------------------------------


class FakeTransport:
    """Records every call and answers from a method → response table.

    A response may be a JSON value, a callable taking the params, or an
    exception instance to raise.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append((method, copy.deepcopy(params)))
        response = self.responses[method]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params)
        return response

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]


@pytest.fixture()
def make_transport():
    return FakeTransport


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_node_config() -> NodeConfig:
    return NodeConfig(
        rpc_url="https://node.example.com/rpc",
        rpc_timeout=10,
        headers={"Authorization": "secret-key"},
    )


@pytest.fixture()
def sample_app_config(sample_node_config: NodeConfig) -> AppConfig:
    return AppConfig(node=sample_node_config)


SAMPLE_YAML = textwrap.dedent("""\
    node:
      rpc_url: "http://127.0.0.1:7777/rpc"
      rpc_timeout: 10
      headers:
        Authorization: "tok1"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample node data
# ---------------------------------------------------------------------------


@pytest.fixture()
def purse_uref() -> Uref:
    return Uref.from_string(PURSE_UREF)


@pytest.fixture()
def sample_deploy_json() -> dict[str, Any]:
    return {
        "hash": "5c9b3b099c1378aa8e4a5f07f59ff1fcdc69a83179427c7e67ae0377d94d93fa",
        "header": {
            "account": PUBLIC_KEY_HEX,
            "timestamp": "2022-06-28T15:44:42.164Z",
            "ttl": "30m",
            "gas_price": 1,
            "body_hash": "d53cf72d17278fd47d399013ca389c50d589352f1a12593c0b8e01872a641b50",
            "dependencies": [],
            "chain_name": "casper-test",
        },
        "payment": {
            "ModuleBytes": {
                "module_bytes": "",
                "args": [["amount", {"cl_type": "U512", "bytes": "0400e1f505", "parsed": "100000000"}]],
            }
        },
        "session": {
            "Transfer": {
                "args": [["amount", {"cl_type": "U512", "bytes": "0500f2052a01", "parsed": "5000000000"}]],
            }
        },
        "approvals": [
            {
                "signer": PUBLIC_KEY_HEX,
                "signature": "01" + "ef" * 64,
            }
        ],
    }


@pytest.fixture()
def unsigned_deploy_json(sample_deploy_json: dict[str, Any]) -> dict[str, Any]:
    return {**sample_deploy_json, "approvals": []}


@pytest.fixture()
def sample_deploy(sample_deploy_json: dict[str, Any]) -> Deploy:
    return Deploy.from_json(sample_deploy_json)


@pytest.fixture()
def sample_block_header() -> dict[str, Any]:
    return {
        "parent_hash": "aa" * 32,
        "state_root_hash": STATE_ROOT_HASH,
        "body_hash": "bb" * 32,
        "random_bit": True,
        "accumulated_seed": "cc" * 32,
        "era_end": None,
        "timestamp": "2022-06-28T15:45:00.000Z",
        "era_id": 4321,
        "height": 876543,
        "protocol_version": "1.4.6",
    }


@pytest.fixture()
def sample_block(sample_block_header: dict[str, Any]) -> dict[str, Any]:
    return {
        "hash": BLOCK_HASH,
        "header": sample_block_header,
        "body": {"proposer": PUBLIC_KEY_HEX, "deploy_hashes": [], "transfer_hashes": []},
        "proofs": [{"public_key": PUBLIC_KEY_HEX, "signature": "01" + "aa" * 64}],
    }


@pytest.fixture()
def state_root_response() -> dict[str, Any]:
    return {"api_version": API_VERSION, "state_root_hash": STATE_ROOT_HASH}


@pytest.fixture()
def dictionary_item_response() -> dict[str, Any]:
    return {
        "api_version": API_VERSION,
        "dictionary_key": "dictionary-" + "de" * 32,
        "stored_value": {"CLValue": {"cl_type": "String", "bytes": "0500000068656c6c6f", "parsed": "hello"}},
        "merkle_proof": "01000000",
    }
