"""Typed request parameters and their wire encoding.

Every params object is frozen and knows how to render itself as the ``params``
member of a JSON-RPC request. Optional members that are ``None`` are left out
of the payload so the node applies its own default (usually "latest block").
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ..models import BlockId, ClPublicKey, Deploy, GlobalStateKey, Uref


def _key_str(key: str | GlobalStateKey) -> str:
    return key.key if isinstance(key, GlobalStateKey) else key


def _block_params(block_id: BlockId | None) -> dict[str, Any]:
    if block_id is None:
        return {}
    return {"block_identifier": block_id.to_json()}


@dataclass(frozen=True)
class GetStateRootHashParams:
    block_id: BlockId

    def to_json(self) -> dict[str, Any]:
        return _block_params(self.block_id)


@dataclass(frozen=True)
class GetDeployParams:
    deploy_hash: str

    def to_json(self) -> dict[str, Any]:
        return {"deploy_hash": self.deploy_hash}


@dataclass(frozen=True)
class GetBlockParams:
    block_id: BlockId | None = None

    def to_json(self) -> dict[str, Any]:
        return _block_params(self.block_id)


@dataclass(frozen=True)
class GetBlockTransfersParams:
    block_id: BlockId | None = None

    def to_json(self) -> dict[str, Any]:
        return _block_params(self.block_id)


@dataclass(frozen=True)
class GetEraInfoBySwitchBlockParams:
    block_id: BlockId | None = None

    def to_json(self) -> dict[str, Any]:
        return _block_params(self.block_id)


@dataclass(frozen=True)
class GetAuctionInfoParams:
    block_id: BlockId | None = None

    def to_json(self) -> dict[str, Any]:
        return _block_params(self.block_id)


@dataclass(frozen=True)
class GetBalanceParams:
    purse_uref: Uref
    state_root_hash: str

    def to_json(self) -> dict[str, Any]:
        return {
            "state_root_hash": self.state_root_hash,
            "purse_uref": str(self.purse_uref),
        }


@dataclass(frozen=True)
class GetAccountInfoParams:
    public_key: ClPublicKey
    block_id: BlockId | None = None

    def to_json(self) -> dict[str, Any]:
        return {"public_key": self.public_key.to_hex(), **_block_params(self.block_id)}


@dataclass(frozen=True)
class QueryGlobalStateParams:
    """``hash`` is a block hash when ``is_block_hash`` is set, else a state root hash."""

    key: str
    hash: str
    is_block_hash: bool
    path: tuple[str, ...] = ()

    @classmethod
    def from_pair(
        cls,
        key: str | GlobalStateKey,
        hash: str,
        is_block_hash: bool,
        path: tuple[str, ...] | list[str] = (),
    ) -> QueryGlobalStateParams:
        return cls(key=_key_str(key), hash=hash, is_block_hash=is_block_hash, path=tuple(path))

    def to_json(self) -> dict[str, Any]:
        tag = "BlockHash" if self.is_block_hash else "StateRootHash"
        return {
            "state_identifier": {tag: self.hash},
            "key": self.key,
            "path": list(self.path),
        }


@dataclass(frozen=True)
class GetItemParams:
    key: str
    state_root_hash: str
    path: tuple[str, ...] = ()

    def to_json(self) -> dict[str, Any]:
        return {
            "state_root_hash": self.state_root_hash,
            "key": self.key,
            "path": list(self.path),
        }


# ---------------------------------------------------------------------------
# Dictionary item addressing modes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DictionaryKeyIdentifier:
    """Dictionary item addressed by its own ``dictionary-<hex>`` key."""

    dictionary_item_key: str

    def to_json(self) -> dict[str, Any]:
        return {"Dictionary": self.dictionary_item_key}


@dataclass(frozen=True)
class AccountNamedKeyIdentifier:
    """Dictionary whose seed URef is stored under an account's named keys."""

    key: str
    dictionary_name: str
    dictionary_item_key: str

    def to_json(self) -> dict[str, Any]:
        return {
            "AccountNamedKey": {
                "key": self.key,
                "dictionary_name": self.dictionary_name,
                "dictionary_item_key": self.dictionary_item_key,
            }
        }


@dataclass(frozen=True)
class ContractNamedKeyIdentifier:
    """Dictionary whose seed URef is stored under a contract's named keys."""

    key: str
    dictionary_name: str
    dictionary_item_key: str

    def to_json(self) -> dict[str, Any]:
        return {
            "ContractNamedKey": {
                "key": self.key,
                "dictionary_name": self.dictionary_name,
                "dictionary_item_key": self.dictionary_item_key,
            }
        }


@dataclass(frozen=True)
class UrefIdentifier:
    """Dictionary addressed directly through its seed URef."""

    seed_uref: Uref
    dictionary_item_key: str

    def to_json(self) -> dict[str, Any]:
        return {
            "URef": {
                "seed_uref": str(self.seed_uref),
                "dictionary_item_key": self.dictionary_item_key,
            }
        }


DictionaryIdentifier = Union[
    DictionaryKeyIdentifier,
    AccountNamedKeyIdentifier,
    ContractNamedKeyIdentifier,
    UrefIdentifier,
]


@dataclass(frozen=True)
class GetDictionaryItemParams:
    state_root_hash: str
    identifier: DictionaryIdentifier

    def to_json(self) -> dict[str, Any]:
        return {
            "state_root_hash": self.state_root_hash,
            "dictionary_identifier": self.identifier.to_json(),
        }


@dataclass(frozen=True)
class PutDeployParams:
    deploy: Deploy

    def to_json(self) -> dict[str, Any]:
        return {"deploy": self.deploy.to_json()}
