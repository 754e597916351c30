"""Typed results decoded from node responses.

Top-level members are typed; nested composite values such as stored values,
merkle proofs and execution results stay in their decoded JSON form.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import Deploy


@dataclass(frozen=True)
class PeerEntry:
    node_id: str
    address: str


@dataclass(frozen=True)
class GetPeersResult:
    api_version: str
    peers: tuple[PeerEntry, ...]

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetPeersResult:
        return cls(
            api_version=json.get("api_version", ""),
            peers=tuple(
                PeerEntry(node_id=p["node_id"], address=p["address"])
                for p in json.get("peers", [])
            ),
        )


@dataclass(frozen=True)
class GetStateRootHashResult:
    api_version: str
    state_root_hash: str | None

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetStateRootHashResult:
        return cls(
            api_version=json.get("api_version", ""),
            state_root_hash=json.get("state_root_hash"),
        )


@dataclass(frozen=True)
class GetDeployResult:
    api_version: str
    deploy: Deploy
    execution_results: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetDeployResult:
        return cls(
            api_version=json.get("api_version", ""),
            deploy=Deploy.from_json(json["deploy"]),
            execution_results=tuple(json.get("execution_results", [])),
        )


@dataclass(frozen=True)
class MinimalBlockInfo:
    """Summary of the node's last added block, as reported in its status."""

    hash: str
    timestamp: str
    era_id: int
    height: int
    state_root_hash: str
    creator: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> MinimalBlockInfo:
        return cls(
            hash=json["hash"],
            timestamp=json["timestamp"],
            era_id=int(json["era_id"]),
            height=int(json["height"]),
            state_root_hash=json["state_root_hash"],
            creator=json["creator"],
        )


@dataclass(frozen=True)
class GetStatusResult:
    api_version: str
    chainspec_name: str
    starting_state_root_hash: str
    peers: tuple[PeerEntry, ...]
    last_added_block_info: MinimalBlockInfo | None
    our_public_signing_key: str | None
    round_length: str | None
    next_upgrade: dict[str, Any] | None
    build_version: str
    uptime: str
    reactor_state: str | None = None
    last_progress: str | None = None
    available_block_range: dict[str, Any] | None = None

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetStatusResult:
        last_block = json.get("last_added_block_info")
        return cls(
            api_version=json.get("api_version", ""),
            chainspec_name=json.get("chainspec_name", ""),
            starting_state_root_hash=json.get("starting_state_root_hash", ""),
            peers=GetPeersResult.from_json(json).peers,
            last_added_block_info=(
                MinimalBlockInfo.from_json(last_block) if last_block else None
            ),
            our_public_signing_key=json.get("our_public_signing_key"),
            round_length=json.get("round_length"),
            next_upgrade=json.get("next_upgrade"),
            build_version=json.get("build_version", ""),
            uptime=json.get("uptime", ""),
            reactor_state=json.get("reactor_state"),
            last_progress=json.get("last_progress"),
            available_block_range=json.get("available_block_range"),
        )


@dataclass(frozen=True)
class BlockHeader:
    parent_hash: str
    state_root_hash: str
    body_hash: str
    random_bit: bool
    accumulated_seed: str
    era_end: dict[str, Any] | None
    timestamp: str
    era_id: int
    height: int
    protocol_version: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> BlockHeader:
        return cls(
            parent_hash=json["parent_hash"],
            state_root_hash=json["state_root_hash"],
            body_hash=json["body_hash"],
            random_bit=bool(json["random_bit"]),
            accumulated_seed=json["accumulated_seed"],
            era_end=json.get("era_end"),
            timestamp=json["timestamp"],
            era_id=int(json["era_id"]),
            height=int(json["height"]),
            protocol_version=json["protocol_version"],
        )

    @property
    def is_switch_block(self) -> bool:
        return self.era_end is not None


@dataclass(frozen=True)
class Block:
    hash: str
    header: BlockHeader
    body: dict[str, Any]
    proofs: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> Block:
        return cls(
            hash=json["hash"],
            header=BlockHeader.from_json(json["header"]),
            body=json.get("body", {}),
            proofs=tuple(json.get("proofs", [])),
        )


@dataclass(frozen=True)
class GetBlockResult:
    api_version: str
    block: Block | None

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetBlockResult:
        block = json.get("block")
        return cls(
            api_version=json.get("api_version", ""),
            block=Block.from_json(block) if block else None,
        )


@dataclass(frozen=True)
class GetBlockTransfersResult:
    api_version: str
    block_hash: str | None
    transfers: tuple[dict[str, Any], ...]

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetBlockTransfersResult:
        return cls(
            api_version=json.get("api_version", ""),
            block_hash=json.get("block_hash"),
            transfers=tuple(json.get("transfers") or []),
        )


@dataclass(frozen=True)
class GetBalanceResult:
    api_version: str
    balance_value: int
    merkle_proof: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetBalanceResult:
        # U512 arrives as a decimal string.
        return cls(
            api_version=json.get("api_version", ""),
            balance_value=int(json["balance_value"]),
            merkle_proof=json.get("merkle_proof", ""),
        )


@dataclass(frozen=True)
class GetAccountInfoResult:
    api_version: str
    account: dict[str, Any]
    merkle_proof: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetAccountInfoResult:
        return cls(
            api_version=json.get("api_version", ""),
            account=json["account"],
            merkle_proof=json.get("merkle_proof", ""),
        )


@dataclass(frozen=True)
class QueryGlobalStateResult:
    api_version: str
    block_header: BlockHeader | None
    stored_value: dict[str, Any]
    merkle_proof: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> QueryGlobalStateResult:
        header = json.get("block_header")
        return cls(
            api_version=json.get("api_version", ""),
            block_header=BlockHeader.from_json(header) if header else None,
            stored_value=json["stored_value"],
            merkle_proof=json.get("merkle_proof", ""),
        )


@dataclass(frozen=True)
class GetItemResult:
    api_version: str
    stored_value: dict[str, Any]
    merkle_proof: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetItemResult:
        return cls(
            api_version=json.get("api_version", ""),
            stored_value=json["stored_value"],
            merkle_proof=json.get("merkle_proof", ""),
        )


@dataclass(frozen=True)
class GetDictionaryItemResult:
    api_version: str
    dictionary_key: str
    stored_value: dict[str, Any]
    merkle_proof: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetDictionaryItemResult:
        return cls(
            api_version=json.get("api_version", ""),
            dictionary_key=json["dictionary_key"],
            stored_value=json["stored_value"],
            merkle_proof=json.get("merkle_proof", ""),
        )


@dataclass(frozen=True)
class EraSummary:
    block_hash: str
    era_id: int
    stored_value: dict[str, Any]
    state_root_hash: str
    merkle_proof: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> EraSummary:
        return cls(
            block_hash=json["block_hash"],
            era_id=int(json["era_id"]),
            stored_value=json["stored_value"],
            state_root_hash=json["state_root_hash"],
            merkle_proof=json.get("merkle_proof", ""),
        )


@dataclass(frozen=True)
class GetEraInfoBySwitchBlockResult:
    """``era_summary`` is ``None`` when the block is not a switch block."""

    api_version: str
    era_summary: EraSummary | None

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetEraInfoBySwitchBlockResult:
        summary = json.get("era_summary")
        return cls(
            api_version=json.get("api_version", ""),
            era_summary=EraSummary.from_json(summary) if summary else None,
        )

    @property
    def is_empty(self) -> bool:
        return self.era_summary is None


@dataclass(frozen=True)
class GetAuctionInfoResult:
    api_version: str
    auction_state: dict[str, Any]

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> GetAuctionInfoResult:
        return cls(
            api_version=json.get("api_version", ""),
            auction_state=json["auction_state"],
        )


@dataclass(frozen=True)
class PutDeployResult:
    api_version: str
    deploy_hash: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> PutDeployResult:
        return cls(
            api_version=json.get("api_version", ""),
            deploy_hash=json["deploy_hash"],
        )
