"""Data models — all frozen (immutable)."""
from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class BlockId:
    """Identifies a block by hash or by height, never both."""

    hash: str | None = None
    height: int | None = None

    def __post_init__(self) -> None:
        if (self.hash is None) == (self.height is None):
            raise ValueError("BlockId needs exactly one of hash or height")
        if self.hash is not None and not self.hash:
            raise ValueError("Block hash must not be empty")
        if self.height is not None and self.height < 0:
            raise ValueError(f"Block height must be non-negative, got {self.height}")

    @classmethod
    def from_hash(cls, block_hash: str) -> BlockId:
        return cls(hash=block_hash)

    @classmethod
    def from_height(cls, height: int) -> BlockId:
        return cls(height=height)

    def to_json(self) -> dict[str, Any]:
        if self.hash is not None:
            return {"Hash": self.hash}
        return {"Height": self.height}


class KeyTag(Enum):
    """Discriminant of a global state key, valued by its string prefix."""

    ACCOUNT = "account-hash-"
    HASH = "hash-"
    UREF = "uref-"
    TRANSFER = "transfer-"
    DEPLOY_INFO = "deploy-"
    ERA_INFO = "era-"
    BALANCE = "balance-"
    BID = "bid-"
    WITHDRAW = "withdraw-"
    DICTIONARY = "dictionary-"
    SYSTEM_CONTRACT_REGISTRY = "system-contract-registry-"
    ERA_SUMMARY = "era-summary-"
    UNBOND = "unbond-"
    CHAINSPEC_REGISTRY = "chainspec-registry-"
    CHECKSUM_REGISTRY = "checksum-registry-"

    @property
    def prefix(self) -> str:
        return self.value


# Longest prefix first so "era-summary-" is not read as "era-".
_TAGS_BY_PREFIX = sorted(KeyTag, key=lambda t: len(t.prefix), reverse=True)


@dataclass(frozen=True)
class GlobalStateKey:
    """A tagged key into global state, e.g. ``account-hash-<hex>``."""

    tag: KeyTag
    payload: str

    @classmethod
    def from_string(cls, key: str) -> GlobalStateKey:
        for tag in _TAGS_BY_PREFIX:
            if key.startswith(tag.prefix):
                payload = key[len(tag.prefix):]
                if not payload:
                    raise ValueError(f"Key has no payload after prefix: {key!r}")
                return cls(tag=tag, payload=payload)
        raise ValueError(f"Unrecognized global state key: {key!r}")

    @property
    def key(self) -> str:
        return f"{self.tag.prefix}{self.payload}"

    def __str__(self) -> str:
        return self.key


_UREF_RE = re.compile(r"^uref-([0-9a-fA-F]{64})-([0-7]{3})$")


@dataclass(frozen=True)
class Uref:
    """Unforgeable reference: 32-byte address plus access rights."""

    address: str
    access_rights: int

    @classmethod
    def from_string(cls, uref: str) -> Uref:
        match = _UREF_RE.match(uref)
        if not match:
            raise ValueError(f"Invalid URef: {uref!r}")
        return cls(address=match.group(1).lower(), access_rights=int(match.group(2), 8))

    def to_key(self) -> GlobalStateKey:
        return GlobalStateKey(KeyTag.UREF, f"{self.address}-{self.access_rights:03o}")

    def __str__(self) -> str:
        return f"uref-{self.address}-{self.access_rights:03o}"


class KeyAlgorithm(Enum):
    ED25519 = 1
    SECP256K1 = 2


_KEY_LENGTHS = {KeyAlgorithm.ED25519: 32, KeyAlgorithm.SECP256K1: 33}


@dataclass(frozen=True)
class ClPublicKey:
    """Algorithm-tagged public key as the node formats it (``01…`` / ``02…``)."""

    algorithm: KeyAlgorithm
    raw: bytes

    @classmethod
    def from_hex(cls, value: str) -> ClPublicKey:
        try:
            data = bytes.fromhex(value)
        except ValueError as e:
            raise ValueError(f"Public key is not hex: {value!r}") from e
        if not data:
            raise ValueError("Public key must not be empty")
        try:
            algorithm = KeyAlgorithm(data[0])
        except ValueError as e:
            raise ValueError(f"Unknown public key algorithm tag: {data[0]:02x}") from e
        raw = data[1:]
        if len(raw) != _KEY_LENGTHS[algorithm]:
            raise ValueError(
                f"{algorithm.name} public key must be {_KEY_LENGTHS[algorithm]} bytes, "
                f"got {len(raw)}"
            )
        return cls(algorithm=algorithm, raw=raw)

    def to_hex(self) -> str:
        return f"{self.algorithm.value:02x}{self.raw.hex()}"

    def account_hash(self) -> str:
        """Formatted account hash key derived from this public key."""
        preimage = self.algorithm.name.lower().encode() + b"\x00" + self.raw
        digest = hashlib.blake2b(preimage, digest_size=32).hexdigest()
        return f"{KeyTag.ACCOUNT.prefix}{digest}"

    def __str__(self) -> str:
        return self.to_hex()


@dataclass(frozen=True)
class Approval:
    """Signature over a deploy hash."""

    signer: str
    signature: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> Approval:
        return cls(signer=json["signer"], signature=json["signature"])

    def to_json(self) -> dict[str, Any]:
        return {"signer": self.signer, "signature": self.signature}


@dataclass(frozen=True)
class DeployHeader:
    account: str
    timestamp: str
    ttl: str
    gas_price: int
    body_hash: str
    dependencies: tuple[str, ...]
    chain_name: str

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> DeployHeader:
        return cls(
            account=json["account"],
            timestamp=json["timestamp"],
            ttl=json["ttl"],
            gas_price=int(json["gas_price"]),
            body_hash=json["body_hash"],
            dependencies=tuple(json.get("dependencies", [])),
            chain_name=json["chain_name"],
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "account": self.account,
            "timestamp": self.timestamp,
            "ttl": self.ttl,
            "gas_price": self.gas_price,
            "body_hash": self.body_hash,
            "dependencies": list(self.dependencies),
            "chain_name": self.chain_name,
        }


@dataclass(frozen=True)
class Deploy:
    """A deploy (transaction) as the node exchanges it.

    ``payment`` and ``session`` are executable deploy items kept in their
    decoded JSON form; building and signing them happens outside this library.
    """

    hash: str
    header: DeployHeader
    payment: dict[str, Any]
    session: dict[str, Any]
    approvals: tuple[Approval, ...] = ()

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> Deploy:
        return cls(
            hash=json["hash"],
            header=DeployHeader.from_json(json["header"]),
            payment=json["payment"],
            session=json["session"],
            approvals=tuple(Approval.from_json(a) for a in json.get("approvals", [])),
        )

    def __hash__(self) -> int:
        # payment/session are dicts; the deploy hash already commits to them
        return hash(self.hash)

    @property
    def is_signed(self) -> bool:
        return bool(self.approvals)

    def to_json(self) -> dict[str, Any]:
        return {
            "hash": self.hash,
            "header": self.header.to_json(),
            "payment": self.payment,
            "session": self.session,
            "approvals": [a.to_json() for a in self.approvals],
        }
