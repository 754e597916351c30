"""Typed async client for the Casper node JSON-RPC API."""
from .client import CasperClient
from .config import AppConfig, NodeConfig, load_config
from .errors import CasperRpcError
from .models import (
    Approval,
    BlockId,
    ClPublicKey,
    Deploy,
    DeployHeader,
    GlobalStateKey,
    KeyTag,
    Uref,
)
from .rpc import CasperNodeRpcClient

__all__ = [
    "CasperClient",
    "CasperNodeRpcClient",
    "CasperRpcError",
    "AppConfig",
    "NodeConfig",
    "load_config",
    "Approval",
    "BlockId",
    "ClPublicKey",
    "Deploy",
    "DeployHeader",
    "GlobalStateKey",
    "KeyTag",
    "Uref",
]
