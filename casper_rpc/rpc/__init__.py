"""JSON-RPC transport, request params and response results."""
from .node_client import CasperNodeRpcClient
from .params import (
    AccountNamedKeyIdentifier,
    ContractNamedKeyIdentifier,
    DictionaryIdentifier,
    DictionaryKeyIdentifier,
    UrefIdentifier,
)

__all__ = [
    "CasperNodeRpcClient",
    "AccountNamedKeyIdentifier",
    "ContractNamedKeyIdentifier",
    "DictionaryIdentifier",
    "DictionaryKeyIdentifier",
    "UrefIdentifier",
]
