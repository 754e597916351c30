"""Typed Casper node client: one async method per RPC operation."""
from __future__ import annotations

import logging
import warnings
from typing import Any, Sequence

from .config import NodeConfig, validate_node
from .interfaces.transport import Transport
from .models import BlockId, ClPublicKey, Deploy, GlobalStateKey, Uref
from .rpc import methods
from .rpc.node_client import CasperNodeRpcClient
from .rpc.params import (
    AccountNamedKeyIdentifier,
    ContractNamedKeyIdentifier,
    DictionaryIdentifier,
    DictionaryKeyIdentifier,
    GetAccountInfoParams,
    GetAuctionInfoParams,
    GetBalanceParams,
    GetBlockParams,
    GetBlockTransfersParams,
    GetDeployParams,
    GetDictionaryItemParams,
    GetEraInfoBySwitchBlockParams,
    GetItemParams,
    GetStateRootHashParams,
    PutDeployParams,
    QueryGlobalStateParams,
    UrefIdentifier,
)
from .rpc.results import (
    GetAccountInfoResult,
    GetAuctionInfoResult,
    GetBalanceResult,
    GetBlockResult,
    GetBlockTransfersResult,
    GetDeployResult,
    GetDictionaryItemResult,
    GetEraInfoBySwitchBlockResult,
    GetItemResult,
    GetPeersResult,
    GetStateRootHashResult,
    GetStatusResult,
    PutDeployResult,
    QueryGlobalStateResult,
)

logger = logging.getLogger(__name__)

_UNSIGNED_DEPLOY = "Deploy must be signed before sending to the network"


class CasperClient:
    """Typed client for a Casper node's JSON-RPC API.

    Every method is a single round trip to the node, except those taking an
    optional ``state_root_hash``: when it is omitted the latest state root
    hash is fetched first. Resolved hashes are never cached between calls;
    pass one explicitly to pin queries to a fixed state.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @classmethod
    def from_config(cls, config: NodeConfig) -> CasperClient:
        validate_node(config)
        return cls(CasperNodeRpcClient(config))

    @classmethod
    def from_url(cls, rpc_url: str, rpc_timeout: int = 30) -> CasperClient:
        """Client for a node endpoint, e.g. ``http://127.0.0.1:7777/rpc``."""
        return cls.from_config(NodeConfig(rpc_url=rpc_url, rpc_timeout=rpc_timeout))

    async def _resolve_state_root_hash(self, state_root_hash: str | None) -> str:
        if state_root_hash is not None:
            return state_root_hash
        result = await self.get_state_root_hash()
        if result.state_root_hash is None:
            raise ValueError("Node returned no state root hash")
        logger.debug("Resolved latest state root hash %s", result.state_root_hash)
        return result.state_root_hash

    # ------------------------------------------------------------------
    # Node info
    # ------------------------------------------------------------------

    async def get_rpc_schema(self) -> Any:
        """Fetch the node's OpenRPC schema."""
        return await self._transport.call(methods.RPC_DISCOVER)

    async def get_peers(self) -> GetPeersResult:
        """Request the list of peers connected to the node."""
        result = await self._transport.call(methods.INFO_GET_PEERS)
        return GetPeersResult.from_json(result)

    async def get_status(self) -> GetStatusResult:
        """Request the current status of the node."""
        result = await self._transport.call(methods.INFO_GET_STATUS)
        return GetStatusResult.from_json(result)

    # ------------------------------------------------------------------
    # Chain
    # ------------------------------------------------------------------

    async def get_state_root_hash(self, block_id: BlockId | None = None) -> GetStateRootHashResult:
        """Request the latest state root hash, or the one as of ``block_id``."""
        if block_id is None:
            result = await self._transport.call(methods.CHAIN_GET_STATE_ROOT_HASH)
        else:
            result = await self._transport.call(
                methods.CHAIN_GET_STATE_ROOT_HASH,
                GetStateRootHashParams(block_id).to_json(),
            )
        return GetStateRootHashResult.from_json(result)

    async def get_block(self, block_id: BlockId | None = None) -> GetBlockResult:
        """Request the block identified by ``block_id`` (latest when omitted)."""
        result = await self._transport.call(
            methods.CHAIN_GET_BLOCK, GetBlockParams(block_id).to_json()
        )
        return GetBlockResult.from_json(result)

    async def get_block_transfers(
        self, block_id: BlockId | None = None
    ) -> GetBlockTransfersResult:
        """Request the transfers executed in the block identified by ``block_id``."""
        result = await self._transport.call(
            methods.CHAIN_GET_BLOCK_TRANSFERS, GetBlockTransfersParams(block_id).to_json()
        )
        return GetBlockTransfersResult.from_json(result)

    async def get_era_info_by_switch_block(
        self, block_id: BlockId | None = None
    ) -> GetEraInfoBySwitchBlockResult:
        """Request era info for a switch block.

        The node answers with an empty era summary for any other block.
        """
        result = await self._transport.call(
            methods.CHAIN_GET_ERA_INFO_BY_SWITCH_BLOCK,
            GetEraInfoBySwitchBlockParams(block_id).to_json(),
        )
        return GetEraInfoBySwitchBlockResult.from_json(result)

    async def get_deploy(self, deploy_hash: str) -> GetDeployResult:
        """Request a deploy and its execution results by hash."""
        result = await self._transport.call(
            methods.INFO_GET_DEPLOY, GetDeployParams(deploy_hash).to_json()
        )
        return GetDeployResult.from_json(result)

    # ------------------------------------------------------------------
    # Global state
    # ------------------------------------------------------------------

    async def get_balance(
        self, purse_uref: Uref, state_root_hash: str | None = None
    ) -> GetBalanceResult:
        """Request a purse's balance."""
        state_root_hash = await self._resolve_state_root_hash(state_root_hash)
        result = await self._transport.call(
            methods.STATE_GET_BALANCE,
            GetBalanceParams(purse_uref, state_root_hash).to_json(),
        )
        return GetBalanceResult.from_json(result)

    async def get_account_info(
        self, public_key: ClPublicKey, block_id: BlockId | None = None
    ) -> GetAccountInfoResult:
        """Request account info for ``public_key`` (latest block when ``block_id`` is omitted)."""
        result = await self._transport.call(
            methods.STATE_GET_ACCOUNT_INFO,
            GetAccountInfoParams(public_key, block_id).to_json(),
        )
        return GetAccountInfoResult.from_json(result)

    async def query_global_state(
        self,
        key: str | GlobalStateKey,
        hash: str,
        is_block_hash: bool,
        path: Sequence[str] = (),
    ) -> QueryGlobalStateResult:
        """Query a stored value in global state.

        Args:
            key: Formatted global state key to start from.
            hash: Block hash or state root hash identifying the state.
            is_block_hash: Whether ``hash`` is a block hash.
            path: Named keys to descend through from ``key``.
        """
        params = QueryGlobalStateParams.from_pair(key, hash, is_block_hash, tuple(path))
        result = await self._transport.call(methods.QUERY_GLOBAL_STATE, params.to_json())
        return QueryGlobalStateResult.from_json(result)

    async def get_item(
        self,
        key: str | GlobalStateKey,
        state_root_hash: str | None = None,
        path: Sequence[str] = (),
    ) -> GetItemResult:
        """Deprecated: use :meth:`query_global_state` instead."""
        warnings.warn(
            "get_item is deprecated, use query_global_state instead",
            DeprecationWarning,
            stacklevel=2,
        )
        state_root_hash = await self._resolve_state_root_hash(state_root_hash)
        key_str = key.key if isinstance(key, GlobalStateKey) else key
        result = await self._transport.call(
            methods.STATE_GET_ITEM,
            GetItemParams(key_str, state_root_hash, tuple(path)).to_json(),
        )
        return GetItemResult.from_json(result)

    async def _get_dictionary_item(
        self, identifier: DictionaryIdentifier, state_root_hash: str | None
    ) -> GetDictionaryItemResult:
        state_root_hash = await self._resolve_state_root_hash(state_root_hash)
        result = await self._transport.call(
            methods.STATE_GET_DICTIONARY_ITEM,
            GetDictionaryItemParams(state_root_hash, identifier).to_json(),
        )
        return GetDictionaryItemResult.from_json(result)

    async def get_dictionary_item(
        self, dictionary_item_key: str, state_root_hash: str | None = None
    ) -> GetDictionaryItemResult:
        """Query a dictionary item by its ``dictionary-<hex>`` key."""
        return await self._get_dictionary_item(
            DictionaryKeyIdentifier(dictionary_item_key), state_root_hash
        )

    async def get_dictionary_item_by_account(
        self,
        account_key: str,
        dictionary_name: str,
        dictionary_item_key: str,
        state_root_hash: str | None = None,
    ) -> GetDictionaryItemResult:
        """Query a dictionary item from an account's named keys.

        Args:
            account_key: Formatted account hash key owning the named key.
            dictionary_name: Named key under which the seed URef is stored.
            dictionary_item_key: Key of the item within the dictionary.
            state_root_hash: State to query; latest when omitted.
        """
        return await self._get_dictionary_item(
            AccountNamedKeyIdentifier(account_key, dictionary_name, dictionary_item_key),
            state_root_hash,
        )

    async def get_dictionary_item_by_contract(
        self,
        contract_key: str,
        dictionary_name: str,
        dictionary_item_key: str,
        state_root_hash: str | None = None,
    ) -> GetDictionaryItemResult:
        """Query a dictionary item from a contract's named keys."""
        return await self._get_dictionary_item(
            ContractNamedKeyIdentifier(contract_key, dictionary_name, dictionary_item_key),
            state_root_hash,
        )

    async def get_dictionary_item_by_uref(
        self,
        seed_uref: Uref,
        dictionary_item_key: str,
        state_root_hash: str | None = None,
    ) -> GetDictionaryItemResult:
        """Query a dictionary item through the dictionary's seed URef."""
        return await self._get_dictionary_item(
            UrefIdentifier(seed_uref, dictionary_item_key), state_root_hash
        )

    async def get_auction_info(self, block_id: BlockId | None = None) -> GetAuctionInfoResult:
        """Request the bids and validators as of ``block_id``."""
        result = await self._transport.call(
            methods.STATE_GET_AUCTION_INFO, GetAuctionInfoParams(block_id).to_json()
        )
        return GetAuctionInfoResult.from_json(result)

    # ------------------------------------------------------------------
    # Deploy submission
    # ------------------------------------------------------------------

    async def put_deploy(self, deploy: Deploy) -> PutDeployResult:
        """Send a signed deploy to the network; the result holds its hash."""
        if not deploy.approvals:
            raise ValueError(_UNSIGNED_DEPLOY)
        result = await self._transport.call(
            methods.ACCOUNT_PUT_DEPLOY, PutDeployParams(deploy).to_json()
        )
        logger.info("Deploy %s submitted", deploy.hash)
        return PutDeployResult.from_json(result)

    async def put_deploy_json(self, deploy_json: dict[str, Any]) -> PutDeployResult:
        """Deprecated: use :meth:`put_deploy` with a :class:`Deploy`.

        ``deploy_json`` is the ``{"deploy": {...}}`` params object.
        """
        warnings.warn(
            "put_deploy_json is deprecated, use put_deploy instead",
            DeprecationWarning,
            stacklevel=2,
        )
        raw = deploy_json.get("deploy")
        if not isinstance(raw, dict):
            raise ValueError("deploy_json must contain a 'deploy' object")
        approvals = raw.get("approvals")
        if approvals is not None and not isinstance(approvals, list):
            raise ValueError("deploy approvals must be a list")
        if not approvals:
            raise ValueError(_UNSIGNED_DEPLOY)
        try:
            deploy = Deploy.from_json(raw)
        except KeyError as e:
            raise ValueError(f"deploy is missing field {e}") from e
        except TypeError as e:
            raise ValueError(f"deploy is malformed: {e}") from e
        return await self.put_deploy(deploy)
