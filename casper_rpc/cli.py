"""Command-line interface for the Casper RPC client."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

import aiohttp

from .client import CasperClient
from .config import NodeConfig, load_config
from .errors import CasperRpcError
from .logging_setup import configure_logging
from .models import BlockId, ClPublicKey, Deploy, Uref

logger = logging.getLogger(__name__)


def _add_block_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--block-hash", default=None, help="Target block hash")
    group.add_argument("--block-height", type=int, default=None, help="Target block height")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="casper-rpc",
        description="Query a Casper node over JSON-RPC",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--node-url",
        default=None,
        help="Node RPC endpoint, e.g. http://127.0.0.1:7777/rpc (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("schema", help="Fetch the node's RPC schema")
    sub.add_parser("peers", help="List peers connected to the node")
    sub.add_parser("status", help="Show node status")

    for name, help_text in (
        ("state-root-hash", "Get the state root hash"),
        ("block", "Get a block"),
        ("block-transfers", "Get the transfers of a block"),
        ("era-info", "Get era info from a switch block"),
        ("auction-info", "Get bids and validators"),
    ):
        _add_block_args(sub.add_parser(name, help=help_text))

    deploy_parser = sub.add_parser("deploy", help="Get a deploy by hash")
    deploy_parser.add_argument("deploy_hash")

    balance_parser = sub.add_parser("balance", help="Get a purse balance")
    balance_parser.add_argument("purse_uref", help="uref-<hex>-<access>")
    balance_parser.add_argument("--state-root-hash", default=None)

    account_parser = sub.add_parser("account", help="Get account info")
    account_parser.add_argument("public_key", help="Hex public key (01… or 02…)")
    _add_block_args(account_parser)

    query_parser = sub.add_parser("query", help="Query global state")
    query_parser.add_argument("key", help="Formatted global state key")
    target = query_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--block-hash", default=None)
    target.add_argument("--state-root-hash", default=None)
    query_parser.add_argument("--path", nargs="*", default=[], help="Named key path")

    item_parser = sub.add_parser("item", help="Get a state item (deprecated, use query)")
    item_parser.add_argument("key", help="Formatted global state key")
    item_parser.add_argument("--state-root-hash", default=None)
    item_parser.add_argument("--path", nargs="*", default=[], help="Named key path")

    dict_parser = sub.add_parser("dictionary", help="Get a dictionary item")
    mode = dict_parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--key", default=None, help="dictionary-<hex> item key")
    mode.add_argument("--account-key", default=None, help="Account holding the named key")
    mode.add_argument("--contract-key", default=None, help="Contract holding the named key")
    mode.add_argument("--seed-uref", default=None, help="Dictionary seed URef")
    dict_parser.add_argument("--name", default=None, help="Dictionary named key")
    dict_parser.add_argument("--item-key", default=None, help="Key within the dictionary")
    dict_parser.add_argument("--state-root-hash", default=None)

    put_parser = sub.add_parser("put-deploy", help="Submit a signed deploy from a JSON file")
    put_parser.add_argument("deploy_file", type=Path)

    return parser


def _block_id(args: argparse.Namespace) -> BlockId | None:
    if args.block_hash is not None:
        return BlockId.from_hash(args.block_hash)
    if args.block_height is not None:
        return BlockId.from_height(args.block_height)
    return None


def _node_config(args: argparse.Namespace) -> NodeConfig:
    if args.node_url:
        return NodeConfig(rpc_url=args.node_url)
    return load_config(args.config).node


def _load_deploy(path: Path) -> Deploy:
    raw = json.loads(path.read_text())
    # Accept both a bare deploy and a {"deploy": {...}} params object.
    if isinstance(raw, dict) and "deploy" in raw:
        raw = raw["deploy"]
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a deploy JSON object")
    try:
        return Deploy.from_json(raw)
    except (KeyError, TypeError) as e:
        raise ValueError(f"{path}: malformed deploy ({e!r})") from e


async def _dictionary(client: CasperClient, args: argparse.Namespace) -> Any:
    if args.key:
        return await client.get_dictionary_item(args.key, args.state_root_hash)

    if not args.item_key:
        raise ValueError("--item-key is required for this dictionary lookup")
    if args.seed_uref:
        return await client.get_dictionary_item_by_uref(
            Uref.from_string(args.seed_uref), args.item_key, args.state_root_hash
        )

    if not args.name:
        raise ValueError("--name is required for named key dictionary lookups")
    if args.account_key:
        return await client.get_dictionary_item_by_account(
            args.account_key, args.name, args.item_key, args.state_root_hash
        )
    return await client.get_dictionary_item_by_contract(
        args.contract_key, args.name, args.item_key, args.state_root_hash
    )


async def _execute(client: CasperClient, args: argparse.Namespace) -> Any:
    """Dispatch the selected command to the client."""
    command = args.command
    if command == "schema":
        return await client.get_rpc_schema()
    if command == "peers":
        return await client.get_peers()
    if command == "status":
        return await client.get_status()
    if command == "state-root-hash":
        return await client.get_state_root_hash(_block_id(args))
    if command == "block":
        return await client.get_block(_block_id(args))
    if command == "block-transfers":
        return await client.get_block_transfers(_block_id(args))
    if command == "era-info":
        return await client.get_era_info_by_switch_block(_block_id(args))
    if command == "auction-info":
        return await client.get_auction_info(_block_id(args))
    if command == "deploy":
        return await client.get_deploy(args.deploy_hash)
    if command == "balance":
        return await client.get_balance(
            Uref.from_string(args.purse_uref), args.state_root_hash
        )
    if command == "account":
        return await client.get_account_info(
            ClPublicKey.from_hex(args.public_key), _block_id(args)
        )
    if command == "query":
        is_block_hash = args.block_hash is not None
        hash_ = args.block_hash if is_block_hash else args.state_root_hash
        return await client.query_global_state(args.key, hash_, is_block_hash, args.path)
    if command == "item":
        return await client.get_item(args.key, args.state_root_hash, args.path)
    if command == "dictionary":
        return await _dictionary(client, args)
    if command == "put-deploy":
        return await client.put_deploy(_load_deploy(args.deploy_file))
    raise ValueError(f"Unknown command: {command}")


def render(result: Any) -> str:
    """Render a result as indented JSON."""
    if dataclasses.is_dataclass(result) and not isinstance(result, type):
        result = dataclasses.asdict(result)
    return json.dumps(result, indent=2, default=str)


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command and print its result."""
    configure_logging(args.log_level)
    client = CasperClient.from_config(_node_config(args))
    result = await _execute(client, args)
    print(render(result))


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except (CasperRpcError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error("RPC call failed: %s", e)
        sys.exit(1)
    except (ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
