"""JSON-RPC method names served by a Casper node."""

RPC_DISCOVER = "rpc.discover"
INFO_GET_PEERS = "info_get_peers"
INFO_GET_STATUS = "info_get_status"
INFO_GET_DEPLOY = "info_get_deploy"
CHAIN_GET_STATE_ROOT_HASH = "chain_get_state_root_hash"
CHAIN_GET_BLOCK = "chain_get_block"
CHAIN_GET_BLOCK_TRANSFERS = "chain_get_block_transfers"
CHAIN_GET_ERA_INFO_BY_SWITCH_BLOCK = "chain_get_era_info_by_switch_block"
STATE_GET_BALANCE = "state_get_balance"
STATE_GET_ACCOUNT_INFO = "state_get_account_info"
STATE_GET_ITEM = "state_get_item"
STATE_GET_DICTIONARY_ITEM = "state_get_dictionary_item"
STATE_GET_AUCTION_INFO = "state_get_auction_info"
QUERY_GLOBAL_STATE = "query_global_state"
ACCOUNT_PUT_DEPLOY = "account_put_deploy"
