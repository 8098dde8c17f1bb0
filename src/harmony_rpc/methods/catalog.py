"""
Registration data for every supported Harmony node RPC method.

Grouped the way the node API documentation groups them. Python names are
derived from the RPC name (``hmyv2_getBlockByNumber`` -> ``get_block_by_number``).
"""

from __future__ import annotations

from .params import (
    MethodDescriptor,
    MethodRegistry,
    flag,
    hex_address,
    hex_blob,
    hex_hash,
    non_negative_int,
    one_address,
    one_of,
    page_number,
    page_size,
    positive_int,
    storage_slot,
)
from .validators import SORT_ORDERS, TX_TYPES

SMART_CONTRACT = "smart-contract"
STAKING_DELEGATION = "staking/delegation"
STAKING_VALIDATOR = "staking/validator"
STAKING_NETWORK = "staking/network"
TX_CROSS_SHARD = "transaction/cross-shard"
TX_POOL = "transaction/pool"
TX_STAKING = "transaction/staking"
TX_TRANSFER = "transaction/transfer"
CHAIN_NETWORK = "blockchain/network"
CHAIN_NODE = "blockchain/node"
CHAIN_BLOCKS = "blockchain/blocks"
ACCOUNT = "account"


def _no_params(rpc_method: str, section: str, summary: str) -> MethodDescriptor:
    return MethodDescriptor(rpc_method, (), section, summary)


def _transaction_fields(slot: int) -> tuple:
    return (
        hex_address("from_address", required=False, slot=slot, key="from", label="from address"),
        hex_blob("gas", required=False, slot=slot, key="gas"),
        hex_blob("gas_price", required=False, slot=slot, key="gasPrice", label="gas price"),
        hex_blob("value", required=False, slot=slot, key="value"),
        hex_blob("data", required=False, slot=slot, key="data"),
    )


def _block_flags(slot: int, *names: str) -> tuple:
    keys = {
        "full_tx": "fullTx",
        "incl_tx": "inclTx",
        "with_signers": "withSigners",
        "incl_staking": "inclStaking",
    }
    return tuple(flag(name, slot=slot, key=keys[name]) for name in names)


def _history(rpc_method: str, section: str, summary: str) -> MethodDescriptor:
    return MethodDescriptor(
        rpc_method,
        (
            one_address("address", key="address"),
            page_number(required=False, default=1, key="pageIndex"),
            page_size(key="pageSize"),
            flag("full_tx", key="fullTx"),
            one_of("tx_type", TX_TYPES, required=False, default="ALL", key="txType", label="transaction type"),
            one_of("order", SORT_ORDERS, required=False, default="ASC", key="order"),
        ),
        section,
        summary,
    )


DESCRIPTORS: tuple[MethodDescriptor, ...] = (
    # Smart contract
    MethodDescriptor(
        "hmyv2_call",
        (
            hex_address("contract_address", key="to", label="contract address"),
            positive_int("block_number", slot=1),
            *_transaction_fields(slot=0),
        ),
        SMART_CONTRACT,
        "Execute a message call without creating a transaction.",
    ),
    MethodDescriptor(
        "hmyv2_estimateGas",
        (
            hex_address("to_address", key="to", label="to address"),
            *_transaction_fields(slot=0),
        ),
        SMART_CONTRACT,
        "Estimate the gas a transaction would need.",
    ),
    MethodDescriptor(
        "hmyv2_getCode",
        (
            hex_address("contract_address", label="contract address"),
            positive_int("block_number", slot=1),
        ),
        SMART_CONTRACT,
        "Contract code at an address.",
    ),
    MethodDescriptor(
        "hmyv2_getStorageAt",
        (
            hex_address("contract_address", label="contract address"),
            storage_slot("storage_location", slot=1),
            positive_int("block_number", slot=2),
        ),
        SMART_CONTRACT,
        "Value of a contract storage slot.",
    ),
    # Staking -> delegation
    MethodDescriptor(
        "hmyv2_getDelegationsByDelegator",
        (one_address("delegator_address"),),
        STAKING_DELEGATION,
        "Delegations made by a delegator.",
    ),
    MethodDescriptor(
        "hmyv2_getDelegationsByDelegatorByBlockNumber",
        (
            one_address("delegator_address"),
            positive_int("block_number", slot=1),
        ),
        STAKING_DELEGATION,
        "Delegations made by a delegator at a block.",
    ),
    MethodDescriptor(
        "hmyv2_getDelegationsByValidator",
        (one_address("validator_address"),),
        STAKING_DELEGATION,
        "Delegations received by a validator.",
    ),
    # Staking -> validator
    _no_params("hmyv2_getAllValidatorAddresses", STAKING_VALIDATOR, "Addresses of all validators."),
    MethodDescriptor(
        "hmyv2_getAllValidatorInformation",
        (page_number(),),
        STAKING_VALIDATOR,
        "One page of validator information.",
    ),
    MethodDescriptor(
        "hmyv2_getAllValidatorInformationByBlockNumber",
        (
            page_number(),
            positive_int("block_number", slot=1),
        ),
        STAKING_VALIDATOR,
        "One page of validator information at a block.",
    ),
    _no_params("hmyv2_getElectedValidatorAddresses", STAKING_VALIDATOR, "Addresses of elected validators."),
    MethodDescriptor(
        "hmyv2_getValidatorInformation",
        (one_address("validator_address"),),
        STAKING_VALIDATOR,
        "Information about one validator.",
    ),
    # Staking -> network
    _no_params("hmyv2_getCurrentUtilityMetrics", STAKING_NETWORK, "Current utility metrics."),
    _no_params("hmyv2_getMedianRawStakeSnapshot", STAKING_NETWORK, "Median raw stake snapshot."),
    _no_params("hmyv2_getStakingNetworkInfo", STAKING_NETWORK, "Staking network information."),
    _no_params("hmyv2_getSuperCommittees", STAKING_NETWORK, "Current and previous committees."),
    # Transaction -> cross shard
    MethodDescriptor(
        "hmyv2_getCXReceiptByHash",
        (hex_hash("tx_hash", label="cross shard transaction hash"),),
        TX_CROSS_SHARD,
        "Cross-shard receipt by transaction hash.",
    ),
    _no_params("hmyv2_getPendingCXReceipts", TX_CROSS_SHARD, "Pending cross-shard receipts."),
    MethodDescriptor(
        "hmyv2_resendCx",
        (hex_hash("tx_hash", label="cross shard transaction hash"),),
        TX_CROSS_SHARD,
        "Re-send a cross-shard receipt.",
    ),
    # Transaction -> pool
    _no_params("hmyv2_getPoolStats", TX_POOL, "Transaction pool statistics."),
    _no_params("hmyv2_pendingStakingTransactions", TX_POOL, "Pending staking transactions."),
    _no_params("hmyv2_pendingTransactions", TX_POOL, "Pending plain transactions."),
    # Transaction -> staking
    _no_params("hmyv2_getCurrentStakingErrorSink", TX_STAKING, "Recent staking transaction errors."),
    MethodDescriptor(
        "hmyv2_getStakingTransactionByBlockNumberAndIndex",
        (
            positive_int("block_number"),
            non_negative_int("tx_index", slot=1, label="transaction index"),
        ),
        TX_STAKING,
        "Staking transaction by block number and index.",
    ),
    MethodDescriptor(
        "hmyv2_getStakingTransactionByBlockHashAndIndex",
        (
            hex_hash("block_hash"),
            non_negative_int("tx_index", slot=1, label="transaction index"),
        ),
        TX_STAKING,
        "Staking transaction by block hash and index.",
    ),
    MethodDescriptor(
        "hmyv2_getStakingTransactionByHash",
        (hex_hash("tx_hash", label="transaction hash"),),
        TX_STAKING,
        "Staking transaction by hash.",
    ),
    MethodDescriptor(
        "hmyv2_sendRawStakingTransaction",
        (hex_blob("raw_transaction", label="raw transaction"),),
        TX_STAKING,
        "Submit a signed staking transaction.",
    ),
    # Transaction -> transfer
    _no_params("hmyv2_getCurrentTransactionErrorSink", TX_TRANSFER, "Recent transaction errors."),
    MethodDescriptor(
        "hmyv2_getTransactionByBlockHashAndIndex",
        (
            hex_hash("block_hash"),
            non_negative_int("tx_index", slot=1, label="transaction index"),
        ),
        TX_TRANSFER,
        "Transaction by block hash and index.",
    ),
    MethodDescriptor(
        "hmyv2_getTransactionByBlockNumberAndIndex",
        (
            positive_int("block_number"),
            non_negative_int("tx_index", slot=1, label="transaction index"),
        ),
        TX_TRANSFER,
        "Transaction by block number and index.",
    ),
    MethodDescriptor(
        "hmyv2_getTransactionByHash",
        (hex_hash("tx_hash", label="transaction hash"),),
        TX_TRANSFER,
        "Transaction by hash.",
    ),
    MethodDescriptor(
        "hmyv2_getTransactionReceipt",
        (hex_hash("tx_hash", label="transaction hash"),),
        TX_TRANSFER,
        "Transaction receipt by hash.",
    ),
    MethodDescriptor(
        "hmyv2_sendRawTransaction",
        (hex_blob("raw_transaction", label="raw transaction"),),
        TX_TRANSFER,
        "Submit a signed transaction.",
    ),
    # Blockchain -> network
    _no_params("hmyv2_blockNumber", CHAIN_NETWORK, "Current block number."),
    _no_params("hmyv2_getCirculatingSupply", CHAIN_NETWORK, "Circulating supply of ONE."),
    _no_params("hmyv2_getEpoch", CHAIN_NETWORK, "Current epoch."),
    MethodDescriptor(
        "hmyv2_epochLastBlock",
        (positive_int("epoch"),),
        CHAIN_NETWORK,
        "Last block of an epoch.",
    ),
    _no_params("hmyv2_getLastCrossLinks", CHAIN_NETWORK, "Last cross links."),
    _no_params("hmyv2_getPendingCrossLinks", CHAIN_NETWORK, "Pending cross links."),
    _no_params("hmyv2_getLeader", CHAIN_NETWORK, "Current leader address."),
    _no_params("hmyv2_gasPrice", CHAIN_NETWORK, "Current gas price."),
    _no_params("hmyv2_getShardingStructure", CHAIN_NETWORK, "Sharding structure."),
    _no_params("hmyv2_getTotalSupply", CHAIN_NETWORK, "Total supply of ONE."),
    MethodDescriptor(
        "hmyv2_getValidators",
        (positive_int("epoch"),),
        CHAIN_NETWORK,
        "Validators of an epoch.",
    ),
    MethodDescriptor(
        "hmyv2_getValidatorKeys",
        (positive_int("epoch"),),
        CHAIN_NETWORK,
        "Validator BLS keys of an epoch.",
    ),
    # Blockchain -> node
    _no_params("hmyv2_getCurrentBadBlocks", CHAIN_NODE, "Bad blocks held by the node."),
    _no_params("hmyv2_getNodeMetadata", CHAIN_NODE, "Node metadata."),
    _no_params("hmyv2_protocolVersion", CHAIN_NODE, "Protocol version."),
    _no_params("net_peerCount", CHAIN_NODE, "Number of connected peers."),
    # Blockchain -> blocks
    MethodDescriptor(
        "hmyv2_getBlocks",
        (
            positive_int("start_block", label="starting block number"),
            positive_int("end_block", slot=1, label="ending block number"),
            *_block_flags(2, "full_tx", "with_signers", "incl_staking"),
        ),
        CHAIN_BLOCKS,
        "Blocks in a range.",
    ),
    MethodDescriptor(
        "hmyv2_getBlockByNumber",
        (
            positive_int("block_number"),
            *_block_flags(1, "full_tx", "incl_tx", "with_signers", "incl_staking"),
        ),
        CHAIN_BLOCKS,
        "Block by number.",
    ),
    MethodDescriptor(
        "hmyv2_getBlockByHash",
        (
            hex_hash("block_hash"),
            *_block_flags(1, "full_tx", "incl_tx", "with_signers", "incl_staking"),
        ),
        CHAIN_BLOCKS,
        "Block by hash.",
    ),
    MethodDescriptor(
        "hmyv2_getBlockSigners",
        (positive_int("block_number"),),
        CHAIN_BLOCKS,
        "Signers of a block.",
    ),
    MethodDescriptor(
        "hmyv2_getBlockSignerKeys",
        (positive_int("block_number"),),
        CHAIN_BLOCKS,
        "BLS keys that signed a block.",
    ),
    MethodDescriptor(
        "hmyv2_getBlockTransactionCountByNumber",
        (positive_int("block_number"),),
        CHAIN_BLOCKS,
        "Transaction count of a block by number.",
    ),
    MethodDescriptor(
        "hmyv2_getBlockTransactionCountByHash",
        (hex_hash("block_hash"),),
        CHAIN_BLOCKS,
        "Transaction count of a block by hash.",
    ),
    MethodDescriptor(
        "hmyv2_getHeaderByNumber",
        (positive_int("block_number"),),
        CHAIN_BLOCKS,
        "Block header by number.",
    ),
    _no_params("hmyv2_getLatestChainHeaders", CHAIN_BLOCKS, "Latest beacon and shard headers."),
    _no_params("hmyv2_latestHeader", CHAIN_BLOCKS, "Latest header."),
    MethodDescriptor(
        "hmyv2_isBlockSigner",
        (
            one_address("validator_address", slot=1),
            positive_int("block_number", slot=0),
        ),
        CHAIN_BLOCKS,
        "Whether an address signed a block.",
    ),
    # Account
    MethodDescriptor(
        "hmyv2_getBalance",
        (one_address("address"),),
        ACCOUNT,
        "Balance of an address.",
    ),
    MethodDescriptor(
        "hmyv2_getBalanceByBlockNumber",
        (
            one_address("address"),
            positive_int("block_number", slot=1),
        ),
        ACCOUNT,
        "Balance of an address at a block.",
    ),
    MethodDescriptor(
        "hmyv2_getStakingTransactionsCount",
        (
            one_address("address"),
            one_of("tx_type", TX_TYPES, slot=1, label="transaction type"),
        ),
        ACCOUNT,
        "Number of staking transactions of an address.",
    ),
    _history("hmyv2_getStakingTransactionsHistory", ACCOUNT, "Staking transaction history of an address."),
    MethodDescriptor(
        "hmyv2_getTransactionsCount",
        (
            one_address("address"),
            one_of("tx_type", TX_TYPES, required=False, default="ALL", slot=1, label="transaction type"),
        ),
        ACCOUNT,
        "Number of transactions of an address.",
    ),
    _history("hmyv2_getTransactionsHistory", ACCOUNT, "Transaction history of an address."),
)

REGISTRY = MethodRegistry(DESCRIPTORS)
