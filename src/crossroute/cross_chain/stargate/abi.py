"""Stargate contract ABIs (router, RouterETH, fee library, factory, pool)."""

_LZ_TX_OBJ = {
    "name": "_lzTxParams",
    "type": "tuple",
    "components": [
        {"name": "dstGasForCall", "type": "uint256"},
        {"name": "dstNativeAmount", "type": "uint256"},
        {"name": "dstNativeAddr", "type": "bytes"},
    ],
}

STARGATE_ROUTER_ABI = [
    {
        "inputs": [],
        "name": "factory",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_dstChainId", "type": "uint16"},
            {"name": "_functionType", "type": "uint8"},
            {"name": "_toAddress", "type": "bytes"},
            {"name": "_transferAndCallPayload", "type": "bytes"},
            _LZ_TX_OBJ,
        ],
        "name": "quoteLayerZeroFee",
        "outputs": [
            {"name": "", "type": "uint256"},
            {"name": "", "type": "uint256"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_dstChainId", "type": "uint16"},
            {"name": "_srcPoolId", "type": "uint256"},
            {"name": "_dstPoolId", "type": "uint256"},
            {"name": "_refundAddress", "type": "address"},
            {"name": "_amountLD", "type": "uint256"},
            {"name": "_minAmountLD", "type": "uint256"},
            _LZ_TX_OBJ,
            {"name": "_to", "type": "bytes"},
            {"name": "_payload", "type": "bytes"},
        ],
        "name": "swap",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]

STARGATE_ROUTER_ETH_ABI = [
    {
        "inputs": [
            {"name": "_dstChainId", "type": "uint16"},
            {"name": "_refundAddress", "type": "address"},
            {"name": "_toAddress", "type": "bytes"},
            {"name": "_amountLD", "type": "uint256"},
            {"name": "_minAmountLD", "type": "uint256"},
        ],
        "name": "swapETH",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]

STARGATE_FEE_LIBRARY_ABI = [
    {
        "inputs": [
            {"name": "_srcPoolId", "type": "uint256"},
            {"name": "_dstPoolId", "type": "uint256"},
            {"name": "_dstChainId", "type": "uint16"},
            {"name": "_from", "type": "address"},
            {"name": "_amountSD", "type": "uint256"},
        ],
        "name": "getFees",
        "outputs": [
            {
                "name": "s",
                "type": "tuple",
                "components": [
                    {"name": "amount", "type": "uint256"},
                    {"name": "eqFee", "type": "uint256"},
                    {"name": "eqReward", "type": "uint256"},
                    {"name": "lpFee", "type": "uint256"},
                    {"name": "protocolFee", "type": "uint256"},
                    {"name": "lkbRemove", "type": "uint256"},
                ],
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

STARGATE_FACTORY_ABI = [
    {
        "inputs": [{"name": "", "type": "uint256"}],
        "name": "getPool",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

STARGATE_POOL_ABI = [
    {
        "inputs": [],
        "name": "token",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]
