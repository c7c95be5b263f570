"""Uniswap V2 router ABI.

Trader Joe names its native-coin methods with AVAX instead of ETH, so the
swap entries are generated for both spellings.
"""


def _swap_methods(native: str) -> list:
    path = {"name": "path", "type": "address[]"}
    to = {"name": "to", "type": "address"}
    deadline = {"name": "deadline", "type": "uint256"}
    amounts = {"name": "amounts", "type": "uint256[]"}
    return [
        {
            "inputs": [{"name": "amountOutMin", "type": "uint256"}, path, to, deadline],
            "name": f"swapExact{native}ForTokens",
            "outputs": [amounts],
            "stateMutability": "payable",
            "type": "function",
        },
        {
            "inputs": [
                {"name": "amountIn", "type": "uint256"},
                {"name": "amountOutMin", "type": "uint256"},
                path,
                to,
                deadline,
            ],
            "name": f"swapExactTokensFor{native}",
            "outputs": [amounts],
            "stateMutability": "nonpayable",
            "type": "function",
        },
    ]


UNISWAP_V2_ROUTER_ABI = [
    {
        "inputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "path", "type": "address[]"},
        ],
        "name": "getAmountsOut",
        "outputs": [{"name": "amounts", "type": "uint256[]"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "amountOutMin", "type": "uint256"},
            {"name": "path", "type": "address[]"},
            {"name": "to", "type": "address"},
            {"name": "deadline", "type": "uint256"},
        ],
        "name": "swapExactTokensForTokens",
        "outputs": [{"name": "amounts", "type": "uint256[]"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    *_swap_methods("ETH"),
    *_swap_methods("AVAX"),
]
