"""Via Protocol chain and contract tables."""

from crossroute.chains import Blockchain

VIA_SUPPORTED_BLOCKCHAINS = (
    Blockchain.ETHEREUM,
    Blockchain.BSC,
    Blockchain.POLYGON,
    Blockchain.AVALANCHE,
    Blockchain.ARBITRUM,
    Blockchain.OPTIMISM,
    Blockchain.FANTOM,
)

# Via entry contract; routes are quoted and built as if sent from it
VIA_CONTRACT_ADDRESS = "0x777777773fdd8b28bb03377d10fcea75ad9768da"

VIA_CONTRACT_ABI = [
    {
        "inputs": [],
        "name": "getAvailableRouters",
        "outputs": [{"name": "", "type": "address[]"}],
        "stateMutability": "view",
        "type": "function",
    },
]

ROUTES_PAGES_PATH = "/api/v2/routes/pages"
ROUTES_PATH = "/api/v2/routes"
BUILD_TX_PATH = "/api/v2/send/build-tx"
TOKEN_PRICE_PATH = "/token_price"

# Bridges recognised in the "cross" step of a route
BRIDGES = (
    "across",
    "anyswap",
    "celer",
    "connext",
    "hop",
    "hyphen",
    "multichain",
    "rango",
    "stargate",
    "synapse",
    "wormhole",
    "xy",
)
