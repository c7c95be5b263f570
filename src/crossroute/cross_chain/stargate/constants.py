"""Stargate chain, pool and contract tables.

Pool fee values are expressed in each pool's shared decimals (STARGATE_POOL_DECIMALS),
never in the token's own decimals.
"""

from typing import Optional

from crossroute.chains import Blockchain
from crossroute.cross_chain.proxy import PROXY_CONTRACT_ADDRESS

STARGATE_SUPPORTED_BLOCKCHAINS = (
    Blockchain.ETHEREUM,
    Blockchain.BSC,
    Blockchain.AVALANCHE,
    Blockchain.POLYGON,
    Blockchain.ARBITRUM,
    Blockchain.OPTIMISM,
    Blockchain.FANTOM,
)

# LayerZero endpoint ids
STARGATE_CHAIN_ID = {
    Blockchain.ETHEREUM: 101,
    Blockchain.BSC: 102,
    Blockchain.AVALANCHE: 106,
    Blockchain.POLYGON: 109,
    Blockchain.ARBITRUM: 110,
    Blockchain.OPTIMISM: 111,
    Blockchain.FANTOM: 112,
}

USDC = "USDC"
USDT = "USDT"
DAI = "DAI"
BUSD = "BUSD"
FRAX = "FRAX"
USDD = "USDD"
ETH = "ETH"
SUSD = "sUSD"
LUSD = "LUSD"
MAI = "MAI"
METIS = "METIS"
M_USDT = "m.USDT"

STARGATE_POOL_ID = {
    USDC: 1,
    USDT: 2,
    DAI: 3,
    BUSD: 5,
    FRAX: 7,
    USDD: 11,
    ETH: 13,
    SUSD: 14,
    LUSD: 15,
    MAI: 16,
    METIS: 17,
    M_USDT: 19,
}

STARGATE_POOL_DECIMALS = {
    USDC: 6,
    USDT: 6,
    DAI: 6,
    BUSD: 6,
    FRAX: 6,
    USDD: 6,
    ETH: 18,
    SUSD: 6,
    LUSD: 6,
    MAI: 6,
    METIS: 18,
    M_USDT: 6,
}

STARGATE_BLOCKCHAIN_SUPPORTED_POOLS = {
    Blockchain.ETHEREUM: [1, 2, 3, 7, 11, 13, 14, 15, 16],
    Blockchain.BSC: [2, 5, 11, 16],
    Blockchain.AVALANCHE: [1, 2, 7, 16],
    Blockchain.POLYGON: [1, 2, 3, 16],
    Blockchain.ARBITRUM: [1, 2, 7, 13, 15, 16],
    Blockchain.OPTIMISM: [1, 3, 7, 13, 14, 15, 16],
    Blockchain.FANTOM: [1],
}

# Which destination symbols a source symbol can be bridged into
ALLOWED_SYMBOL_PATHS = {
    USDC: (USDC, USDT, BUSD),
    USDT: (USDC, USDT, BUSD, M_USDT),
    BUSD: (USDC, USDT, BUSD),
    M_USDT: (USDT, M_USDT),
    DAI: (DAI,),
    FRAX: (FRAX,),
    USDD: (USDD,),
    ETH: (ETH,),
    SUSD: (SUSD,),
    LUSD: (LUSD,),
    MAI: (MAI,),
    METIS: (METIS,),
}

STARGATE_ROUTER_ADDRESS = {
    Blockchain.ETHEREUM: "0x8731d54E9D02c286767d56ac03e8037C07e01e98",
    Blockchain.BSC: "0x4a364f8c717cAAD9A442737Eb7b8A55cc6cf18D8",
    Blockchain.AVALANCHE: "0x45A01E4e04F14f7A4a6702c74187c5F6222033cd",
    Blockchain.POLYGON: "0x45A01E4e04F14f7A4a6702c74187c5F6222033cd",
    Blockchain.ARBITRUM: "0x53Bf833A5d6c4ddA888F69c22C88C9f356a41614",
    Blockchain.OPTIMISM: "0xB0D502E938ed5f4df2E681fE6E419ff29631d62b",
    Blockchain.FANTOM: "0xAf5191B0De278C7286d6C7CC6ab6BB8A73bA2Cd6",
}

# Destination contract that receives bridged funds and runs the swap payload
STARGATE_RELAYER_ADDRESS = {
    blockchain: PROXY_CONTRACT_ADDRESS for blockchain in STARGATE_SUPPORTED_BLOCKCHAINS
}

# Entry point for native ETH transfers
STARGATE_ROUTER_ETH_ADDRESS = {
    Blockchain.ETHEREUM: "0x150f94B44927F078737562f0fcF3C95c01Cc2376",
    Blockchain.ARBITRUM: "0xbf22f0f184bCcbeA268dF387a49fF5238dD23E40",
    Blockchain.OPTIMISM: "0xB49c4e680174E331CB0A7fF3Ab58afC9738d5F8b",
}

STARGATE_FEE_LIBRARY_ADDRESS = {
    Blockchain.ETHEREUM: "0x8C3085D9a554884124C998CDB7f6d7219E9C1e6F",
    Blockchain.BSC: "0xCA6522116e8611A346D53Cc2005AC4192e3fc2BC",
    Blockchain.AVALANCHE: "0x5E8eC15ACB5Aa94D5f0589E54441b31c5e0B992d",
    Blockchain.POLYGON: "0xb279b324Ea5648bE6402ABc727173A225383494C",
    Blockchain.ARBITRUM: "0x1cF31666c06ac3401ed0C1c6346C4A9425dd7De4",
    Blockchain.OPTIMISM: "0x505eCDF2f14Cd4f1f413d04624b009A449D38D7E",
    Blockchain.FANTOM: "0x616a68BD6DAd19e066661C7278611487d4072839",
}

# Gas reserved for the destination call when a swap payload is attached
DST_GAS_FOR_CALL = 750_000

# Stargate function type for swaps in quoteLayerZeroFee
TYPE_SWAP_REMOTE = 1

# Order in which destination transit tokens are tried for a destination swap
DST_TRANSIT_PREFERENCE = (USDC, USDT, BUSD)


def get_pool_id(symbol: str) -> Optional[int]:
    return STARGATE_POOL_ID.get(symbol)


def is_pool_supported(blockchain: Blockchain, symbol: str) -> bool:
    pool_id = get_pool_id(symbol)
    return pool_id is not None and pool_id in STARGATE_BLOCKCHAIN_SUPPORTED_POOLS.get(blockchain, [])


def _build_pool_mapping() -> dict:
    """from_chain -> from_symbol -> to_chain -> reachable to_symbols."""
    mapping = {}
    for from_chain in STARGATE_SUPPORTED_BLOCKCHAINS:
        for from_symbol, to_symbols in ALLOWED_SYMBOL_PATHS.items():
            if not is_pool_supported(from_chain, from_symbol):
                continue
            for to_chain in STARGATE_SUPPORTED_BLOCKCHAINS:
                if to_chain == from_chain:
                    continue
                reachable = [s for s in to_symbols if is_pool_supported(to_chain, s)]
                if reachable:
                    mapping.setdefault(from_chain, {}).setdefault(from_symbol, {})[to_chain] = reachable
    return mapping


STARGATE_POOL_MAPPING = _build_pool_mapping()
