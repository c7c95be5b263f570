"""XY Finance chain and contract tables."""

from crossroute.chains import Blockchain

XY_SUPPORTED_BLOCKCHAINS = (
    Blockchain.ETHEREUM,
    Blockchain.BSC,
    Blockchain.POLYGON,
    Blockchain.AVALANCHE,
    Blockchain.ARBITRUM,
    Blockchain.OPTIMISM,
    Blockchain.FANTOM,
)

# XY addresses the native coin with this placeholder instead of the zero address
XY_NATIVE_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# XSwapper gateway, same deployment address on every supported chain
XY_CONTRACT_ADDRESS = {
    blockchain: "0x4315f344a905dC21a08189A117eFd6E1fcA37D57"
    for blockchain in XY_SUPPORTED_BLOCKCHAINS
}
