# Known emitter registry
# Maps (environment, chain id) to the emitter address registered for each
# payload family. Addresses are 32-byte, lower-case hex without 0x prefix.
# EVM contracts are listed with their 20-byte address and left-padded.

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

ENVIRONMENTS = ("MAINNET", "TESTNET")

TOKEN_BRIDGE = "token-bridge"
NFT_BRIDGE = "nft-bridge"
RELAYER = "relayer"

# Order decides the winner when one address is registered for several families
FAMILY_PRECEDENCE = (TOKEN_BRIDGE, NFT_BRIDGE, RELAYER)


def _evm(address: str) -> str:
    """Left-pad a 20-byte EVM address to the 32-byte emitter form"""
    return address.lower().replace("0x", "").rjust(64, "0")


# Mainnet token bridge emitters
MAINNET_TOKEN_BRIDGE = {
    1: "ec7372995d5cc8732397fb0ad35c0121e0eaa90d26f828a534cab54391b3a4f5",  # Solana
    2: _evm("0x3ee18B2214AFF97000D974cf647E7C347E8fa585"),  # Ethereum
    3: _evm("0x7cf7b764e38a0a5e967972c1df77d432510564e2"),  # Terra Classic
    4: _evm("0xB6F6D86a8f9879A9c87f643768d9efc38c1Da6E7"),  # BSC
    5: _evm("0x5a58505a96D1dbf8dF91cB21B54419FC36e93fdE"),  # Polygon
    6: _evm("0x0e082F06FF657D94310cB8cE8B0D9a04541d8052"),  # Avalanche
    7: _evm("0x5848C791e09901b40A9Ef749f2a6735b418d7564"),  # Oasis
    10: _evm("0x7C9Fc5741288cDFdD83CeB07f3ea7e22618D79D2"),  # Fantom
    14: _evm("0x796Dff6D74F3E27060B71255Fe517BFb23C93eed"),  # Celo
    16: _evm("0xB1731c586ca89a23809861c6103F0b96B3F57D92"),  # Moonbeam
    23: _evm("0x0b2402144Bb366A632D14B83F244D2e0e21bD39c"),  # Arbitrum
    24: _evm("0x1D68124e65faFC907325e3EDbF8c4d84499DAa8b"),  # Optimism
    30: _evm("0x8d2de8d2f73F1F4cAB472AC9A881C9b123C79627"),  # Base
}

# Mainnet NFT bridge emitters
MAINNET_NFT_BRIDGE = {
    1: "0def15a24423e1edd1a5ab16f557b9060303ddbab8c803d2ee48f4b78a1cfd6b",  # Solana
    2: _evm("0x6FFd7EdE62328b3Af38FCD61461Bbfc52F5651fE"),  # Ethereum
    4: _evm("0x5a58505a96D1dbf8dF91cB21B54419FC36e93fdE"),  # BSC
    5: _evm("0x90BBd86a6Fe93D3bc3ed6335935447E75fAb7fCf"),  # Polygon
    6: _evm("0xf7B6737Ca9c4e08aE573F75A97B73D7a813f5De5"),  # Avalanche
}

# Mainnet generic relayer emitters
_MAINNET_RELAYER_ADDRESS = _evm("0x27428DD2d3DD32A4D7f7C497eAaa23130d894911")
MAINNET_RELAYER = {
    chain: _MAINNET_RELAYER_ADDRESS
    for chain in (2, 4, 5, 6, 10, 14, 16, 23, 24, 30)
}

# Testnet token bridge emitters
TESTNET_TOKEN_BRIDGE = {
    1: "3b26409f8aaded3f5ddca184695aa6a0fa829b0c85caf84856324896d214ca98",  # Solana devnet
    2: _evm("0xF890982f9310df57d00f659cf4fd87e65adEd8d7"),  # Goerli
    4: _evm("0x9dcF9D205C9De35334D646BeE44b2D2859712A09"),  # BSC testnet
    5: _evm("0x377D55a7928c046E18eEbb61977e714d2a76472a"),  # Mumbai
    6: _evm("0x61E44E506Ca5659E6c0bba9b678586fA2d729756"),  # Fuji
}

# Testnet NFT bridge emitters
TESTNET_NFT_BRIDGE = {
    2: _evm("0xD8E4C2DbDd2e2bd8F1336EA691dBFF6952B1a6eB"),  # Goerli
    6: _evm("0xD601BAf2EEE3C028344471684F6b27E789D9075D"),  # Fuji
}

# Testnet generic relayer emitters
_TESTNET_RELAYER_ADDRESS = _evm("0x80aC94316391752A193C1c47E27D382b507c93F3")
TESTNET_RELAYER = {
    chain: _TESTNET_RELAYER_ADDRESS
    for chain in (2, 4, 5, 6, 14, 16, 23, 24, 30)
}

RegistryTable = Mapping[str, Mapping[int, Mapping[str, str]]]


def build_registry(sources: Dict[str, Dict[str, Dict[int, str]]]) -> RegistryTable:
    """Fold per-family tables into a read-only [env][chain] -> {family: address}"""
    table = {}
    for env, families in sources.items():
        by_chain: Dict[int, Dict[str, str]] = {}
        for family, addresses in families.items():
            if family not in FAMILY_PRECEDENCE:
                raise ValueError(f"Unknown payload family: {family}")
            for chain, address in addresses.items():
                by_chain.setdefault(int(chain), {})[family] = address.lower()
        table[env.upper()] = MappingProxyType(
            {chain: MappingProxyType(entry) for chain, entry in by_chain.items()}
        )
    return MappingProxyType(table)


_registry = build_registry({
    "MAINNET": {
        TOKEN_BRIDGE: MAINNET_TOKEN_BRIDGE,
        NFT_BRIDGE: MAINNET_NFT_BRIDGE,
        RELAYER: MAINNET_RELAYER,
    },
    "TESTNET": {
        TOKEN_BRIDGE: TESTNET_TOKEN_BRIDGE,
        NFT_BRIDGE: TESTNET_NFT_BRIDGE,
        RELAYER: TESTNET_RELAYER,
    },
})


def registry() -> RegistryTable:
    return _registry


def replace_registry(table: RegistryTable) -> RegistryTable:
    """Swap in a whole new table; readers see either the old or the new one"""
    global _registry
    previous = _registry
    _registry = table
    return previous


def families_for(env: str, chain: int, address: bytes) -> Tuple[str, ...]:
    """Families whose registered emitter is exactly ``address``, in precedence order"""
    table = _registry
    env = env.upper()
    if env not in table:
        raise ValueError(f"Unknown environment: {env}")
    entry = table[env].get(chain)
    if not entry:
        return ()
    address_hex = address.hex().lower()
    return tuple(
        family for family in FAMILY_PRECEDENCE
        if entry.get(family) == address_hex
    )
