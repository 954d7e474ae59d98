import pytest

from vaa_inspector import known_emitters
from vaa_inspector.known_emitters import (
    NFT_BRIDGE,
    RELAYER,
    TOKEN_BRIDGE,
    build_registry,
    families_for,
    registry,
    replace_registry,
)
from vaa_builders import ETH_RELAYER, ETH_TOKEN_BRIDGE


def test_addresses_are_32_byte_lower_hex():
    for env, chains in registry().items():
        for chain, entry in chains.items():
            for family, address in entry.items():
                assert len(address) == 64, (env, chain, family)
                assert address == address.lower()
                bytes.fromhex(address)


def test_evm_addresses_are_left_padded():
    assert known_emitters.MAINNET_TOKEN_BRIDGE[2] == "000000000000000000000000" + "3ee18b2214aff97000d974cf647e7c347e8fa585"


def test_registry_is_read_only():
    table = registry()
    with pytest.raises(TypeError):
        table["MAINNET"] = {}
    with pytest.raises(TypeError):
        table["MAINNET"][2] = {}
    with pytest.raises(TypeError):
        table["MAINNET"][2][TOKEN_BRIDGE] = "00" * 32


def test_families_for():
    assert families_for("MAINNET", 2, ETH_TOKEN_BRIDGE) == (TOKEN_BRIDGE,)
    assert families_for("MAINNET", 23, ETH_RELAYER) == (RELAYER,)
    assert families_for("MAINNET", 2, bytes(32)) == ()
    assert families_for("MAINNET", 65000, ETH_TOKEN_BRIDGE) == ()


def test_families_for_unknown_environment():
    with pytest.raises(ValueError):
        families_for("LOCALNET", 2, ETH_TOKEN_BRIDGE)


def test_precedence_order():
    shared = "ab" * 32
    table = build_registry({
        "TESTNET": {
            RELAYER: {4: shared},
            NFT_BRIDGE: {4: shared},
            TOKEN_BRIDGE: {4: shared},
        },
    })
    previous = replace_registry(table)
    try:
        assert families_for("TESTNET", 4, bytes.fromhex(shared)) == (TOKEN_BRIDGE, NFT_BRIDGE, RELAYER)
    finally:
        replace_registry(previous)


def test_replace_registry_swaps_whole_table(restore_registry):
    table = build_registry({"MAINNET": {RELAYER: {7: "cd" * 32}}})

    previous = replace_registry(table)

    assert previous is restore_registry
    assert registry() is table
    assert families_for("MAINNET", 2, ETH_TOKEN_BRIDGE) == ()
    assert families_for("MAINNET", 7, bytes.fromhex("cd" * 32)) == (RELAYER,)


def test_build_registry_rejects_unknown_family():
    with pytest.raises(ValueError):
        build_registry({"MAINNET": {"wrapped-gas": {2: "00" * 32}}})
