from pathlib import Path

import pytest
from pydantic import ValidationError

from vechain.config import Config, generate_nonce
from vechain.exceptions import FieldValidationError
from vechain.network import MAINNET, SOLO, TESTNET, chain_tag, get_network


def test_known_networks() -> None:
    assert chain_tag("mainnet") == 0x4A
    assert chain_tag("testnet") == 0x27
    assert chain_tag("solo") == 0xF6
    assert get_network("solo") is SOLO


def test_unknown_network() -> None:
    with pytest.raises(FieldValidationError, match="unknown network"):
        get_network("ropsten")


def test_default_config() -> None:
    config = Config()

    assert config.network == "testnet"
    assert config.get_chain_tag() == TESTNET.chain_tag
    assert config.get_node_url() == TESTNET.default_node
    assert config.default_expiration == 32
    assert config.default_tx_type == "legacy"


def test_overrides() -> None:
    config = Config(
        network="mainnet",
        chain_tag=0x99,
        node_url="https://node.example.org/",
    )

    assert config.get_chain_tag() == 0x99
    assert config.get_node_url() == "https://node.example.org"
    assert Config(network="mainnet").get_node_url() == MAINNET.default_node


@pytest.mark.parametrize(
    "kwargs",
    [
        {"network": "ropsten"},
        {"chain_tag": 256},
        {"node_url": "not a url"},
        {"default_expiration": 0},
        {"default_gas_price_coef": 256},
        {"default_tx_type": "eip1559"},
    ],
)
def test_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        Config(**kwargs)


def test_load(tmp_path: Path) -> None:
    path = tmp_path / "vechain.yaml"
    path.write_text(
        "network: solo\n"
        "default_expiration: 720\n"
        "default_tx_type: dynamic_fee\n"
    )

    config = Config.load(path)

    assert config.get_chain_tag() == 0xF6
    assert config.get_node_url() == "http://localhost:8669"
    assert config.default_expiration == 720
    assert config.default_tx_type == "dynamic_fee"


def test_load_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "vechain.yaml"
    path.write_text("")
    assert Config.load(path) == Config()


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Config.load(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "content",
    ["network: ropsten\n", "- testnet\n", "chain_tag: -1\n"],
)
def test_load_invalid_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "vechain.yaml"
    path.write_text(content)

    with pytest.raises(ValueError, match="Invalid configuration"):
        Config.load(path)


def test_generate_nonce() -> None:
    nonces = {generate_nonce() for _ in range(8)}
    assert all(0 <= nonce < 2**64 for nonce in nonces)
    assert len(nonces) > 1
