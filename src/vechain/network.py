"""
Known networks, their chain tags and public nodes.

The chain tag is the last byte of the genesis block id. Transactions carry
it so that a transaction signed for one network is rejected by another.
"""

from dataclasses import dataclass
from typing import Dict

from vechain.exceptions import FieldValidationError


@dataclass(frozen=True)
class Network:
    """
    A VeChainThor network.
    """

    name: str
    chain_tag: int
    default_node: str


MAINNET = Network("mainnet", 0x4A, "https://mainnet.veblocks.net")
TESTNET = Network("testnet", 0x27, "https://testnet.veblocks.net")
SOLO = Network("solo", 0xF6, "http://localhost:8669")

NETWORKS: Dict[str, Network] = {
    network.name: network for network in (MAINNET, TESTNET, SOLO)
}


def get_network(name: str) -> Network:
    """
    Look up a network by name.
    """
    try:
        return NETWORKS[name]
    except KeyError as e:
        raise FieldValidationError(
            f"unknown network `{name}`, expected one of "
            f"{', '.join(sorted(NETWORKS))}"
        ) from e


def chain_tag(name: str) -> int:
    """
    Chain tag of the network called `name`.
    """
    return get_network(name).chain_tag
