"""
Defaults used when building transactions.

Values can come from keyword arguments or from a YAML file:

.. code-block:: yaml

    network: testnet
    node_url: https://testnet.veblocks.net
    default_expiration: 720
    default_tx_type: dynamic_fee
"""

import secrets
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, HttpUrl, ValidationError

from vechain.network import NETWORKS
from vechain.network import chain_tag as network_chain_tag

NONCE_BITS = 64


class Config(BaseModel):
    """
    Network selection and transaction defaults.

    Attributes:
    - network (str): Name of the network, one of `mainnet`, `testnet` and
      `solo`.
    - chain_tag (int): Overrides the chain tag of `network`, for private
      networks.
    - node_url (HttpUrl): Overrides the default node of `network`.
    - default_expiration (int): Blocks after the block reference during
      which a transaction stays valid.
    - default_gas_price_coef (int): Gas price coefficient of legacy
      transactions.
    - default_max_priority_fee_per_gas (int), default_max_fee_per_gas (int):
      Fee fields of dynamic-fee transactions, in wei.
    - default_tx_type (str): Format used when nothing else decides it.
    """

    network: Literal["mainnet", "testnet", "solo"] = "testnet"
    chain_tag: Optional[int] = Field(default=None, ge=0, le=0xFF)
    node_url: Optional[HttpUrl] = None
    default_expiration: int = Field(default=32, gt=0, le=0xFFFFFFFF)
    default_gas_price_coef: int = Field(default=0, ge=0, le=0xFF)
    default_max_priority_fee_per_gas: int = Field(default=400_000, ge=0)
    default_max_fee_per_gas: int = Field(default=400_000, ge=0)
    default_tx_type: Literal["legacy", "dynamic_fee"] = "legacy"

    def get_chain_tag(self) -> int:
        """
        Chain tag of the configured network, honouring the override.
        """
        if self.chain_tag is not None:
            return self.chain_tag
        return network_chain_tag(self.network)

    def get_node_url(self) -> str:
        """
        URL of the node to talk to, honouring the override.
        """
        if self.node_url is not None:
            return str(self.node_url).rstrip("/")
        return NETWORKS[self.network].default_node

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Config":
        """
        Read and validate a YAML configuration file.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"The configuration file '{path}' does not exist."
            )

        with path.open("r") as file:
            config_data = yaml.safe_load(file) or {}
        if not isinstance(config_data, dict):
            raise ValueError(
                f"Invalid configuration: expected a mapping in '{path}'"
            )
        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e


def generate_nonce() -> int:
    """
    Random 8 byte transaction nonce.
    """
    return secrets.randbits(NONCE_BITS)
