"""
Intrinsic Gas
^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The intrinsic gas of a transaction is charged before any clause executes.
It covers the fixed transaction overhead, a per-clause overhead (higher for
contract creation) and the clause payload bytes.
"""

from typing import Iterable

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint

from vechain.clause import Clause

TX_GAS = Uint(5000)
CLAUSE_GAS = Uint(16000)
CLAUSE_GAS_CONTRACT_CREATION = Uint(48000)
TX_DATA_ZERO_GAS = Uint(4)
TX_DATA_NON_ZERO_GAS = Uint(68)


def data_gas(data: Bytes) -> Uint:
    """
    Gas charged for carrying `data` in a clause.
    """
    zeros = data.count(0)
    return (
        Uint(zeros) * TX_DATA_ZERO_GAS
        + Uint(len(data) - zeros) * TX_DATA_NON_ZERO_GAS
    )


def calculate_intrinsic_gas(clauses: Iterable[Clause]) -> Uint:
    """
    Calculates the gas that is charged before execution is started.

    Parameters
    ----------
    clauses :
        Clauses of the transaction.

    Returns
    -------
    gas : `ethereum_types.numeric.Uint`
        The intrinsic gas of a transaction carrying `clauses`.
    """
    total = TX_GAS
    for clause in clauses:
        if clause.to is None:
            total += CLAUSE_GAS_CONTRACT_CREATION
        else:
            total += CLAUSE_GAS
        total += data_gas(clause.data)
    return total
