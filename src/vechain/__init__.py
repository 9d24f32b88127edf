"""
Client-side encoding and signing of VeChainThor transactions.

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Transactions are built from clauses, encoded with a schema-driven RLP codec,
signed with secp256k1 and optionally co-signed by a fee delegator.
"""

__version__ = "0.3.0"
