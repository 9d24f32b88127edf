"""
Cryptographic functions used by the transaction signing engine.
"""
