"""
Utility functions used by the codec and the transaction model.
"""
