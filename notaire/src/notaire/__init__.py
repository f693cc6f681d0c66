"""
Notaire - asset ownership ledger with optional chain and content anchoring.
"""

__version__ = "0.1.0"
