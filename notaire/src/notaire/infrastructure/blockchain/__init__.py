"""
Blockchain adapters.
"""

from notaire.infrastructure.blockchain.evm_chain_client import EvmChainClient

__all__ = ["EvmChainClient"]
