"""Chain access — signing identity and the web3-backed client."""

from ddns.chain.client import ChainClient, SentTransaction
from ddns.chain.identity import derive_account

__all__ = ["ChainClient", "SentTransaction", "derive_account"]
