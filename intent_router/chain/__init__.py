"""Chain access: ABIs, client protocol, signer and networks."""

from intent_router.chain.client import ChainClient, EventLog, Web3ChainClient
from intent_router.chain.networks import NETWORKS, NetworkInfo, get_network, get_network_by_chain_id
from intent_router.chain.signer import LocalAccountSigner

__all__ = [
    "NETWORKS",
    "ChainClient",
    "EventLog",
    "LocalAccountSigner",
    "NetworkInfo",
    "Web3ChainClient",
    "get_network",
    "get_network_by_chain_id",
]
