"""Supported networks."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NetworkInfo:
    name: str
    chain_id: int
    native_symbol: str


NETWORKS: dict[str, NetworkInfo] = {
    "Ethereum": NetworkInfo("Ethereum", 1, "ETH"),
    "Base": NetworkInfo("Base", 8453, "ETH"),
    "Arbitrum": NetworkInfo("Arbitrum", 42161, "ETH"),
    "Optimism": NetworkInfo("Optimism", 10, "ETH"),
}


def get_network(name: str) -> NetworkInfo | None:
    return NETWORKS.get(name)


def get_network_by_chain_id(chain_id: int) -> NetworkInfo | None:
    for network in NETWORKS.values():
        if network.chain_id == chain_id:
            return network
    return None
