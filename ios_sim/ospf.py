from __future__ import annotations

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv4Network


@dataclass(frozen=True)
class OspfNetwork:
    network: IPv4Network
    wildcard: IPv4Address
    area: int

    def description(self) -> str:
        return (
            f"{self.network.network_address.exploded} "
            f"{self.wildcard.exploded} area {self.area}"
        )


def wildcard_to_network(ip: str, wildcard: str) -> tuple[IPv4Network, IPv4Address]:
    """Convert an ``<ip> <wildcard>`` pair into the covered network."""

    wildcard_addr = IPv4Address(wildcard)
    mask = IPv4Address((~int(wildcard_addr)) & 0xFFFFFFFF)
    return IPv4Network(f"{ip}/{mask.exploded}", strict=False), wildcard_addr
