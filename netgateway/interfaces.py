"""Lookup of network interfaces and their addresses."""

from __future__ import annotations

import ipaddress
import socket
from abc import ABC, abstractmethod
from typing import List, Union

import psutil

IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]


class InterfaceGetter(ABC):
    """Source of interface information; replaceable for testing."""

    @abstractmethod
    def interface_by_name(self, name: str) -> str:
        """Return the interface called *name*, raising LookupError if absent."""

    @abstractmethod
    def addrs(self, iface: str) -> List[object]:
        """Return the addresses assigned to *iface*."""


def _prefix_length(netmask: str | None, max_bits: int) -> int:
    if not netmask:
        return max_bits
    try:
        mask = int(ipaddress.ip_address(netmask.split("%", 1)[0]))
    except ValueError:
        return max_bits
    return bin(mask).count("1")


def _to_interface(family: int, address: str, netmask: str | None) -> IPInterface | None:
    address = address.split("%", 1)[0]
    max_bits = 32 if family == socket.AF_INET else 128
    try:
        return ipaddress.ip_interface(
            f"{address}/{_prefix_length(netmask, max_bits)}"
        )
    except ValueError:
        return None


class SystemInterfaceGetter(InterfaceGetter):
    """Reads interfaces and addresses from the running system."""

    def interface_by_name(self, name: str) -> str:
        """Return *name* if the system has such an interface."""
        if name not in psutil.net_if_addrs():
            raise LookupError(f"no such network interface: {name!r}")
        return name

    def addrs(self, iface: str) -> List[object]:
        """Return the IP addresses of *iface* as ipaddress interface objects."""
        entries = psutil.net_if_addrs().get(iface)
        if entries is None:
            raise LookupError(f"no such network interface: {iface!r}")
        result: List[object] = []
        for entry in entries:
            if entry.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            converted = _to_interface(entry.family, entry.address, entry.netmask)
            if converted is not None:
                result.append(converted)
        return result