"""Parsers for the route tables printed or exposed by various operating systems."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .errors import CantParseError, InvalidRouteFileFormatError, NoGatewayError
from .interfaces import InterfaceGetter, SystemInterfaceGetter

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
RouteOutput = Union[bytes, bytearray, str]

NS_DESTINATION = "Destination"
NS_FLAGS = "Flags"
NS_NETIF = "Netif"
NS_GATEWAY = "Gateway"
NS_INTERFACE = "Interface"

_SEPARATOR = "======="
_IPV4_PREFIX = re.compile(r"^(((25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)(\.|$)){4})")
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_HEX = re.compile(r"[0-9a-fA-F]+")

# Columns of /proc/net/route.
_LINUX_SEP = "\t"
_LINUX_DESTINATION = 1
_LINUX_GATEWAY = 2
_LINUX_MASK = 7
_LINUX_MIN_FIELDS = 11


@dataclass(frozen=True)
class WindowsRoute:
    """A default route from ``route print``: dotted gateway and interface IPs."""

    gateway: str
    interface: str


@dataclass(frozen=True)
class LinuxRoute:
    """A default route from /proc/net/route: interface name and hex gateway."""

    iface: str
    gateway: str


@dataclass(frozen=True)
class UnixRoute:
    """A default route from ``netstat -rn``: interface name and dotted gateway."""

    iface: str
    gateway: str


def _text(output: RouteOutput) -> str:
    if isinstance(output, (bytes, bytearray)):
        return bytes(output).decode("utf-8", errors="replace")
    return output


def _parse_ip(text: str) -> Optional[IPAddress]:
    if "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _atoi(text: str) -> int:
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid metric {text!r}")
    return int(text)


def field_num(name: str, fields: Sequence[str]) -> int:
    """Return the zero-based position of *name* in *fields*, or -1."""
    try:
        return list(fields).index(name)
    except ValueError:
        return -1


def discover_fields(output: RouteOutput) -> Optional[Tuple[int, Dict[str, int]]]:
    """Locate the column header line of netstat output.

    Returns the header's line number and the positions of the columns of
    interest, or None when no header line is recognised.
    """
    for line_no, line in enumerate(_text(output).split("\n")):
        fields = line.split()
        if len(fields) <= 3:
            continue
        dest, flags, gateway, netif, iface = (
            field_num(name, fields)
            for name in (NS_DESTINATION, NS_FLAGS, NS_GATEWAY, NS_NETIF, NS_INTERFACE)
        )
        if dest >= 0 and flags >= 0 and gateway >= 0 and (netif >= 0 or iface >= 0):
            return line_no, {
                NS_DESTINATION: dest,
                NS_FLAGS: flags,
                NS_GATEWAY: gateway,
                # NetBSD and Solaris call the column "Interface".
                NS_NETIF: iface if iface > 0 else netif,
            }
    return None


def flags_contain(flags: str, *args: str) -> bool:
    """Return True if every flag in *args* occurs in *flags*."""
    return all(flag in flags for flag in args)


def parse_windows_routes(output: RouteOutput) -> List[WindowsRoute]:
    """Extract default routes from ``route print`` output, lowest metric first.

    The output is localised, so rows are located by the separator lines:
    the route rows start two lines after the third separator.
    """
    lines = _text(output).split("\n")
    separators = 0
    found: List[Tuple[int, WindowsRoute]] = []
    for idx, line in enumerate(lines):
        if separators == 3:
            if len(lines) <= idx + 2:
                raise NoGatewayError()
            row = lines[idx + 2]
            if row.startswith(_SEPARATOR):
                break
            fields = row.split()
            if len(fields) < 5 or not _IPV4_PREFIX.match(fields[0]):
                raise CantParseError()
            if fields[0] != "0.0.0.0":
                # Default routes are listed first.
                break
            found.append((_atoi(fields[4]), WindowsRoute(fields[2], fields[3])))
        if line.startswith(_SEPARATOR):
            separators += 1

    if separators == 0:
        raise CantParseError()
    if not found:
        raise NoGatewayError()
    return [route for _, route in sorted(found, key=lambda item: item[0])]


def parse_linux_routes(output: RouteOutput) -> List[LinuxRoute]:
    """Extract default routes (destination and mask both zero) from /proc/net/route."""
    lines = _text(output).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if not lines:
        raise NoGatewayError()

    routes: List[LinuxRoute] = []
    for raw in lines[1:]:
        row = raw[:-1] if raw.endswith("\r") else raw
        tokens = row.split(_LINUX_SEP)
        if len(tokens) < _LINUX_MIN_FIELDS:
            raise InvalidRouteFileFormatError(row)
        if tokens[_LINUX_DESTINATION] == "00000000" and tokens[_LINUX_MASK] == "00000000":
            routes.append(LinuxRoute(tokens[0], tokens[_LINUX_GATEWAY]))
    if not routes:
        raise NoGatewayError()
    return routes


def parse_netstat_routes(output: RouteOutput) -> List[UnixRoute]:
    """Extract default routes from any ``netstat -rn`` output."""
    found = discover_fields(output)
    if found is None:
        raise CantParseError()
    start, columns = found

    routes: List[UnixRoute] = []
    for line in _text(output).split("\n")[start + 1:]:
        if "-----" in line:
            # Heading underlines (Solaris).
            continue
        fields = line.split()
        if len(fields) < 4:
            # End of the table, or the blank line before the IPv6 entries.
            break
        try:
            destination = fields[columns[NS_DESTINATION]]
            flags = fields[columns[NS_FLAGS]]
        except IndexError:
            raise CantParseError() from None
        if destination != "default" or not flags_contain(flags, "U", "G"):
            continue
        try:
            gateway = fields[columns[NS_GATEWAY]]
        except IndexError:
            raise CantParseError() from None
        iface_idx = columns[NS_NETIF]
        iface = fields[iface_idx] if 0 <= iface_idx < len(fields) else ""
        routes.append(UnixRoute(iface, gateway))
    if not routes:
        raise NoGatewayError()
    return routes


def parse_windows_gateway_ips(output: RouteOutput) -> List[IPAddress]:
    """Return default gateway addresses from ``route print``, skipping on-link routes."""
    result: List[IPAddress] = []
    for route in parse_windows_routes(output):
        if route.gateway.casefold() == "on-link":
            continue
        ip = _parse_ip(route.gateway)
        if ip is None:
            raise CantParseError()
        result.append(ip)
    return result


def parse_windows_interface_ips(output: RouteOutput) -> List[IPAddress]:
    """Return the interface addresses of the default routes from ``route print``."""
    result: List[IPAddress] = []
    for route in parse_windows_routes(output):
        ip = _parse_ip(route.interface)
        if ip is None:
            raise CantParseError()
        result.append(ip)
    return result


def parse_linux_gateway_ips(output: RouteOutput) -> List[ipaddress.IPv4Address]:
    """Return default gateway addresses from /proc/net/route."""
    result: List[ipaddress.IPv4Address] = []
    for route in parse_linux_routes(output):
        value = int(route.gateway, 16) if _HEX.fullmatch(route.gateway) else None
        if value is None or value > 0xFFFFFFFF:
            raise ValueError(
                f"parsing default interface address field hex {route.gateway!r}: "
                "invalid 32-bit hexadecimal value"
            )
        # The kernel writes the address in host (little-endian) byte order.
        result.append(ipaddress.IPv4Address(value.to_bytes(4, "little")))
    return result


def parse_linux_interface_ip(
    output: RouteOutput, iface_getter: Optional[InterfaceGetter] = None
) -> ipaddress.IPv4Address:
    """Return the IPv4 address of the interface holding the first default route."""
    routes = parse_linux_routes(output)
    return get_interface_ip4(routes[0].iface, iface_getter or SystemInterfaceGetter())


def parse_unix_gateway_ips(output: RouteOutput) -> List[IPAddress]:
    """Return default gateway addresses from ``netstat -rn`` output."""
    result: List[IPAddress] = []
    for route in parse_netstat_routes(output):
        ip = _parse_ip(route.gateway)
        if ip is None:
            raise CantParseError()
        result.append(ip)
    return result


def parse_unix_interface_ip(
    output: RouteOutput, iface_getter: Optional[InterfaceGetter] = None
) -> ipaddress.IPv4Address:
    """Return the IPv4 address of the interface holding the first default route."""
    routes = parse_netstat_routes(output)
    return get_interface_ip4(routes[0].iface, iface_getter or SystemInterfaceGetter())


def get_interface_ip4(
    name: str, iface_getter: Optional[InterfaceGetter] = None
) -> ipaddress.IPv4Address:
    """Return the first IPv4 address assigned to the interface called *name*."""
    getter = iface_getter or SystemInterfaceGetter()
    iface = getter.interface_by_name(name)
    for addr in getter.addrs(iface):
        if isinstance(addr, ipaddress.IPv4Interface):
            return addr.ip
        if isinstance(addr, ipaddress.IPv6Interface) and addr.ip.ipv4_mapped is not None:
            return addr.ip.ipv4_mapped
    raise LookupError(f"no IPv4 address found for interface {name}")