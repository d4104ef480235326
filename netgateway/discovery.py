"""Operating-system independent discovery of default gateways and interfaces."""

from __future__ import annotations

import argparse
import ipaddress
import subprocess
import sys
from typing import List, Optional, Sequence, Union

from .errors import GatewayError, NoGatewayError, NotImplementedOSError
from .parsers import (
    parse_linux_gateway_ips,
    parse_linux_interface_ip,
    parse_unix_gateway_ips,
    parse_unix_interface_ip,
    parse_windows_gateway_ips,
    parse_windows_interface_ips,
)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

ROUTE_FILE = "/proc/net/route"

_BSD_PREFIXES = ("darwin", "dragonfly", "freebsd", "netbsd", "openbsd")


def _os_family() -> Optional[str]:
    platform = sys.platform
    if platform.startswith("linux"):
        return "linux"
    if platform.startswith(_BSD_PREFIXES):
        return "bsd"
    if platform.startswith("sunos"):
        return "solaris"
    if platform == "win32":
        return "windows"
    return None


def read_routes(path: Optional[str] = None) -> bytes:
    """Return the raw contents of the Linux route file."""
    path = path or ROUTE_FILE
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise GatewayError(f"can't access {path}") from exc
    with handle:
        try:
            return handle.read()
        except OSError as exc:
            raise GatewayError(f"can't read {path}") from exc


def _combined_output(args: List[str], **kwargs) -> bytes:
    completed = subprocess.run(
        args,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=True,
        **kwargs,
    )
    return completed.stdout


def read_netstat() -> bytes:
    """Run ``netstat -rn`` and return its combined output."""
    return _combined_output(["netstat", "-rn"])


def read_windows_route() -> bytes:
    """Run ``route print 0.0.0.0`` without showing a console window."""
    kwargs = {}
    startupinfo_cls = getattr(subprocess, "STARTUPINFO", None)
    if startupinfo_cls is not None:
        startupinfo = startupinfo_cls()
        startupinfo.dwFlags |= getattr(subprocess, "STARTF_USESHOWWINDOW", 1)
        startupinfo.wShowWindow = getattr(subprocess, "SW_HIDE", 0)
        kwargs["startupinfo"] = startupinfo
    return _combined_output(["route", "print", "0.0.0.0"], **kwargs)


def discover_gateways() -> List[IPAddress]:
    """Return every default gateway found; the list is never empty."""
    family = _os_family()
    if family == "linux":
        ips = parse_linux_gateway_ips(read_routes())
    elif family in ("bsd", "solaris"):
        ips = parse_unix_gateway_ips(read_netstat())
    elif family == "windows":
        ips = parse_windows_gateway_ips(read_windows_route())
    else:
        raise NotImplementedOSError()
    if not ips:
        raise NoGatewayError()
    return list(ips)


def discover_gateway() -> IPAddress:
    """Return the default gateway."""
    return discover_gateways()[0]


def discover_interface() -> IPAddress:
    """Return the IP of the network interface that uses the default gateway."""
    family = _os_family()
    if family == "linux":
        return parse_linux_interface_ip(read_routes())
    if family in ("bsd", "solaris"):
        return parse_unix_interface_ip(read_netstat())
    if family == "windows":
        return parse_windows_interface_ips(read_windows_route())[0]
    raise NotImplementedOSError()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the default gateway, all gateways or the default interface IP."""
    parser = argparse.ArgumentParser(
        prog="netgateway", description="Discover the default network gateway."
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-a", "--all", action="store_true", help="print every default gateway"
    )
    group.add_argument(
        "-i",
        "--interface",
        action="store_true",
        help="print the IP of the interface using the default gateway",
    )
    args = parser.parse_args(argv)

    try:
        if args.interface:
            print(f"Interface: {discover_interface()}")
        elif args.all:
            for ip in discover_gateways():
                print(f"Gateway: {ip}")
        else:
            print(f"Gateway: {discover_gateway()}")
    except (GatewayError, LookupError, ValueError, OSError, subprocess.SubprocessError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0