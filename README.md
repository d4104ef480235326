# netgateway

Find the default gateway of the machine you are on, and the local IPv4
address of the interface that routes through it.

The gateway is read from the system route table:

- **Linux**: the file `/proc/net/route`
- **BSDs, macOS and Solaris**: the output of `netstat -rn`
- **Windows**: the output of `route print 0.0.0.0`, run without showing a
  console window

On any other operating system `NotImplementedOSError` is raised.

Addresses are returned as `ipaddress.IPv4Address` or
`ipaddress.IPv6Address` objects.

## Installation

```
pip install netgateway
```

This installs `psutil`, which is used to look up the addresses of local
network interfaces.

## Command line

```
netgateway
```

prints the default gateway as `Gateway: <address>`.

```
netgateway --all
```

(or `-a`) prints one `Gateway:` line for every default gateway found.

```
netgateway --interface
```

(or `-i`) prints `Interface: <address>`, the IPv4 address of the local
interface that uses the default gateway.

`--all` and `--interface` cannot be combined. If discovery fails, the
reason is printed to standard error and the command exits with status 1.

## Library use

```python
from netgateway.discovery import discover_gateway, discover_gateways, discover_interface
from netgateway.errors import GatewayError

try:
    print("Gateway:", discover_gateway())
    print("All gateways:", discover_gateways())
    print("Local address:", discover_interface())
except GatewayError as exc:
    print(exc)
```

- `discover_gateways()` returns every default gateway it finds, never an
  empty list; `NoGatewayError` is raised when there is none.
- `discover_gateway()` returns the first of them.
- `discover_interface()` returns the address of the interface that holds
  the default route.

On Windows, when there are several default routes, they are ordered by
metric, lowest first, and routes whose gateway is `On-link` are skipped.

The raw route tables can also be fetched on their own:
`read_routes(path=None)` reads `/proc/net/route` (or the given file),
`read_netstat()` runs `netstat -rn`, and `read_windows_route()` runs
`route print 0.0.0.0`. Each returns the output as bytes; the two commands
raise `subprocess.CalledProcessError` if they exit with an error.

### Parsing route tables yourself

The parsers in `netgateway.parsers` take the route table as `bytes` or
`str`, so captured output from any platform can be parsed anywhere:

```python
from netgateway.parsers import (
    parse_linux_gateway_ips,
    parse_unix_gateway_ips,
    parse_windows_gateway_ips,
)

with open("/proc/net/route", "rb") as fh:
    print(parse_linux_gateway_ips(fh.read()))
```

| Function | Input | Returns |
| --- | --- | --- |
| `parse_linux_gateway_ips` | `/proc/net/route` | list of gateway addresses |
| `parse_unix_gateway_ips` | `netstat -rn` | list of gateway addresses |
| `parse_windows_gateway_ips` | `route print` | list of gateway addresses |
| `parse_windows_interface_ips` | `route print` | list of interface addresses |
| `parse_linux_interface_ip` | `/proc/net/route` | IPv4 address of the default interface |
| `parse_unix_interface_ip` | `netstat -rn` | IPv4 address of the default interface |

The lower-level `parse_linux_routes`, `parse_netstat_routes` and
`parse_windows_routes` return the default routes as `LinuxRoute`,
`UnixRoute` and `WindowsRoute` records. `discover_fields` finds the column
header of `netstat` output, and `flags_contain` checks a route's flags.

`parse_linux_interface_ip` and `parse_unix_interface_ip` take an optional
second argument, an `InterfaceGetter` from `netgateway.interfaces`, which
looks up an interface by name and lists its addresses. Without it,
`SystemInterfaceGetter` is used, which reads the running machine's
interfaces. `get_interface_ip4(name, iface_getter=None)` returns the first
IPv4 address of a named interface. To parse a table captured elsewhere,
pass your own `InterfaceGetter` subclass.

### Errors

The errors in `netgateway.errors` all derive from `GatewayError`:

| Error | Meaning |
| --- | --- |
| `NoGatewayError` | the route table has no default gateway |
| `CantParseError` | the route table could not be understood |
| `InvalidRouteFileFormatError` | a row of `/proc/net/route` has fewer than 11 fields; the row is in its `row` attribute |
| `NotImplementedOSError` | the operating system is not supported; also a `NotImplementedError` |

`read_routes` raises a plain `GatewayError` when the route file cannot be
opened or read.

Some failures use built-in exceptions instead:

- `LookupError` when an interface does not exist or has no IPv4 address;
- `ValueError` when a Linux gateway field is not a 32-bit hex number, or a
  Windows route metric is not a number;
- `OSError` and `subprocess.CalledProcessError` when `netstat` or `route`
  cannot be run or fails.

## Limitations

On BSDs, macOS and Solaris only the IPv4 part of the `netstat -rn` table
is read, so IPv6 default gateways are not reported there.

## Running the tests

```
pip install -e ".[test]"
pytest
```