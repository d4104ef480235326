"""Exceptions raised while discovering gateways and interfaces."""

import sys

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(text: str) -> str:
    """Return *text* double-quoted with control characters escaped."""
    parts = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif not char.isprintable() and char != " ":
            code = ord(char)
            if code < 0x100:
                parts.append(f"\\x{code:02x}")
            elif code < 0x10000:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


class GatewayError(Exception):
    """Base class for every error raised by this package."""


class NoGatewayError(GatewayError):
    """No valid gateway entry was found in the route table."""

    def __init__(self) -> None:
        super().__init__("no gateway found")


class CantParseError(GatewayError):
    """The route table could not be understood."""

    def __init__(self) -> None:
        super().__init__("can't parse route table")


class NotImplementedOSError(GatewayError, NotImplementedError):
    """The running operating system is not supported."""

    def __init__(self) -> None:
        self.platform = sys.platform
        super().__init__(f"not implemented for OS: {self.platform}")


class InvalidRouteFileFormatError(GatewayError):
    """A row of the Linux route file does not have the expected fields."""

    def __init__(self, row: str) -> None:
        self.row = row
        super().__init__(
            f"invalid row {_quote(row)} in route file: doesn't have 11 fields"
        )