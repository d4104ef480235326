"""Discover the default network gateway and the interface address that uses it.

Modules: discovery (system lookup and the command line), parsers (route
table parsing), interfaces (interface address lookup) and errors.
"""

__version__ = "0.1.0"
__all__ = ["discovery", "errors", "interfaces", "parsers"]