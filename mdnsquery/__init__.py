"""
mdnsquery: a multicast DNS service discovery client
Copyright (C) 2026  The mdnsquery contributors

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

from .client import Client, lookup, query
from .config import QueryParams, default_params
from .discovery import discover_services
from .entry import EntryStore, ServiceEntry
from .errors import BindError, InterfaceError, MdnsError, SendError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Client",
    "QueryParams",
    "ServiceEntry",
    "EntryStore",
    "MdnsError",
    "BindError",
    "SendError",
    "InterfaceError",
    "default_params",
    "discover_services",
    "lookup",
    "query",
]
