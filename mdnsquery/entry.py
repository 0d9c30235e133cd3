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


class ServiceEntry:
    """
    A discovered service instance, assembled from PTR, SRV, TXT, A and AAAA records.
    Entries are mutated in place while records arrive.
    """

    def __init__(self, name):
        self.name = name
        self.host = None
        self.addr_v4 = None
        self.addr_v6 = None
        self.port = 0
        self.info = ""
        self.info_fields = []

        self.addr = None  # deprecated, last address seen from either family

        self.has_txt = False
        self.sent = False

    def complete(self) -> bool:
        """
        True once the entry has an address, a port and at least one TXT record
        """
        has_addr = (
            self.addr_v4 is not None or self.addr_v6 is not None or self.addr is not None
        )
        return has_addr and self.port != 0 and self.has_txt

    def to_dict(self):
        return {
            "name": self.name,
            "host": self.host,
            "addr_v4": str(self.addr_v4) if self.addr_v4 is not None else None,
            "addr_v6": str(self.addr_v6) if self.addr_v6 is not None else None,
            "port": self.port,
            "info": self.info,
            "info_fields": list(self.info_fields),
        }

    def __repr__(self):
        return (
            f"ServiceEntry(name={self.name!r}, host={self.host!r}, "
            f"addr_v4={self.addr_v4}, addr_v6={self.addr_v6}, port={self.port}, "
            f"info={self.info!r})"
        )


class EntryStore:
    """
    Arena of entries addressed by stable index. Several names may map to the
    same index, in which case they share one ServiceEntry.

    Not thread-safe; only the session thread touches it.
    """

    def __init__(self):
        self._entries = []
        self._index = {}

    def ensure(self, name) -> ServiceEntry:
        """
        Return the entry for name, creating it on first reference
        """
        index = self._index.get(name)
        if index is None:
            index = len(self._entries)
            self._entries.append(ServiceEntry(name))
            self._index[name] = index
        return self._entries[index]

    def alias(self, src, dst):
        """
        Make dst resolve to the entry of src
        """
        self.ensure(src)
        self._index[dst] = self._index[src]

    def get(self, name):
        index = self._index.get(name)
        if index is None:
            return None
        return self._entries[index]

    def entries(self):
        return list(self._entries)

    def __contains__(self, name):
        return name in self._index

    def __len__(self):
        return len(self._entries)
