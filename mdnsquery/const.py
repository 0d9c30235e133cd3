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

import socket

# Multicast group and port, RFC 6762 section 3

_MDNS_ADDR = "224.0.0.251"
_MDNS_ADDR_BYTES = socket.inet_aton(_MDNS_ADDR)
_MDNS_ADDR6 = "ff02::fb"
_MDNS_ADDR6_BYTES = socket.inet_pton(socket.AF_INET6, _MDNS_ADDR6)
_MDNS_PORT = 5353

_MAX_MSG_ABSOLUTE = 65536
_INBOUND_QUEUE_SIZE = 32

# Upper bound for a single blocking wait, so shutdown is observed promptly
_POLL_INTERVAL = 0.1  # s
_RECEIVER_JOIN_TIMEOUT = 1.0  # s

_DEFAULT_DOMAIN = "local"
_DEFAULT_TIMEOUT = 1.0  # s

# The completion timer is no longer extended past this multiple of the timeout
_MAX_EXTENSION_FACTOR = 4

_PATTERN_PREFIX = "~"
_SERVICES_META_QUERY = "_services._dns-sd._udp"

# DNS constants

_FLAGS_QR_QUERY = 0x0000

_CLASS_IN = 1
_CLASS_UNIQUE = 0x8000  # QU bit in questions, RFC 6762 section 18.12

_TYPE_A = 1
_TYPE_PTR = 12
_TYPE_TXT = 16
_TYPE_AAAA = 28
_TYPE_SRV = 33
