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

import queue

from .const import _DEFAULT_DOMAIN, _DEFAULT_TIMEOUT


class QueryParams:
    """
    Parameters of a single query session.

    :param str service: service to look up, e.g. _http._tcp. A leading ~
        makes the rest of the name a regular expression matched against answers.
    :param str domain: lookup domain, defaults to local
    :param float timeout: completion timeout in seconds, defaults to one second
    :param str interface: name of the multicast interface to use, system default if None
    :param queue.Queue entries: sink receiving completed ServiceEntry objects.
        Delivery never blocks, so callers should drain it or give it enough room.
    :param bool want_unicast_response: request unicast replies, RFC 6762 section 5.4
    :param bool use_ipv6: also bind IPv6 sockets
    """

    def __init__(
        self,
        service,
        domain=_DEFAULT_DOMAIN,
        timeout=_DEFAULT_TIMEOUT,
        interface=None,
        entries=None,
        want_unicast_response=False,
        use_ipv6=True,
    ):
        self.service = service
        self.domain = domain
        self.timeout = timeout
        self.interface = interface
        if entries is None:
            entries = queue.Queue()
        self.entries = entries
        self.want_unicast_response = want_unicast_response
        self.use_ipv6 = use_ipv6

    def apply_defaults(self):
        if not self.domain:
            self.domain = _DEFAULT_DOMAIN
        if not self.timeout:
            self.timeout = _DEFAULT_TIMEOUT


def default_params(service) -> QueryParams:
    return QueryParams(service)
