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

import logging
import threading

from .config import default_params
from .const import _RECEIVER_JOIN_TIMEOUT
from .receiver import Receiver
from .session import QuerySession
from .sockets import MdnsSockets
from .util import MdnsUtil

logger = logging.getLogger(__name__)


class Client:
    """
    Owns the sockets and receiver threads used by query sessions.
    Closing is idempotent and may happen from any thread.
    """

    def __init__(self, use_ipv6=True, sockets=None):
        if sockets is None:
            sockets = MdnsSockets.bind(use_ipv6=use_ipv6)
        self.sockets = sockets
        self.closed = threading.Event()
        self.receivers = []
        self._close_lock = threading.Lock()
        self._closing = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def set_interface(self, interface):
        self.sockets.set_interface(interface)

    def start_receivers(self, inbound):
        """
        Start one receiver per live socket, all feeding inbound
        """
        if self.closed.is_set():
            return
        for s in self.sockets.live():
            receiver = Receiver(s, inbound, self.closed)
            self.receivers.append(receiver)
            receiver.start()

    def send_query(self, out):
        """
        Send a DNSOutgoing to the mDNS group

        :raises SendError: if no socket could send it
        """
        for packet in out.packets():
            self.sockets.send(packet)

    def close(self):
        with self._close_lock:
            if self._closing:
                return
            self._closing = True

        logger.debug("Closing client")
        self.closed.set()
        self.sockets.close()
        for receiver in self.receivers:
            if receiver is not threading.current_thread():
                receiver.join(_RECEIVER_JOIN_TIMEOUT)


def query(params) -> int:
    """
    Look up a service, streaming complete entries to params.entries until the
    completion timer expires. Delivery never blocks, so callers should either
    drain the queue concurrently or give it enough room.

    :return: number of entries delivered
    :raises BindError: if no sockets could be bound
    :raises InterfaceError: if params.interface is unknown or unusable
    :raises SendError: if the question could not be sent
    """
    params.apply_defaults()

    interface = None
    if params.interface is not None:
        interface = MdnsUtil.get_interface(params.interface)

    with Client(use_ipv6=params.use_ipv6) as client:
        if interface is not None:
            client.set_interface(interface)
        return QuerySession(client, params).run()


def lookup(service, entries) -> int:
    """
    Same as query, using default parameters
    """
    params = default_params(service)
    params.entries = entries
    return query(params)
