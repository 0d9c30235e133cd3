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

import errno
import logging
import queue
import select
import threading

from zeroconf import DNSIncoming

from .const import _MAX_MSG_ABSOLUTE, _POLL_INTERVAL

logger = logging.getLogger(__name__)


class Receiver(threading.Thread):
    """
    Reads datagrams from one socket, parses them as DNS messages and forwards
    them to the inbound queue shared by all receivers of a client.

    Every blocking step waits at most _POLL_INTERVAL, so the thread ends soon
    after the closed event is set.
    """

    def __init__(self, socket_, inbound: queue.Queue, closed: threading.Event):
        threading.Thread.__init__(self, name=f"mdnsquery-Receiver-{socket_.fileno()}")
        self.daemon = True
        self.socket = socket_
        self.inbound = inbound
        self.closed = closed

    def run(self) -> None:
        while not self.closed.is_set():
            try:
                rr, _, _ = select.select([self.socket], [], [], _POLL_INTERVAL)
                if not rr:
                    continue
                data, addr = self.socket.recvfrom(_MAX_MSG_ABSOLUTE)
            except (OSError, ValueError) as e:
                # The socket was closed by another thread during shutdown
                if self.closed.is_set():
                    return
                if isinstance(e, OSError) and e.errno == errno.EBADF:
                    logger.warning(f"Socket closed under receiver: {e}")
                    return
                logger.warning(f"Failed to read packet: {e}")
                continue

            if self.closed.is_set():
                return

            msg = self.parse(data)
            if msg is None:
                continue
            logger.debug(f"Received {len(data)} bytes from {addr[0]}:{addr[1]}")

            if not self.forward(msg):
                return

    @staticmethod
    def parse(data):
        """
        Parse a datagram, None if it is not a valid DNS message
        """
        try:
            msg = DNSIncoming(data)
        except Exception as e:  # the codec raises a variety of decode errors
            logger.warning(f"Failed to unpack packet: {e}")
            return None
        if not msg.valid:
            logger.warning("Failed to unpack packet")
            return None
        return msg

    def forward(self, msg) -> bool:
        """
        Put msg on the inbound queue, giving up once the client is closed
        """
        while not self.closed.is_set():
            try:
                self.inbound.put(msg, timeout=_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False
