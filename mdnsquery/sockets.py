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
import socket
import struct

from .const import _MDNS_ADDR, _MDNS_ADDR6, _MDNS_ADDR6_BYTES, _MDNS_ADDR_BYTES, _MDNS_PORT
from .errors import BindError, InterfaceError, SendError
from .util import MdnsUtil

logger = logging.getLogger(__name__)

_IPV4_GROUP = (_MDNS_ADDR, _MDNS_PORT)
_IPV6_GROUP = (_MDNS_ADDR6, _MDNS_PORT, 0, 0)


def new_unicast_socket(ipv6=False) -> socket.socket:
    """
    UDP socket bound to an ephemeral port on all addresses of one family
    """
    if ipv6:
        s = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
        try:
            s.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 1)
            s.bind(("::", 0))
        except OSError:
            s.close()
            raise
    else:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            s.bind(("0.0.0.0", 0))
        except OSError:
            s.close()
            raise
    return s


def new_multicast_socket(ipv6=False) -> socket.socket:
    """
    UDP socket bound to the mDNS port and joined to the mDNS group of one family
    """
    if ipv6:
        s = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
    else:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    try:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # Some BSD-derived systems require SO_REUSEPORT to share the mDNS port
        # with a running responder.
        try:
            reuseport = socket.SO_REUSEPORT
        except AttributeError:
            pass
        else:
            try:
                s.setsockopt(socket.SOL_SOCKET, reuseport, 1)
            except OSError as err:
                if not err.errno == errno.ENOPROTOOPT:
                    raise

        if ipv6:
            s.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 1)
            s.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_MULTICAST_LOOP, 1)
            s.bind(("::", _MDNS_PORT))
            # interface index 0 lets the kernel pick the default interface
            mreq = _MDNS_ADDR6_BYTES + struct.pack("@I", 0)
            s.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_JOIN_GROUP, mreq)
        else:
            s.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_LOOP, struct.pack(b"B", 1))
            s.bind(("", _MDNS_PORT))
            mreq = _MDNS_ADDR_BYTES + socket.inet_aton("0.0.0.0")
            s.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, mreq)
    except OSError:
        s.close()
        raise
    return s


class MdnsSockets:
    """
    The up to four UDP sockets of a client: IPv4 and IPv6, each in a unicast
    (query sending) and a multicast (group listening) role.
    """

    def __init__(
        self,
        ipv4_unicast=None,
        ipv6_unicast=None,
        ipv4_multicast=None,
        ipv6_multicast=None,
    ):
        self.ipv4_unicast = ipv4_unicast
        self.ipv6_unicast = ipv6_unicast
        self.ipv4_multicast = ipv4_multicast
        self.ipv6_multicast = ipv6_multicast

    @classmethod
    def bind(cls, use_ipv6=True):
        """
        Bind every socket that can be bound. One address family may fail as long
        as the other one covers both the unicast and the multicast role.

        :raises BindError: if no unicast or no multicast socket could be bound
        """
        sockets = cls()

        try:
            sockets.ipv4_unicast = new_unicast_socket()
        except OSError as e:
            logger.warning(f"Failed to bind to udp4 port: {e}")

        if use_ipv6:
            try:
                sockets.ipv6_unicast = new_unicast_socket(ipv6=True)
            except OSError as e:
                logger.warning(f"Failed to bind to udp6 port: {e}")
            try:
                sockets.ipv6_multicast = new_multicast_socket(ipv6=True)
            except OSError as e:
                logger.warning(f"Failed to bind to udp6 multicast port: {e}")

        if sockets.ipv4_unicast is None and sockets.ipv6_unicast is None:
            sockets.close()
            raise BindError("failed to bind to any unicast udp port")

        try:
            sockets.ipv4_multicast = new_multicast_socket()
        except OSError as e:
            logger.warning(f"Failed to bind to udp4 multicast port: {e}")

        if sockets.ipv4_multicast is None and sockets.ipv6_multicast is None:
            sockets.close()
            raise BindError("failed to bind to any multicast udp port")

        return sockets

    def _slots(self):
        return [
            (self.ipv4_unicast, False),
            (self.ipv6_unicast, True),
            (self.ipv4_multicast, False),
            (self.ipv6_multicast, True),
        ]

    def live(self):
        return [s for s, _ in self._slots() if s is not None]

    def set_interface(self, interface):
        """
        Use the given interface for outgoing multicast on every live socket.

        Sockets are reconfigured one after the other and the first failure is
        raised; sockets reconfigured before it keep the new interface.

        :param interface: ifaddr.Adapter
        :raises InterfaceError: if no multicast socket exists or a socket rejects the interface
        """
        if self.ipv4_multicast is None and self.ipv6_multicast is None:
            raise InterfaceError("can not set any interface, no multicast socket")

        for s, is_v6 in self._slots():
            if s is None:
                continue
            try:
                if is_v6:
                    index = MdnsUtil.get_index_for_interface(interface)
                    s.setsockopt(
                        socket.IPPROTO_IPV6, socket.IPV6_MULTICAST_IF, struct.pack("@I", index)
                    )
                else:
                    addr = MdnsUtil.get_ipv4_for_interface(interface)
                    if addr is None:
                        raise InterfaceError(
                            f"Interface {interface.name} does not have an IPv4 address"
                        )
                    s.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_IF, addr.packed)
            except OSError as e:
                raise InterfaceError(
                    f"Failed to set multicast interface {interface.name}: {e}"
                ) from e
            logger.debug(f"Configured {s} with multicast interface {interface.name}")

    def send(self, packet: bytes):
        """
        Write packet to the mDNS group through every live unicast socket

        :raises SendError: if every attempted write failed
        """
        attempts = 0
        errors = []
        for s, group in ((self.ipv4_unicast, _IPV4_GROUP), (self.ipv6_unicast, _IPV6_GROUP)):
            if s is None:
                continue
            attempts += 1
            try:
                s.sendto(packet, group)
            except OSError as e:
                errors.append(str(e))

        if attempts and len(errors) == attempts:
            raise SendError("Can not send query udp ipv6 and ipv4: " + "; ".join(errors))

    def close(self):
        for s in self.live():
            s.close()
