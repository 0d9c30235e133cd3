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
import queue
import threading

from .client import query
from .config import QueryParams
from .errors import InterfaceError, MdnsError

logger = logging.getLogger(__name__)

_DEFAULT_SERVICE = "_signage._tcp"
_DEFAULT_DISCOVERY_TIMEOUT = 0.6  # s
_SINK_SIZE = 16


def discover_services(service=None, domain="local", timeout=None, interface=None):
    """
    Run one query and collect every entry it delivers.

    :param str service: service to look up, defaults to _signage._tcp
    :param str domain: lookup domain
    :param float timeout: completion timeout in seconds, defaults to 0.6
    :param str interface: multicast interface name, system default if None
    :return: list of ServiceEntry, empty if the interface does not exist
    """
    if not service:
        service = _DEFAULT_SERVICE
    if not timeout:
        timeout = _DEFAULT_DISCOVERY_TIMEOUT
    if interface is None:
        logger.debug("Discovery on default interface")

    found = []
    lock = threading.Lock()
    entries = queue.Queue(maxsize=_SINK_SIZE)
    done = object()

    def collect():
        while True:
            entry = entries.get()
            if entry is done:
                return
            with lock:
                found.append(entry)

    collector = threading.Thread(target=collect, name="mdnsquery-Collector", daemon=True)
    collector.start()

    params = QueryParams(
        service,
        domain=domain,
        timeout=timeout,
        interface=interface,
        entries=entries,
        want_unicast_response=True,
    )
    try:
        query(params)
    except InterfaceError as e:
        logger.error(f"Discovery not possible: {e}")
    except MdnsError as e:
        logger.error(f"mDNS query failed: {e}")
    finally:
        entries.put(done)
        collector.join()

    with lock:
        return list(found)
