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

import ipaddress
import logging
import queue
import re
import time

from zeroconf import DNSAddress, DNSOutgoing, DNSPointer, DNSQuestion, DNSService, DNSText

from .const import (
    _CLASS_IN,
    _CLASS_UNIQUE,
    _FLAGS_QR_QUERY,
    _INBOUND_QUEUE_SIZE,
    _MAX_EXTENSION_FACTOR,
    _PATTERN_PREFIX,
    _POLL_INTERVAL,
    _SERVICES_META_QUERY,
    _TYPE_A,
    _TYPE_AAAA,
    _TYPE_PTR,
)
from .entry import EntryStore
from .errors import SendError
from .util import MdnsUtil

logger = logging.getLogger(__name__)


def new_question(name, want_unicast_response=False) -> DNSOutgoing:
    """
    Build a multicast query holding a single PTR question for name
    """
    class_ = _CLASS_IN
    if want_unicast_response:
        # RFC 6762, section 18.12: the top bit of qclass asks for a unicast reply
        class_ |= _CLASS_UNIQUE
    out = DNSOutgoing(_FLAGS_QR_QUERY)
    out.add_question(DNSQuestion(name, _TYPE_PTR, class_))
    return out


def reply_records(msg):
    """
    Records of the answer and additional sections of a parsed message.

    Authority records are proposals of a probing host, not answers, so they
    are left out. The codec drops records it cannot decode from answers(),
    which makes the section boundaries unknown; such a message yields nothing
    if it carries an authority section.
    """
    records = msg.answers()
    answers = msg.num_answers
    authorities = msg.num_authorities
    if not authorities:
        return records
    if len(records) != answers + authorities + msg.num_additionals:
        logger.debug("Ignoring message with undecodable records and an authority section")
        return []
    return records[:answers] + records[answers + authorities :]


class QuerySession:
    """
    One query: sends the question, correlates the records of incoming replies
    into ServiceEntry objects and hands complete entries to params.entries
    until the completion timer expires.

    The client is expected to provide start_receivers(inbound),
    send_query(out) and a closed event.
    """

    def __init__(self, client, params, clock=time.monotonic):
        self.client = client
        self.params = params
        self.clock = clock
        self.inbound = queue.Queue(maxsize=_INBOUND_QUEUE_SIZE)
        self.store = EntryStore()
        self.delivered = 0
        self._escalated = set()

        domain = MdnsUtil.trim_dot(params.domain)
        self.service_addr = f"{MdnsUtil.trim_dot(params.service)}.{domain}."
        self.pattern_mode = self.service_addr.startswith(_PATTERN_PREFIX)
        if self.pattern_mode:
            self.service_addr = self.service_addr[len(_PATTERN_PREFIX) :]
        self.sd_service_addr = f"{_SERVICES_META_QUERY}.{domain}."

        try:
            self._pattern = re.compile(self.service_addr)
        except re.error:
            logger.debug(f"{self.service_addr} is not a valid pattern")
            self._pattern = None

        self._start = None
        self._deadline = None

    @property
    def question_name(self) -> str:
        if self.pattern_mode:
            return self.sd_service_addr
        return self.service_addr

    def run(self) -> int:
        """
        Run the session until the completion timer fires or the client closes

        :return: number of entries handed to the sink
        :raises SendError: if the initial question could not be sent at all
        """
        self.client.start_receivers(self.inbound)

        logger.debug(f"Query PTR {self.question_name}")
        self.client.send_query(
            new_question(self.question_name, self.params.want_unicast_response)
        )

        self._start = self.clock()
        self._deadline = self._start + self.params.timeout
        while not self.client.closed.is_set():
            remaining = self._deadline - self.clock()
            if remaining <= 0:
                break
            try:
                msg = self.inbound.get(timeout=min(remaining, _POLL_INTERVAL))
            except queue.Empty:
                continue
            self.handle_message(msg)
        return self.delivered

    def handle_message(self, msg):
        current = None
        for record in reply_records(msg):
            current = self._handle_record(record, current)

        if current is None:
            return

        if current.complete():
            if current.sent:
                return
            current.sent = True
            self._extend_deadline()
            self._deliver(current)
        else:
            self._escalate(current)

    def _handle_record(self, record, current):
        if isinstance(record, DNSPointer):
            return self.store.ensure(record.alias)

        if isinstance(record, DNSService):
            if record.server != record.name:
                self.store.alias(record.name, record.server)
            entry = self.store.ensure(record.name)
            if self._matches(entry.name):
                entry.host = record.server
                entry.port = record.port
            return entry

        if isinstance(record, DNSText):
            entry = self.store.ensure(record.name)
            if self._matches(entry.name):
                entry.info_fields = MdnsUtil.split_txt(record.text)
                entry.info = "|".join(entry.info_fields)
                entry.has_txt = True
            return entry

        if isinstance(record, DNSAddress):
            entry = self.store.ensure(record.name)
            if record.type == _TYPE_A:
                if self._matches(entry.name):
                    entry.addr_v4 = ipaddress.ip_address(record.address)
                    entry.addr = entry.addr_v4
            elif record.type == _TYPE_AAAA:
                # AAAA is filtered on the record's own name, not the entry's
                if self._matches(record.name):
                    entry.addr_v6 = ipaddress.ip_address(record.address)
                    entry.addr = entry.addr_v6
            return entry

        return current

    def _matches(self, name) -> bool:
        if name.endswith(self.service_addr):
            return True
        if self.sd_service_addr == self.service_addr:
            return True
        return self._pattern is not None and self._pattern.search(name) is not None

    def _extend_deadline(self):
        now = self.clock()
        if now - self._start < self.params.timeout * _MAX_EXTENSION_FACTOR:
            self._deadline = now + self.params.timeout

    def _deliver(self, entry):
        try:
            self.params.entries.put_nowait(entry)
        except queue.Full:
            logger.debug(f"Dropped {entry.name}, entries queue is full")
            return
        self.delivered += 1
        logger.debug(f"Found {entry.name} at {entry.host}:{entry.port}")

    def _escalate(self, entry):
        """
        Ask directly for an instance whose records are still missing
        """
        if entry.name in self._escalated:
            return
        self._escalated.add(entry.name)
        try:
            self.client.send_query(new_question(entry.name))
        except SendError as e:
            logger.error(f"Failed to query instance {entry.name}: {e}")
