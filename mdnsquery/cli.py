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

import argparse
import json
import logging
import queue
import sys
import threading

from .client import query
from .config import QueryParams
from .errors import MdnsError
from .logger import Logging

logger = logging.getLogger(__name__)


def main():
    sys.exit(MdnsQueryCli(sys.argv[1:]).status)


class MdnsQueryCli:
    def __init__(self, args):
        parser = argparse.ArgumentParser(prog="mdnsquery")
        parser.add_argument(
            "service",
            help="Service to look up, e.g. _http._tcp (prefix with ~ for a regular expression)",
        )
        parser.add_argument("-d", "--domain", help="Lookup domain", default="local")
        parser.add_argument(
            "-t", "--timeout", help="Completion timeout in seconds", type=float, default=1.0
        )
        parser.add_argument("-i", "--interface", help="Multicast interface to use")
        parser.add_argument(
            "-u", "--unicast", help="Ask responders for unicast replies", action="store_true"
        )
        parser.add_argument("--no-ipv6", help="Only use IPv4 sockets", action="store_true")
        parser.add_argument("-o", "--output", help="Write discovered entries as JSON to this file")
        parser.add_argument(
            "--debug", help="Enable debug mode", action="store_true"
        )
        args = parser.parse_args(args)

        if args.debug:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            )
        else:
            logging.basicConfig(level=logging.INFO, format="%(message)s")

        self.output = args.output
        self.entries = queue.Queue()
        self.discover = []
        self.lock = threading.Lock()
        self.params = QueryParams(
            args.service,
            domain=args.domain,
            timeout=args.timeout,
            interface=args.interface,
            entries=self.entries,
            want_unicast_response=args.unicast,
            use_ipv6=not args.no_ipv6,
        )

        try:
            self.status = self.find()
        except KeyboardInterrupt:
            self.status = 130

    def find(self):
        logger.info(f"Looking for {self.params.service} in {self.params.domain} ...")
        printer = threading.Thread(target=self._print_entries, daemon=True)
        printer.start()
        try:
            query(self.params)
        except MdnsError as e:
            Logging.error(str(e))
            return 1
        finally:
            self.entries.put(None)
            printer.join()

        logger.info(f"Found {len(self.discover)} service(s)")
        if self.output is not None:
            logger.debug(f"Save discovery results to {self.output}")
            with open(self.output, "w") as f:
                json.dump([entry.to_dict() for entry in self.discover], f, indent=2)
        return 0

    def _print_entries(self):
        while True:
            entry = self.entries.get()
            if entry is None:
                return
            with self.lock:
                self.discover.append(entry)
            Logging.found(entry)
