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
import socket

import ifaddr

from .errors import InterfaceError


class MdnsUtil:
    """
    Helpers for naming, TXT payloads and network interfaces
    """

    @staticmethod
    def trim_dot(name) -> str:
        """
        Strip leading and trailing dots from a domain name
        """
        return name.strip(".")

    @staticmethod
    def split_txt(text: bytes):
        """
        Split the wire payload of a TXT record into its strings

        :param bytes text: sequence of length-prefixed character strings
        :return: list of str in record order
        """
        strs = []
        end = len(text)
        index = 0
        while index < end:
            length = text[index]
            index += 1
            strs.append(text[index : index + length].decode("utf-8", "replace"))
            index += length
        return strs

    @staticmethod
    def get_interface(interface_name):
        """
        Look up a network interface by name

        :param str interface_name: declares the network interface name, e.g. eth0
        :return: ifaddr.Adapter
        :raises InterfaceError: if no interface has that name
        """
        for interface in ifaddr.get_adapters():
            if interface.name == interface_name:
                return interface
        raise InterfaceError(f"Unknown network interface {interface_name}")

    @staticmethod
    def get_ipv4_for_interface(interface):
        """
        First IPv4 address of an ifaddr.Adapter, or None
        """
        for ip in interface.ips:
            if ip.is_IPv4:
                return ipaddress.IPv4Address(ip.ip)
        return None

    @staticmethod
    def get_index_for_interface(interface) -> int:
        # IPv6 multicast options address interfaces by index
        index = getattr(interface, "index", None)
        if index is None:
            index = socket.if_nametoindex(interface.name)
        return index
