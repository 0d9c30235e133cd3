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


class MdnsError(Exception):
    """Base class for errors raised by mdnsquery"""


class BindError(MdnsError):
    """No usable unicast or no usable multicast socket could be bound"""


class SendError(MdnsError):
    """Every transmission attempt for a question failed"""


class InterfaceError(MdnsError):
    """The requested network interface is unknown or cannot be used"""
