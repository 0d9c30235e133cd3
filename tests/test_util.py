import pytest

from mdnsquery.errors import InterfaceError
from mdnsquery.util import MdnsUtil


def get_loopback():
    import ifaddr
    for adapter in ifaddr.get_adapters():
        if adapter.name.startswith('lo'):
            return adapter.name
    return None


def test_trim_dot():
    assert MdnsUtil.trim_dot("._http._tcp.") == "_http._tcp"
    assert MdnsUtil.trim_dot("local") == "local"


def test_split_txt():
    assert MdnsUtil.split_txt(b"\x05txt=1\x03a=b") == ["txt=1", "a=b"]
    assert MdnsUtil.split_txt(b"") == []
    assert MdnsUtil.split_txt(b"\x00") == [""]


def test_get_interface_unknown():
    with pytest.raises(InterfaceError):
        MdnsUtil.get_interface("no-such-interface0")


def test_get_interface_loopback():
    loopback = get_loopback()
    assert loopback is not None, 'Could not find loopback interface'
    interface = MdnsUtil.get_interface(loopback)
    assert interface.name == loopback
    assert MdnsUtil.get_index_for_interface(interface) > 0
