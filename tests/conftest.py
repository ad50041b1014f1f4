"""Shared addresses for the codec tests."""

from ipaddress import IPv4Address, IPv6Address

import pytest

from honeywire import Address, Network


@pytest.fixture
def tcp4() -> Address:
    """Listener side of an SSH connection."""
    return Address(network=Network.TCP, ip=IPv4Address("10.0.0.1"), port=22)


@pytest.fixture
def tcp4_remote() -> Address:
    return Address(network=Network.TCP, ip=IPv4Address("203.0.113.5"), port=51234)


@pytest.fixture
def udp6() -> Address:
    return Address(network=Network.UDP, ip=IPv6Address("2001:db8::53"), port=53)
