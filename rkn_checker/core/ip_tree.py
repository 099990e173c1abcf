# rkn_checker/core/ip_tree.py
from ipaddress import ip_address, ip_network, IPv4Network, IPv6Network
from typing import Dict, Optional, Union

from rkn_checker.core.exceptions import MalformedAddress

NOT_BLOCKED = 0
BLOCKED = 1

Network = Union[IPv4Network, IPv6Network]


class _Node:
    __slots__ = ("children", "flag")

    def __init__(self):
        self.children = [None, None]
        self.flag: Optional[int] = None


def parse_prefix(item: str) -> Network:
    """
    Parse 'a.b.c.d/n' or a bare address (host route) into a network.
    Host bits are masked, so '1.2.3.4/24' becomes 1.2.3.0/24.
    """
    try:
        if "/" in item:
            return ip_network(item, strict=False)
        return ip_network(ip_address(item))
    except ValueError as e:
        raise MalformedAddress(str(e)) from e


class IPTree:
    """
    Binary prefix trie with longest-prefix-match lookup.

    One root per address family; each root carries the default entry
    (prefix length 0, NOT_BLOCKED), so a lookup of a well-formed address
    always resolves to some flag. Lookup cost is bounded by the address
    length (32 or 128 steps).

    Instances are filled by the loader and then only read; nothing mutates
    a tree once it has been installed in a SnapshotStore.
    """

    def __init__(self):
        self._roots: Dict[int, _Node] = {4: _Node(), 6: _Node()}
        self._size = 0
        self.insert("0.0.0.0/0", NOT_BLOCKED)
        self.insert("::/0", NOT_BLOCKED)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, address: str) -> bool:
        return self.lookup(address) == BLOCKED

    def insert(self, prefix: Union[str, Network], flag: int = BLOCKED) -> None:
        """Add a prefix; re-inserting an identical prefix replaces its flag."""
        net = parse_prefix(prefix.strip()) if isinstance(prefix, str) else prefix
        bits = int(net.network_address)
        width = net.max_prefixlen

        node = self._roots[net.version]
        for depth in range(net.prefixlen):
            bit = (bits >> (width - 1 - depth)) & 1
            child = node.children[bit]
            if child is None:
                child = node.children[bit] = _Node()
            node = child

        if node.flag is None:
            self._size += 1
        node.flag = flag

    def lookup(self, address: str) -> int:
        """Return the flag of the longest stored prefix containing address."""
        try:
            addr = ip_address(address.strip())
        except (ValueError, AttributeError) as e:
            raise MalformedAddress(f"{address!r} is not a valid IP address") from e

        # ::ffff:a.b.c.d is looked up as a.b.c.d
        if addr.version == 6 and addr.ipv4_mapped is not None:
            addr = addr.ipv4_mapped

        bits = int(addr)
        width = addr.max_prefixlen

        node = self._roots[addr.version]
        found = node.flag
        for depth in range(width):
            node = node.children[(bits >> (width - 1 - depth)) & 1]
            if node is None:
                break
            if node.flag is not None:
                found = node.flag
        return found
