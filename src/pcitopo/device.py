"""PCI device records parsed from ``lspci -vvv -nn`` output blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pcitopo.address import PciAddress
from pcitopo.models import LinkCapability, LinkStatus, PortRole

if TYPE_CHECKING:
    from pcitopo.namedb._registry import NameDatabase

# First line of a block, e.g.
# "0000:00:01.0 PCI bridge [0604]: Intel Corporation ... [8086:1901] (rev 07)"
_DEVICE_PATTERN = re.compile(
    r"^(?:([0-9a-f]{4}):)?([0-9a-f]{2}):([0-9a-f]{2})\.([0-7]).*"
    r"\[([0-9a-f]{4}):([0-9a-f]{4})\]"
)

# Checked in order, first match wins
_ROLE_PATTERNS: list[tuple[PortRole, re.Pattern[str]]] = [
    (PortRole.ROOT_PORT, re.compile(r" Express \(v2\) Root Port ")),
    (PortRole.UPSTREAM_PORT, re.compile(r" Express \(v2\) Upstream Port, ")),
    (PortRole.PCI_BRIDGE, re.compile(r" Express \(v2\) PCI-Express to PCI/PCI-X Bridge, ")),
    (PortRole.ENDPOINT, re.compile(r" Express \(v2\) (?:Legacy )?Endpoint, ")),
]

_SECONDARY_BUS_PATTERN = re.compile(r", secondary=([0-9a-f]{2}), subordinate=")

_LNK_CAP_PATTERN = re.compile(
    r"LnkCap:\tPort #[0-9]*, Speed ([0-9.]+)GT/s, Width x([0-9]+)"
)

_LNK_STA_PATTERN = re.compile(
    r"LnkSta:\t"
    r"Speed ([0-9.]+)GT/s( \(ok\))?( \(downgraded\))?, "
    r"Width x([0-9]+)( \(ok\))?( \(downgraded\))?"
)

_NUMA_NODE_PATTERN = re.compile(r"NUMA node: ([0-9]+)\n")

_SERIAL_NUMBER_PATTERN = re.compile(
    r"\] Device Serial Number ((?:[0-9a-f]{2}-){7}[0-9a-f]{2})\n"
)


@dataclass(frozen=True)
class PciDevice:
    """One PCI function found in the enumeration.

    All derived fields are extracted once from the description block when
    the record is parsed. Fields that only apply to some port roles are
    None when the block does not carry them.
    """

    address: PciAddress
    vendor_id: int
    device_id: int
    role: PortRole = PortRole.OTHER
    secondary_bus: int | None = None
    link_capability: LinkCapability | None = None
    link_status: LinkStatus | None = None
    numa_node: int | None = None
    serial_number: int | None = None
    description: str = field(default="", repr=False, compare=False)

    @property
    def pci_id_str(self) -> str:
        """Return PCI ID in lspci format (e.g., '8086:1563')."""
        return f"{self.vendor_id:04x}:{self.device_id:04x}"

    @property
    def device_group_name(self) -> str:
        """Cluster label grouping root ports in the diagram.

        This is a heuristic: root ports on bus 0 are assumed to hang off
        the platform controller hub and everything else off a CPU socket.
        """
        if self.address.bus == 0:
            if self.numa_node is None:
                return "PCH"
            return f"PCH (on NUMA node #{self.numa_node})"
        if self.numa_node is None:
            return "CPU"
        return f"NUMA node #{self.numa_node}"

    def display_name(self, names: NameDatabase) -> str:
        """Short name from the database, or "unknown vvvv:dddd"."""
        name = names.short_name(self.vendor_id, self.device_id)
        if name is not None:
            return name
        return f"unknown {self.pci_id_str}"


def _parse_role(desc: str) -> PortRole:
    for role, pattern in _ROLE_PATTERNS:
        if pattern.search(desc):
            return role
    return PortRole.OTHER


def _parse_secondary_bus(desc: str) -> int | None:
    match = _SECONDARY_BUS_PATTERN.search(desc)
    if match is None:
        return None
    return int(match.group(1), 16)


def _parse_link_capability(desc: str) -> LinkCapability | None:
    match = _LNK_CAP_PATTERN.search(desc)
    if match is None:
        return None
    return LinkCapability(float(match.group(1)), int(match.group(2)))


def _parse_link_status(desc: str) -> LinkStatus | None:
    match = _LNK_STA_PATTERN.search(desc)
    if match is None:
        return None
    speed, _, speed_downgraded, width, _, width_downgraded = match.groups()
    return LinkStatus(
        float(speed),
        int(width),
        downgraded=speed_downgraded is not None or width_downgraded is not None,
    )


def _parse_numa_node(desc: str) -> int | None:
    match = _NUMA_NODE_PATTERN.search(desc)
    if match is None:
        return None
    return int(match.group(1))


def _parse_serial_number(desc: str) -> int | None:
    match = _SERIAL_NUMBER_PATTERN.search(desc)
    if match is None:
        return None
    # Bytes are printed most significant first
    return int(match.group(1).replace("-", ""), 16)


def parse_device(desc: str) -> PciDevice | None:
    """Parse one ``lspci -vvv -nn`` device block.

    Args:
        desc: Text of a single device block, starting with its address line.

    Returns:
        PciDevice, or None if the block is not a device description.
    """
    match = _DEVICE_PATTERN.match(desc)
    if match is None:
        return None

    domain, bus, device, function, vendor_id, device_id = match.groups()

    return PciDevice(
        address=PciAddress.from_parts(
            int(domain, 16) if domain is not None else 0,
            int(bus, 16),
            int(device, 16),
            int(function, 16),
        ),
        vendor_id=int(vendor_id, 16),
        device_id=int(device_id, 16),
        role=_parse_role(desc),
        secondary_bus=_parse_secondary_bus(desc),
        link_capability=_parse_link_capability(desc),
        link_status=_parse_link_status(desc),
        numa_node=_parse_numa_node(desc),
        serial_number=_parse_serial_number(desc),
        description=desc,
    )
