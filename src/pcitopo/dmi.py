"""System Slot records (DMI type 9) parsed from ``dmidecode`` output."""

from __future__ import annotations

import re
from collections.abc import Iterable

from pcitopo.address import PciAddress

_SLOT_PATTERN = re.compile(
    r", DMI type 9, .*"
    r"Designation: ([^\n]*)\n.*"
    r"Bus Address: ([0-9a-f]{4}):([0-9a-f]{2}):([0-9a-f]{2})\.([0-7])",
    re.DOTALL,
)


def parse_slot(block: str) -> tuple[PciAddress, str] | None:
    """Parse one dmidecode block.

    Returns:
        (bus address, slot designation), or None if the block is not a
        System Slot record with a bus address.
    """
    match = _SLOT_PATTERN.search(block)
    if match is None:
        return None
    name, domain, bus, device, function = match.groups()
    address = PciAddress.from_parts(
        int(domain, 16), int(bus, 16), int(device, 16), int(function, 16)
    )
    return address, name


def parse_slots(blocks: Iterable[str]) -> dict[PciAddress, str]:
    """Build a slot table from dmidecode blocks, ignoring other records."""
    slots: dict[PciAddress, str] = {}
    for block in blocks:
        slot = parse_slot(block)
        if slot is not None:
            address, name = slot
            slots[address] = name
    return slots
