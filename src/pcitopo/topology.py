"""Machine topology assembled from lspci and dmidecode dumps."""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterator

from pcitopo.address import PciAddress
from pcitopo.device import PciDevice, parse_device
from pcitopo.dmi import parse_slot
from pcitopo.errors import TopologyError
from pcitopo.models import PortRole

logger = logging.getLogger(__name__)


def split_blocks(text: str) -> list[str]:
    """Split a report into blank-line separated blocks, dropping empty ones."""
    return [block for block in text.split("\n\n") if block]


class Topology:
    """All PCI devices and System Slots of one machine, indexed by address.

    The input carries no parent/child pointers; the hierarchy is recovered
    from bus numbers by :meth:`devices_on_bus` and the devices' secondary
    bus numbers.
    """

    def __init__(self) -> None:
        self._devices: dict[PciAddress, PciDevice] = {}
        self._slots: dict[PciAddress, str] = {}
        # Sorted device addresses, rebuilt lazily after insertions
        self._order: list[PciAddress] | None = None

    @classmethod
    def from_text(cls, *texts: str) -> Topology:
        """Build a topology from one or more lspci/dmidecode reports.

        lspci and dmidecode output may be concatenated into one text or
        passed separately; every block is tried against both formats.
        """
        topology = cls()
        for text in texts:
            topology.add_text(text)
        logger.debug(
            "Parsed %d PCI devices and %d System Slots",
            len(topology._devices),
            len(topology._slots),
        )
        return topology

    def add_text(self, text: str) -> None:
        """Parse every block of a report into devices and slots."""
        for block in split_blocks(text):
            slot = parse_slot(block)
            if slot is not None:
                self.add_slot(*slot)

            device = parse_device(block)
            if device is not None:
                self.add_device(device)

    def add_device(self, device: PciDevice) -> None:
        """Add a device record. A record at the same address is replaced."""
        if device.address in self._devices:
            logger.debug("Duplicate PCI device %s, keeping the last one", device.address)
        self._devices[device.address] = device
        self._order = None

    def add_slot(self, address: PciAddress, name: str) -> None:
        """Register a System Slot designation for a bus address."""
        self._slots[address] = name

    @property
    def addresses(self) -> list[PciAddress]:
        """All device addresses in address order."""
        if self._order is None:
            self._order = sorted(self._devices)
        return self._order

    @property
    def devices(self) -> dict[PciAddress, PciDevice]:
        """Address-ordered mapping of all devices."""
        return {address: self._devices[address] for address in self.addresses}

    @property
    def slots(self) -> dict[PciAddress, str]:
        """Mapping of bus address to System Slot designation."""
        return dict(self._slots)

    def device(self, address: PciAddress) -> PciDevice:
        """Return the device at an address.

        Raises:
            KeyError: If no device was parsed at that address.
        """
        return self._devices[address]

    def get(self, address: PciAddress) -> PciDevice | None:
        """Return the device at an address, or None."""
        return self._devices.get(address)

    def slot_name(self, address: PciAddress) -> str | None:
        """Return the System Slot designation registered for an address."""
        return self._slots.get(address)

    def devices_on_bus(self, domain: int, bus: int) -> list[PciAddress]:
        """Return the addresses of all devices on a bus, in devfn order."""
        order = self.addresses
        lo = bisect.bisect_left(order, PciAddress(domain, bus, 0))
        hi = bisect.bisect_right(order, PciAddress(domain, bus, 0xFF))
        return order[lo:hi]

    def iter_role(self, role: PortRole) -> Iterator[PciDevice]:
        """Iterate over devices with a given port role, in address order."""
        for address in self.addresses:
            device = self._devices[address]
            if device.role is role:
                yield device

    def root_ports(self) -> Iterator[PciDevice]:
        """Iterate over root ports in address order."""
        return self.iter_role(PortRole.ROOT_PORT)

    def secondary_devices(self, device: PciDevice) -> list[PciAddress]:
        """Return the devices on the secondary bus of a bridge-like device.

        Raises:
            TopologyError: If the device has no secondary bus.
        """
        if device.secondary_bus is None:
            raise TopologyError(f"{device.address}: {device.role} has no secondary bus")
        return self.devices_on_bus(device.address.domain, device.secondary_bus)

    def unique_id(self, device: PciDevice) -> str:
        """Return an identifier for the physical device a function belongs to.

        The Device Serial Number is used when present, formatted as 16 hex
        digits, so that all ports of one switch share an ID. Some switches
        report an upstream port serial number that differs from their
        downstream ports; for those the serial is not trusted and the
        address is used instead.
        """
        serial_number = device.serial_number
        if serial_number is None:
            return str(device.address)

        if device.role is PortRole.UPSTREAM_PORT:
            for address in self.secondary_devices(device):
                downstream_serial = self._devices[address].serial_number
                if downstream_serial is not None and downstream_serial != serial_number:
                    return str(device.address)

        return f"{serial_number:016x}"

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[PciDevice]:
        for address in self.addresses:
            yield self._devices[address]

    def __contains__(self, address: object) -> bool:
        return address in self._devices
