"""Short-name database registry with indexed lookups."""

from __future__ import annotations

from collections.abc import Iterator

from pcitopo.namedb.models import KnownDevice, Vendor


class NameDatabase:
    """Database of device short names keyed by (vendor_id, device_id).

    When the same ID pair appears more than once, the later entry wins, so
    user-supplied entries appended after the built-in table override it.
    """

    def __init__(
        self,
        vendors: list[Vendor],
        devices: list[KnownDevice],
    ) -> None:
        """Initialize database with vendor and device data.

        Args:
            vendors: List of vendor definitions.
            devices: List of known device definitions.
        """
        self._vendors_by_id: dict[int, Vendor] = {v.vendor_id: v for v in vendors}

        self._devices_by_id: dict[tuple[int, int], KnownDevice] = {
            (d.vendor_id, d.device_id): d for d in devices
        }

        self._vendors = list(vendors)

    def lookup_vendor(self, vendor_id: int) -> Vendor | None:
        """Look up vendor by ID."""
        return self._vendors_by_id.get(vendor_id)

    def lookup_device(self, vendor_id: int, device_id: int) -> KnownDevice | None:
        """Look up a known device by vendor and device ID.

        Args:
            vendor_id: PCI vendor ID (e.g., 0x8086).
            device_id: PCI device ID (e.g., 0x1563).

        Returns:
            KnownDevice object or None if not found.
        """
        return self._devices_by_id.get((vendor_id, device_id))

    def short_name(self, vendor_id: int, device_id: int) -> str | None:
        """Return the short display name for a device, if known."""
        known = self.lookup_device(vendor_id, device_id)
        if known is None:
            return None
        return known.name

    @property
    def vendors(self) -> list[Vendor]:
        """Return all vendors in the database."""
        return list(self._vendors)

    @property
    def devices(self) -> list[KnownDevice]:
        """Return all known devices, ordered by PCI ID."""
        return sorted(self._devices_by_id.values(), key=lambda d: (d.vendor_id, d.device_id))

    def iter_by_vendor(self, vendor_id: int) -> Iterator[KnownDevice]:
        """Iterate over all known devices from a specific vendor.

        Args:
            vendor_id: PCI vendor ID.

        Yields:
            KnownDevice objects for that vendor.
        """
        for device in self.devices:
            if device.vendor_id == vendor_id:
                yield device

    def __len__(self) -> int:
        """Return total number of known devices."""
        return len(self._devices_by_id)
