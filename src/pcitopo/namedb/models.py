"""Data models for the device short-name database."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Vendor:
    """PCI vendor information."""

    vendor_id: int
    name: str


@dataclass(frozen=True)
class KnownDevice:
    """A PCI function with a short display name for diagrams.

    Short names are deliberately terse (e.g. "Intel X550" rather than the
    full pci.ids description) since they end up in graph node labels.
    """

    vendor_id: int
    device_id: int
    name: str

    @property
    def pci_id_str(self) -> str:
        """Return PCI ID in lspci format (e.g., '8086:1563')."""
        return f"{self.vendor_id:04x}:{self.device_id:04x}"
