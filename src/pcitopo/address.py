"""PCI bus addresses (domain, bus, device, function)."""

from __future__ import annotations

import re
from dataclasses import dataclass

# [dddd:]bb:dd.f, domain optional
_ADDRESS_PATTERN = re.compile(
    r"^(?:([0-9a-fA-F]{4}):)?([0-9a-fA-F]{2}):([0-9a-fA-F]{2})\.([0-7])$"
)

MAX_DEVICE = 31
MAX_FUNCTION = 7


@dataclass(frozen=True, order=True)
class PciAddress:
    """A PCI function locator.

    Device and function are packed into a single devfn byte
    (``device * 8 + function``), so the dataclass ordering on
    ``(domain, bus, devfn)`` is the natural PCI address order.
    """

    domain: int
    bus: int
    devfn: int

    @classmethod
    def from_parts(cls, domain: int, bus: int, device: int, function: int) -> PciAddress:
        """Pack a (domain, bus, device, function) tuple into an address.

        Raises:
            ValueError: If any component is out of range.
        """
        if not 0 <= domain <= 0xFFFF:
            raise ValueError(f"Domain must be 0-0xffff, got {domain:#x}")
        if not 0 <= bus <= 0xFF:
            raise ValueError(f"Bus must be 0-0xff, got {bus:#x}")
        if not 0 <= device <= MAX_DEVICE:
            raise ValueError(f"Device must be 0-{MAX_DEVICE}, got {device}")
        if not 0 <= function <= MAX_FUNCTION:
            raise ValueError(f"Function must be 0-{MAX_FUNCTION}, got {function}")
        return cls(domain, bus, device * 8 + function)

    @property
    def device(self) -> int:
        """Device number recovered from devfn."""
        return self.devfn // 8

    @property
    def function(self) -> int:
        """Function number recovered from devfn."""
        return self.devfn % 8

    def __str__(self) -> str:
        return f"{self.domain:04x}:{self.bus:02x}:{self.device:02x}.{self.function:x}"


def validate_address(text: str) -> None:
    """Validate a textual PCI address.

    Args:
        text: Address string like "0000:03:00.0" or "03:00.0".

    Raises:
        ValueError: If the string is not a valid PCI address.
    """
    if not _ADDRESS_PATTERN.match(text):
        raise ValueError(f"Invalid PCI address format: {text!r}")


def parse_address(text: str) -> PciAddress:
    """Parse a textual PCI address, defaulting the domain to 0.

    Raises:
        ValueError: If the string is not a valid PCI address.
    """
    match = _ADDRESS_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid PCI address format: {text!r}")
    domain, bus, device, function = match.groups()
    return PciAddress.from_parts(
        int(domain, 16) if domain is not None else 0,
        int(bus, 16),
        int(device, 16),
        int(function, 16),
    )
