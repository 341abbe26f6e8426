"""Data models for PCIe port roles and link parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PortRole(Enum):
    """PCIe port type advertised by a function's Express capability."""

    ROOT_PORT = "root-port"
    UPSTREAM_PORT = "upstream-port"
    PCI_BRIDGE = "pci-bridge"
    ENDPOINT = "endpoint"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def _format_speed(speed_gts: float) -> str:
    # 8.0 -> "8", 2.5 -> "2.5"
    return f"{speed_gts:g}"


@dataclass(frozen=True)
class LinkCapability:
    """Maximum link speed and width a port supports (LnkCap)."""

    speed_gts: float
    width: int

    def __str__(self) -> str:
        return f"{_format_speed(self.speed_gts)}GT/s x{self.width}"


@dataclass(frozen=True)
class LinkStatus:
    """Currently negotiated link speed and width (LnkSta).

    ``downgraded`` is set when lspci flagged either the speed or the width
    as downgraded relative to the capability.
    """

    speed_gts: float
    width: int
    downgraded: bool = False

    def __str__(self) -> str:
        text = f"{_format_speed(self.speed_gts)}GT/s x{self.width}"
        if self.downgraded:
            # Graphviz label line break
            text += "\\n(downgraded)"
        return text
