"""Shared fixtures: synthetic lspci and dmidecode dumps."""

from __future__ import annotations

from collections.abc import Callable

import pytest

EXPRESS_CAPS = {
    "root": "Express (v2) Root Port (Slot+), MSI 00",
    "upstream": "Express (v2) Upstream Port, MSI 00",
    "downstream": "Express (v2) Downstream Port (Slot+), MSI 00",
    "bridge": "Express (v2) PCI-Express to PCI/PCI-X Bridge, MSI 00",
    "endpoint": "Express (v2) Endpoint, MSI 00",
    "legacy": "Express (v2) Legacy Endpoint, MSI 00",
}

BRIDGE_KINDS = {"root", "upstream", "downstream", "bridge"}

# A verbatim-style `lspci -vvv -nn -D` block for a root port
ROOT_PORT_BLOCK = """\
0000:00:01.0 PCI bridge [0604]: Intel Corporation 6th-10th Gen Core Processor PCIe Controller (x16) [8086:1901] (rev 07) (prog-if 00 [Normal decode])
\tControl: I/O+ Mem+ BusMaster+ SpecCycle- MemWINV- VGASnoop- ParErr- Stepping- SERR- FastB2B- DisINTx+
\tStatus: Cap+ 66MHz- UDF- FastB2B- ParErr- DEVSEL=fast >TAbort- <TAbort- <MAbort- >SERR- <PERR- INTx-
\tLatency: 0, Cache Line Size: 64 bytes
\tInterrupt: pin A routed to IRQ 122
\tNUMA node: 1
\tBus: primary=00, secondary=02, subordinate=02, sec-latency=0
\tI/O behind bridge: [disabled]
\tCapabilities: [88] Subsystem: ASUSTeK Computer Inc. 6th-10th Gen Core Processor PCIe Controller (x16) [1043:8694]
\tCapabilities: [a0] Express (v2) Root Port (Slot+), MSI 00
\t\tDevCap:\tMaxPayload 256 bytes, PhantFunc 0
\t\tLnkCap:\tPort #2, Speed 8GT/s, Width x16, ASPM L0s L1, Exit Latency L0s <256ns, L1 <8us
\t\t\tClockPM- Surprise- LLActRep- BwNot+ ASPMOptComp+
\t\tLnkCtl:\tASPM Disabled; RCB 64 bytes, Disabled- CommClk+
\t\tLnkSta:\tSpeed 2.5GT/s (downgraded), Width x16 (ok)
\t\t\tTrErr- Train- SlotClk+ DLActive- BWMgmt+ ABWMgmt-
\tCapabilities: [100 v1] Virtual Channel
\tKernel driver in use: pcieport
"""

ENDPOINT_BLOCK = """\
0000:02:00.0 Ethernet controller [0200]: Intel Corporation Ethernet Controller 10G X550T [8086:1563] (rev 01)
\tSubsystem: Intel Corporation Ethernet Converged Network Adapter X550-T2 [8086:0001]
\tControl: I/O- Mem+ BusMaster+ SpecCycle- MemWINV- VGASnoop- ParErr- Stepping- SERR- FastB2B- DisINTx+
\tCapabilities: [a0] Express (v2) Endpoint, MSI 00
\t\tDevCap:\tMaxPayload 512 bytes, PhantFunc 0, Latency L0s <512ns, L1 <64us
\t\tLnkCap:\tPort #0, Speed 8GT/s, Width x4, ASPM L0s L1, Exit Latency L0s <2us, L1 <16us
\t\tLnkSta:\tSpeed 8GT/s (ok), Width x4 (ok)
\tCapabilities: [140 v1] Device Serial Number a0-36-9f-ff-ff-12-34-56
\tKernel driver in use: ixgbe
"""

SLOT_BLOCK = """\
Handle 0x0901, DMI type 9, 17 bytes
System Slot Information
\tDesignation: CPU1 SLOT2 PCI-E 3.0 X16
\tType: x16 PCI Express 3 x16
\tCurrent Usage: In Use
\tLength: Long
\tID: 2
\tCharacteristics:
\t\t3.3 V is provided
\t\tOpening is shared
\t\tPME signal is supported
\tBus Address: 0000:02:00.0
"""


def build_lspci_block(
    address: str,
    pci_id: str,
    kind: str | None = None,
    *,
    secondary: str | None = None,
    lnkcap: str | None = None,
    lnksta: str | None = None,
    numa: int | None = None,
    serial: str | None = None,
) -> str:
    """Build an lspci -vvv style block with only the lines pcitopo reads.

    ``lnkcap`` is e.g. "Speed 8GT/s, Width x16" and ``lnksta`` e.g.
    "Speed 8GT/s (ok), Width x16 (ok)".
    """
    device_class = "PCI bridge [0604]" if kind in BRIDGE_KINDS else "Ethernet controller [0200]"
    lines = [f"{address} {device_class}: Example Corp Device [{pci_id}] (rev 01)"]
    lines.append(
        "\tControl: I/O- Mem+ BusMaster+ SpecCycle- MemWINV- VGASnoop- ParErr- Stepping- SERR-"
    )
    if numa is not None:
        lines.append(f"\tNUMA node: {numa}")
    if secondary is not None:
        lines.append(
            f"\tBus: primary=00, secondary={secondary}, subordinate={secondary}, sec-latency=0"
        )
    if kind is not None:
        lines.append(f"\tCapabilities: [40] {EXPRESS_CAPS[kind]}")
    if lnkcap is not None:
        lines.append(f"\t\tLnkCap:\tPort #0, {lnkcap}, ASPM L1, Exit Latency L1 <8us")
    if lnksta is not None:
        lines.append(f"\t\tLnkSta:\t{lnksta}")
    if serial is not None:
        lines.append(f"\tCapabilities: [100 v1] Device Serial Number {serial}")
    lines.append("\tKernel modules: example")
    return "\n".join(lines) + "\n"


def build_slot_block(designation: str, bus_address: str, handle: int = 0x0900) -> str:
    """Build a dmidecode System Slot (type 9) block."""
    return (
        f"Handle {handle:#06x}, DMI type 9, 17 bytes\n"
        "System Slot Information\n"
        f"\tDesignation: {designation}\n"
        "\tType: x16 PCI Express 3 x16\n"
        "\tCurrent Usage: In Use\n"
        "\tLength: Long\n"
        f"\tBus Address: {bus_address}\n"
    )


def join_blocks(*blocks: str) -> str:
    """Join blocks the way lspci and dmidecode separate them."""
    return "\n".join(blocks)


@pytest.fixture
def lspci_block() -> Callable[..., str]:
    """Factory for synthetic lspci device blocks."""
    return build_lspci_block


@pytest.fixture
def slot_block() -> Callable[..., str]:
    """Factory for synthetic dmidecode System Slot blocks."""
    return build_slot_block


@pytest.fixture
def simple_machine() -> str:
    """One root port on bus 0 with an X550 NIC behind it, no slots."""
    return join_blocks(
        build_lspci_block(
            "0000:00:01.0",
            "8086:1901",
            "root",
            secondary="02",
            lnkcap="Speed 8GT/s, Width x8",
            lnksta="Speed 8GT/s (ok), Width x8 (ok)",
        ),
        build_lspci_block(
            "0000:02:00.0",
            "8086:1563",
            "endpoint",
            lnkcap="Speed 8GT/s, Width x8",
            lnksta="Speed 8GT/s (ok), Width x8 (ok)",
        ),
    )


@pytest.fixture
def switch_machine() -> str:
    """A root port feeding a PCIe switch with one NIC and one empty slot.

    Bus layout: 00:03.0 -> bus 01 (upstream port 01:00.0) -> internal bus 02
    (downstream ports 02:00.0 and 02:01.0) -> buses 03 (NIC) and 04 (empty,
    slot registered at 0000:04:00.0).
    """
    switch_serial = "00-11-22-33-44-55-66-77"
    return join_blocks(
        build_lspci_block(
            "0000:00:03.0",
            "8086:2f08",
            "root",
            secondary="01",
            lnkcap="Speed 8GT/s, Width x16",
            lnksta="Speed 8GT/s (ok), Width x16 (ok)",
            numa=0,
        ),
        build_lspci_block(
            "0000:01:00.0",
            "10b5:8747",
            "upstream",
            secondary="02",
            lnkcap="Speed 8GT/s, Width x16",
            lnksta="Speed 8GT/s (ok), Width x16 (ok)",
            serial=switch_serial,
        ),
        build_lspci_block(
            "0000:02:00.0",
            "10b5:8747",
            "downstream",
            secondary="03",
            lnkcap="Speed 8GT/s, Width x8",
            lnksta="Speed 8GT/s (ok), Width x8 (ok)",
            serial=switch_serial,
        ),
        build_lspci_block(
            "0000:02:01.0",
            "10b5:8747",
            "downstream",
            secondary="04",
            lnkcap="Speed 8GT/s, Width x8",
            lnksta="Speed 2.5GT/s (ok), Width x1 (downgraded)",
            serial=switch_serial,
        ),
        build_lspci_block(
            "0000:03:00.0",
            "15b3:101d",
            "endpoint",
            lnkcap="Speed 16GT/s, Width x16",
            lnksta="Speed 8GT/s (downgraded), Width x8 (downgraded)",
        ),
        build_slot_block("SLOT4", "0000:04:00.0", handle=0x0904),
    )


@pytest.fixture
def root_port_block() -> str:
    """Realistic lspci block of a downgraded x16 root port on NUMA node 1."""
    return ROOT_PORT_BLOCK


@pytest.fixture
def endpoint_block() -> str:
    """Realistic lspci block of an Intel X550 with a Device Serial Number."""
    return ENDPOINT_BLOCK


@pytest.fixture
def dmi_slot_block() -> str:
    """Realistic dmidecode System Slot record for bus 02."""
    return SLOT_BLOCK
