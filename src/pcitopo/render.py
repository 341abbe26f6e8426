"""Graphviz DOT rendering of a PCI topology.

The diagram is rebuilt from bus arithmetic alone: every root port's
secondary bus is rendered, and each bus is classified by what lives on it
(switch upstream ports, PCI bridges or endpoints), recursing through switch
downstream ports to arbitrary depth.
"""

from __future__ import annotations

import io
import logging
from typing import TextIO

from pcitopo.address import PciAddress
from pcitopo.device import PciDevice
from pcitopo.errors import TopologyError
from pcitopo.models import LinkCapability, LinkStatus, PortRole
from pcitopo.namedb import get_db
from pcitopo.namedb._registry import NameDatabase
from pcitopo.topology import Topology

logger = logging.getLogger(__name__)

BANNER = "#" * 70


class ClusterTable:
    """Dense cluster numbering keyed by name, in first-use order from 1."""

    def __init__(self) -> None:
        self._clusters: dict[str, int] = {}

    def index(self, identifier: str) -> int:
        """Return the cluster index for an identifier, allocating if new."""
        if identifier not in self._clusters:
            self._clusters[identifier] = len(self._clusters) + 1
        return self._clusters[identifier]

    def __len__(self) -> int:
        return len(self._clusters)


def _link_capability(device: PciDevice) -> LinkCapability:
    if device.link_capability is None:
        raise TopologyError(f"{device.address}: no link capability (LnkCap) found")
    return device.link_capability


def _link_status(device: PciDevice) -> LinkStatus:
    if device.link_status is None:
        raise TopologyError(f"{device.address}: no link status (LnkSta) found")
    return device.link_status


class GraphRenderer:
    """Writes a topology as an undirected Graphviz graph.

    A renderer can be used for several :meth:`write` calls; each call
    numbers its clusters from 1 again, so identical input always gives
    identical output.
    """

    def __init__(self, topology: Topology, names: NameDatabase | None = None) -> None:
        """Initialize the renderer.

        Args:
            topology: Parsed machine topology.
            names: Short-name database for leaf labels; the built-in table
                is used when omitted.
        """
        self.topology = topology
        self.names = names if names is not None else get_db()
        self._out: TextIO | None = None
        self._clusters = ClusterTable()

    def render(self) -> str:
        """Render the graph and return it as a string."""
        buf = io.StringIO()
        self.write(buf)
        return buf.getvalue()

    def write(self, out: TextIO) -> None:
        """Write the graph description to a text stream.

        Raises:
            TopologyError: If a device lacks data the diagram depends on.
            OSError: If writing to the stream fails.
        """
        self._out = out
        self._clusters = ClusterTable()
        try:
            self._line("graph pci {")
            self._line("\trankdir=LR;")

            for root_port in self.topology.root_ports():
                # Some platforms (e.g. the host bridge of a Dell PowerEdge R730xd)
                # advertise a Root Port capability on a type 0 header. Those have
                # no secondary bus and are not drawn.
                if root_port.secondary_bus is None:
                    logger.debug(
                        "Skipping root port %s without a secondary bus", root_port.address
                    )
                    continue
                self._render_root_port(root_port, root_port.secondary_bus)

            self._line("}")
        finally:
            self._out = None

    # --- output helpers ---

    def _line(self, text: str = "") -> None:
        assert self._out is not None
        self._out.write(text + "\n")

    def _edge(self, a: object, b: object, label: object | None = None) -> None:
        attrs = f' [ label="{label}" ]' if label is not None else ""
        self._line(f'\t"{a}" -- "{b}"{attrs};')

    def _device_node(self, device: PciDevice) -> None:
        name = device.display_name(self.names)
        self._line(f'\t"{device.address}" [ label="{name}\\n{device.address}" ];')

    def _cluster(
        self, identifier: str, members: list[PciAddress], label: str | None = None
    ) -> None:
        self._line()
        self._line(f"\tsubgraph cluster{self._clusters.index(identifier)} {{")
        if label is not None:
            self._line(f'\t\tlabel="{label}";')
        for address in members:
            self._line(f'\t\t"{address}";')
        self._line("\t}")

    # --- traversal ---

    def _render_root_port(self, root_port: PciDevice, secondary_bus: int) -> None:
        address = root_port.address

        self._line()
        self._line(f"\t{BANNER}")
        self._line(f"\t# root port {address}")

        self._line()
        self._line(f'\t"{address}" [ label="Root port\\n{address}" shape=rectangle ];')

        self._cluster(root_port.device_group_name, [address], label=root_port.device_group_name)

        self.render_bus(root_port, address.domain, secondary_bus)

    def render_bus(self, parent: PciDevice, domain: int, bus: int) -> None:
        """Render one bus hanging off ``parent`` and everything below it."""
        topology = self.topology

        self._line()
        self._line(f"\t# domain {domain:04x} bus {bus:02x}")

        bus_devices = topology.devices_on_bus(domain, bus)

        # On some servers (e.g. ORACLE SERVER E4-2c) the System Slot record
        # carries the address of the root port or switch downstream port
        # above the slot rather than that of the device in it.
        slot_name = topology.slot_name(PciAddress.from_parts(domain, bus, 0, 0))
        if slot_name is None:
            slot_name = topology.slot_name(parent.address)

        self._line()

        if slot_name is not None:
            intermediate = f"{parent.address}_{bus:02x}"
            self._edge(parent.address, intermediate, _link_capability(parent))
            self._line(f'\t"{intermediate}" [ label="{slot_name}" shape=rectangle ];')
        else:
            intermediate = str(parent.address)

        if bus_devices:
            first = topology.device(bus_devices[0])
            label: LinkStatus | None = None
            if topology.unique_id(parent) != topology.unique_id(first):
                label = _link_status(first)
            # TODO: point the edge at the cluster (lhead) for multi-function devices
            self._edge(intermediate, first.address, label)
        else:
            placeholder = f"bus {domain:04x}:{bus:02x}"
            self._edge(
                intermediate,
                placeholder,
                _link_capability(parent) if slot_name is None else None,
            )
            self._line()
            self._line(f'\t"{placeholder}" [ shape=rectangle ];')

        by_role: dict[PortRole, list[PciDevice]] = {
            PortRole.UPSTREAM_PORT: [],
            PortRole.PCI_BRIDGE: [],
            PortRole.ENDPOINT: [],
        }
        for address in bus_devices:
            device = topology.device(address)
            if device.role in by_role:
                by_role[device.role].append(device)

        if by_role[PortRole.UPSTREAM_PORT]:
            for upstream_port in by_role[PortRole.UPSTREAM_PORT]:
                self._render_switch(upstream_port, domain)
        elif by_role[PortRole.PCI_BRIDGE]:
            for bridge in by_role[PortRole.PCI_BRIDGE]:
                self._render_pci_bridge(bridge, domain)
        elif by_role[PortRole.ENDPOINT]:
            self._render_endpoints(by_role[PortRole.ENDPOINT])

    def _render_switch(self, upstream_port: PciDevice, domain: int) -> None:
        topology = self.topology
        downstream_ports = topology.secondary_devices(upstream_port)

        self._cluster(
            topology.unique_id(upstream_port),
            [upstream_port.address, *downstream_ports],
            label="PCIe switch",
        )

        self._line()
        self._line(
            f"\t# domain {domain:04x} bus {upstream_port.secondary_bus:02x}"
            " is a switch internal bus"
        )

        for address in downstream_ports:
            self._line()
            self._edge(upstream_port.address, address)

        for address in downstream_ports:
            downstream_port = topology.device(address)
            if downstream_port.secondary_bus is None:
                raise TopologyError(f"{address}: switch downstream port has no secondary bus")
            self.render_bus(downstream_port, address.domain, downstream_port.secondary_bus)

    def _render_pci_bridge(self, bridge: PciDevice, domain: int) -> None:
        topology = self.topology

        self._cluster(topology.unique_id(bridge), [bridge.address], label="PCI bridge")

        secondary_devices = topology.secondary_devices(bridge)

        self._line()
        self._line(f"\t# domain {domain:04x} bus {bridge.secondary_bus:02x}")

        for address in secondary_devices:
            self._line()
            self._edge(bridge.address, address)
            self._line()
            self._device_node(topology.device(address))

    def _render_endpoints(self, endpoints: list[PciDevice]) -> None:
        first = endpoints[0]

        self._line()
        self._device_node(first)

        if len(endpoints) == 1:
            return

        # Multi-function device
        self._cluster(self.topology.unique_id(first), [e.address for e in endpoints])

        for a, b in zip(endpoints, endpoints[1:]):
            self._line()
            self._edge(a.address, b.address)
            self._device_node(b)


def render_graph(topology: Topology, names: NameDatabase | None = None) -> str:
    """Render a topology as a Graphviz DOT string."""
    return GraphRenderer(topology, names).render()
