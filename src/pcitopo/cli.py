"""Command-line interface for pcitopo."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TextIO

import click
import yaml

from pcitopo import __version__
from pcitopo.address import parse_address, validate_address
from pcitopo.errors import PciTopoError
from pcitopo.namedb import build_database
from pcitopo.namedb._registry import NameDatabase
from pcitopo.render import GraphRenderer
from pcitopo.topology import Topology

logger = logging.getLogger(__name__)

inputs_argument = click.argument("inputs", nargs=-1, type=click.File("r"))


def _read_topology(inputs: tuple[TextIO, ...]) -> Topology:
    """Read every input fully (stdin when none given) and build a topology."""
    if not inputs:
        return Topology.from_text(click.get_text_stream("stdin").read())
    return Topology.from_text(*(f.read() for f in inputs))


def _names(ctx: click.Context) -> NameDatabase:
    names: NameDatabase = ctx.obj["names"]
    return names


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option("--json", "json_output", is_flag=True, help="Output listings in JSON format")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
@click.option(
    "--names",
    "names_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="PCITOPO_NAMES",
    help="YAML file with additional device short names",
)
@click.pass_context
def main(ctx: click.Context, json_output: bool, verbose: bool, names_file: Path | None) -> None:
    """Draw PCI Express topology diagrams.

    Reads `lspci -vvv -nn -D` output, optionally concatenated with
    `dmidecode` output for slot names, and writes a Graphviz graph.
    Without a subcommand this behaves like `graph` reading stdin:

        (lspci -vvv -nn -D; dmidecode) | pcitopo | dot -Tsvg > pci.svg
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    try:
        names = build_database(names_file)
    except (yaml.YAMLError, KeyError, ValueError, OSError) as e:
        click.echo(f"Error: Cannot load names file {names_file}: {e}", err=True)
        sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["names"] = names

    if ctx.invoked_subcommand is None:
        ctx.invoke(graph)


@main.command("graph")
@inputs_argument
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file path")
@click.pass_context
def graph(ctx: click.Context, inputs: tuple[TextIO, ...], output: str | None) -> None:
    """Write the topology as a Graphviz graph.

    INPUTS are lspci/dmidecode dumps; `-` or no argument reads stdin.
    """
    try:
        topology = _read_topology(inputs)
        dot = GraphRenderer(topology, _names(ctx)).render()
        if output:
            Path(output).write_text(dot)
            logger.debug("Wrote %d bytes to %s", len(dot), output)
        else:
            click.echo(dot, nl=False)
    except PciTopoError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("devices")
@inputs_argument
@click.pass_context
def list_devices(ctx: click.Context, inputs: tuple[TextIO, ...]) -> None:
    """List the PCI devices found in the input."""
    topology = _read_topology(inputs)
    names = _names(ctx)

    if ctx.obj["json"]:
        output = []
        for d in topology:
            entry: dict[str, str | int | float | bool | None] = {
                "address": str(d.address),
                "vendor_id": f"0x{d.vendor_id:04x}",
                "device_id": f"0x{d.device_id:04x}",
                "name": names.short_name(d.vendor_id, d.device_id),
                "role": str(d.role),
                "secondary_bus": d.secondary_bus,
                "link_capability": str(d.link_capability) if d.link_capability else None,
                "link_speed": d.link_status.speed_gts if d.link_status else None,
                "link_width": d.link_status.width if d.link_status else None,
                "downgraded": d.link_status.downgraded if d.link_status else None,
                "numa_node": d.numa_node,
                "slot": topology.slot_name(d.address),
            }
            output.append(entry)
        click.echo(json.dumps(output, indent=2))
        return

    if len(topology) == 0:
        click.echo("No PCI devices found.")
        return

    click.echo(f"Found {len(topology)} PCI device(s):")
    click.echo()
    for d in topology:
        link = ""
        if d.link_status is not None:
            link = f" {d.link_status.speed_gts:g}GT/s x{d.link_status.width}"
            if d.link_status.downgraded:
                link += " (downgraded)"
        click.echo(f"  {d.address} [{d.pci_id_str}] {d.role!s:<14} {d.display_name(names)}{link}")


@main.command("slots")
@inputs_argument
@click.pass_context
def list_slots(ctx: click.Context, inputs: tuple[TextIO, ...]) -> None:
    """List the System Slots found in the input."""
    topology = _read_topology(inputs)
    slots = sorted(topology.slots.items())

    if ctx.obj["json"]:
        output = [{"address": str(address), "designation": name} for address, name in slots]
        click.echo(json.dumps(output, indent=2))
        return

    if not slots:
        click.echo("No System Slots found.")
        return

    for address, name in slots:
        occupied = " [empty]" if not topology.devices_on_bus(address.domain, address.bus) else ""
        click.echo(f"  {address}: {name}{occupied}")


@main.command("info")
@click.argument("address")
@inputs_argument
@click.pass_context
def device_info(ctx: click.Context, address: str, inputs: tuple[TextIO, ...]) -> None:
    """Show what pcitopo derived for one device.

    ADDRESS is the PCI address (e.g., 0000:03:00.0).
    """
    try:
        validate_address(address)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    topology = _read_topology(inputs)
    device = topology.get(parse_address(address))
    if device is None:
        click.echo(f"Error: Device {address} not found", err=True)
        sys.exit(1)

    names = _names(ctx)
    try:
        unique_id = topology.unique_id(device)
    except PciTopoError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    downstream = []
    if device.secondary_bus is not None:
        downstream = [str(a) for a in topology.secondary_devices(device)]

    if ctx.obj["json"]:
        result: dict[str, str | int | bool | list[str] | None] = {
            "address": str(device.address),
            "vendor_id": f"0x{device.vendor_id:04x}",
            "device_id": f"0x{device.device_id:04x}",
            "name": names.short_name(device.vendor_id, device.device_id),
            "role": str(device.role),
            "unique_id": unique_id,
            "group": device.device_group_name,
            "secondary_bus": device.secondary_bus,
            "downstream": downstream,
            "link_capability": str(device.link_capability) if device.link_capability else None,
            "numa_node": device.numa_node,
            "serial_number": (
                f"{device.serial_number:016x}" if device.serial_number is not None else None
            ),
        }
        click.echo(json.dumps(result, indent=2))
        return

    vendor = names.lookup_vendor(device.vendor_id)

    click.echo(f"Device: {device.address}")
    click.echo(f"Vendor ID: 0x{device.vendor_id:04x}")
    click.echo(f"Device ID: 0x{device.device_id:04x}")
    if vendor:
        click.echo(f"Vendor: {vendor.name}")
    click.echo(f"Name: {device.display_name(names)}")
    click.echo(f"Port role: {device.role}")
    click.echo(f"Unique ID: {unique_id}")
    click.echo(f"Group: {device.device_group_name}")
    if device.numa_node is not None:
        click.echo(f"NUMA node: {device.numa_node}")
    if device.serial_number is not None:
        click.echo(f"Serial number: {device.serial_number:016x}")
    if device.link_capability is not None:
        click.echo(f"Link capability: {device.link_capability}")
    if device.link_status is not None:
        status = device.link_status
        marker = " (downgraded)" if status.downgraded else ""
        click.echo(f"Link status: {status.speed_gts:g}GT/s x{status.width}{marker}")
    if device.secondary_bus is not None:
        click.echo(f"Secondary bus: {device.secondary_bus:02x}")
        for a in downstream:
            click.echo(f"  {a}")


@main.command("names")
@click.pass_context
def list_names(ctx: click.Context) -> None:
    """List the known device short names."""
    names = _names(ctx)

    if ctx.obj["json"]:
        output = [
            {
                "vendor_id": f"0x{d.vendor_id:04x}",
                "device_id": f"0x{d.device_id:04x}",
                "name": d.name,
            }
            for d in names.devices
        ]
        click.echo(json.dumps(output, indent=2))
        return

    click.echo(f"Known devices ({len(names)} entries):")
    click.echo()
    # Group by vendor for readability
    current_vendor: int | None = None
    for d in names.devices:
        if d.vendor_id != current_vendor:
            current_vendor = d.vendor_id
            vendor = names.lookup_vendor(d.vendor_id)
            click.echo(f"  {vendor.name if vendor else f'Vendor {d.vendor_id:04x}'}:")
        click.echo(f"    {d.pci_id_str}  {d.name}")


if __name__ == "__main__":
    main()
