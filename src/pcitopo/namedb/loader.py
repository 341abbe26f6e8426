"""Load short-name overrides from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from pcitopo.namedb.models import KnownDevice


def _parse_id(value: Any) -> int:
    """Parse an ID given either as a YAML integer (0x8086) or a hex string."""
    if isinstance(value, int):
        return value
    return int(str(value), 16)


def _parse_device(data: dict[str, Any]) -> KnownDevice:
    """Parse one device entry."""
    return KnownDevice(
        vendor_id=_parse_id(data["vendor_id"]),
        device_id=_parse_id(data["device_id"]),
        name=str(data["name"]),
    )


def load_names_file(path: Path) -> list[KnownDevice]:
    """Load short-name definitions from a YAML file.

    The file holds a ``devices`` list of mappings with ``vendor_id``,
    ``device_id`` and ``name`` keys. A file without a ``devices`` key
    defines no names.

    Args:
        path: Path to the YAML file.

    Returns:
        List of KnownDevice objects in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the file is not valid YAML.
        KeyError: If required fields are missing.
        ValueError: If an ID is not valid hex.
    """
    with path.open() as f:
        data = yaml.safe_load(f)

    if not data:
        return []

    return [_parse_device(entry) for entry in data.get("devices") or []]
