"""Device short-name database.

Maps (vendor_id, device_id) pairs to the terse names used in diagram node
labels. The built-in table is lazy-initialized on first access and can be
extended or overridden from a YAML file.

Example usage:
    >>> from pcitopo.namedb import lookup_short_name
    >>> lookup_short_name(0x8086, 0x1563)
    'Intel X550'
    >>> lookup_short_name(0x8086, 0xFFFF) is None
    True
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

# Re-export models for convenience
from pcitopo.namedb.models import KnownDevice, Vendor

if TYPE_CHECKING:
    from pcitopo.namedb._registry import NameDatabase

__all__ = [
    # Models
    "KnownDevice",
    "Vendor",
    # Lookup functions
    "lookup_short_name",
    "lookup_vendor",
    "get_db",
    "build_database",
]

# Lazy-initialized singleton database
_db: NameDatabase | None = None


def build_database(names_file: Path | None = None) -> NameDatabase:
    """Build a name database from the built-in tables.

    Args:
        names_file: Optional YAML file whose entries are added after the
            built-in ones, overriding any with the same PCI ID.

    Returns:
        A new NameDatabase instance.
    """
    from pcitopo.namedb._devices import KNOWN_DEVICES
    from pcitopo.namedb._registry import NameDatabase
    from pcitopo.namedb._vendors import VENDORS

    devices = list(KNOWN_DEVICES)
    if names_file is not None:
        from pcitopo.namedb.loader import load_names_file

        devices += load_names_file(names_file)

    return NameDatabase(vendors=VENDORS, devices=devices)


def get_db() -> NameDatabase:
    """Get the built-in name database singleton.

    Returns:
        The NameDatabase instance holding the built-in short names.
    """
    global _db
    if _db is None:
        _db = build_database()
    return _db


def lookup_short_name(vendor_id: int, device_id: int) -> str | None:
    """Look up the built-in short name for a vendor/device ID pair.

    Args:
        vendor_id: PCI vendor ID (e.g., 0x8086 for Intel).
        device_id: PCI device ID (e.g., 0x1563).

    Returns:
        Short name or None if not in the database.
    """
    return get_db().short_name(vendor_id, device_id)


def lookup_vendor(vendor_id: int) -> Vendor | None:
    """Look up a vendor by ID.

    Example:
        >>> lookup_vendor(0x8086).name
        'Intel'
    """
    return get_db().lookup_vendor(vendor_id)
