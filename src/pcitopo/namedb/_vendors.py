"""Vendors that appear in the built-in short-name table."""

from pcitopo.namedb.models import Vendor

LSI_VENDOR_ID = 0x1000
AMD_VENDOR_ID = 0x1022
MATROX_VENDOR_ID = 0x102B
NVIDIA_VENDOR_ID = 0x10DE
REALTEK_VENDOR_ID = 0x10EC
MICRON_VENDOR_ID = 0x1344
SAMSUNG_VENDOR_ID = 0x144D
BROADCOM_VENDOR_ID = 0x14E4
MELLANOX_VENDOR_ID = 0x15B3
RENESAS_VENDOR_ID = 0x1912
ASPEED_VENDOR_ID = 0x1A03
MARVELL_VENDOR_ID = 0x1B4B
INTEL_VENDOR_ID = 0x8086

VENDORS: list[Vendor] = [
    Vendor(LSI_VENDOR_ID, "Broadcom/LSI"),
    Vendor(AMD_VENDOR_ID, "AMD"),
    Vendor(MATROX_VENDOR_ID, "Matrox"),
    Vendor(NVIDIA_VENDOR_ID, "NVIDIA"),
    Vendor(REALTEK_VENDOR_ID, "Realtek"),
    Vendor(MICRON_VENDOR_ID, "Micron"),
    Vendor(SAMSUNG_VENDOR_ID, "Samsung"),
    Vendor(BROADCOM_VENDOR_ID, "Broadcom"),
    # Mellanox, now NVIDIA networking
    Vendor(MELLANOX_VENDOR_ID, "Mellanox"),
    Vendor(RENESAS_VENDOR_ID, "Renesas"),
    Vendor(ASPEED_VENDOR_ID, "ASPEED"),
    Vendor(MARVELL_VENDOR_ID, "Marvell"),
    Vendor(INTEL_VENDOR_ID, "Intel"),
]
