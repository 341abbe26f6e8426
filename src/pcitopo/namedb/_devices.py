"""Built-in short names for common server and workstation devices."""

from pcitopo.namedb._vendors import (
    AMD_VENDOR_ID,
    ASPEED_VENDOR_ID,
    BROADCOM_VENDOR_ID,
    INTEL_VENDOR_ID,
    LSI_VENDOR_ID,
    MARVELL_VENDOR_ID,
    MATROX_VENDOR_ID,
    MELLANOX_VENDOR_ID,
    MICRON_VENDOR_ID,
    NVIDIA_VENDOR_ID,
    REALTEK_VENDOR_ID,
    RENESAS_VENDOR_ID,
    SAMSUNG_VENDOR_ID,
)
from pcitopo.namedb.models import KnownDevice

# =============================================================================
# Storage controllers and switch management functions
# =============================================================================

STORAGE_DEVICES: list[KnownDevice] = [
    KnownDevice(LSI_VENDOR_ID, 0x005D, "MegaRAID 3108"),
    KnownDevice(LSI_VENDOR_ID, 0x00B2, "switch mgmt"),
    # Broadcom switch placeholder endpoints
    KnownDevice(LSI_VENDOR_ID, 0x02B2, "placeholder"),
    KnownDevice(LSI_VENDOR_ID, 0xC010, "placeholder"),
    KnownDevice(MICRON_VENDOR_ID, 0x51C3, "Micron NVMe"),
    KnownDevice(SAMSUNG_VENDOR_ID, 0xA808, "Samsung NVMe"),
    KnownDevice(SAMSUNG_VENDOR_ID, 0xA80A, "Samsung NVMe"),
    KnownDevice(SAMSUNG_VENDOR_ID, 0xA80C, "Samsung NVMe"),
    KnownDevice(SAMSUNG_VENDOR_ID, 0xA824, "Samsung NVMe"),
    KnownDevice(SAMSUNG_VENDOR_ID, 0xA825, "Samsung NVMe"),
    KnownDevice(MARVELL_VENDOR_ID, 0x2241, "Marvell NVMe"),
    KnownDevice(MARVELL_VENDOR_ID, 0x9485, "Marvell SAS/SATA"),
]

# =============================================================================
# Chipset / SoC integrated functions
# =============================================================================

PLATFORM_DEVICES: list[KnownDevice] = [
    KnownDevice(AMD_VENDOR_ID, 0x1485, "AMD SPP"),
    KnownDevice(AMD_VENDOR_ID, 0x1486, "AMD PSPCPP"),
    KnownDevice(AMD_VENDOR_ID, 0x1487, "AMD HD Audio"),
    KnownDevice(AMD_VENDOR_ID, 0x148A, "dummy function"),
    KnownDevice(AMD_VENDOR_ID, 0x148C, "AMD XHCI"),
    KnownDevice(AMD_VENDOR_ID, 0x1498, "AMD PTDMA"),
    KnownDevice(AMD_VENDOR_ID, 0x149C, "AMD XHCI"),
    KnownDevice(AMD_VENDOR_ID, 0x7901, "AMD SATA"),
    KnownDevice(RENESAS_VENDOR_ID, 0x0014, "Renesas USB3"),
    KnownDevice(ASPEED_VENDOR_ID, 0x2000, "ASPEED VGA"),
    KnownDevice(ASPEED_VENDOR_ID, 0x2402, "ASPEED IPMI"),
    KnownDevice(MATROX_VENDOR_ID, 0x0522, "Matrox VGA"),
    KnownDevice(MATROX_VENDOR_ID, 0x0534, "Matrox VGA"),
    KnownDevice(MATROX_VENDOR_ID, 0x0536, "Matrox VGA"),
]

# =============================================================================
# GPUs and accelerators
# =============================================================================

GPU_DEVICES: list[KnownDevice] = [
    KnownDevice(NVIDIA_VENDOR_ID, 0x0E0F, "NVIDIA GK208 HDMP/DP Audio"),
    KnownDevice(NVIDIA_VENDOR_ID, 0x128B, "NVIDIA GT 710"),
    KnownDevice(NVIDIA_VENDOR_ID, 0x1AF1, "A100 NVSwitch"),
    KnownDevice(NVIDIA_VENDOR_ID, 0x20B0, "A100 SXM4 40GB"),
    KnownDevice(NVIDIA_VENDOR_ID, 0x22A3, "H100 NVSwitch"),
    KnownDevice(NVIDIA_VENDOR_ID, 0x2330, "H100 SXM5 80GB"),
    KnownDevice(NVIDIA_VENDOR_ID, 0x2335, "H200 SXM5 141GB"),
    KnownDevice(NVIDIA_VENDOR_ID, 0x2901, "B200 SXM6 192GB"),
]

# =============================================================================
# Network adapters
# =============================================================================

NETWORK_DEVICES: list[KnownDevice] = [
    KnownDevice(REALTEK_VENDOR_ID, 0x8125, "Realtek RTL8125 2.5GbE"),
    KnownDevice(BROADCOM_VENDOR_ID, 0x165F, "Broadcom BCM5720"),
    KnownDevice(MELLANOX_VENDOR_ID, 0x1019, "MT28800 ConnectX-5 Ex ETH"),
    KnownDevice(MELLANOX_VENDOR_ID, 0x101B, "MT28908 ConnectX-6 IB"),
    KnownDevice(MELLANOX_VENDOR_ID, 0x101D, "MT2892 ConnectX-6 Dx ETH"),
    KnownDevice(MELLANOX_VENDOR_ID, 0x101E, "ConnectX-7 IB VF"),
    KnownDevice(MELLANOX_VENDOR_ID, 0x1021, "MT2910 ConnectX-7 IB"),
    KnownDevice(MELLANOX_VENDOR_ID, 0xA2DC, "MT43244 BlueField-3"),
    KnownDevice(MELLANOX_VENDOR_ID, 0xC2D5, "MT43244 BlueField-3 mgmt"),
    KnownDevice(INTEL_VENDOR_ID, 0x1563, "Intel X550"),
    KnownDevice(INTEL_VENDOR_ID, 0x15F3, "Intel I225-V"),
    KnownDevice(INTEL_VENDOR_ID, 0x2723, "Intel Wi-Fi 6 AX200"),
]

KNOWN_DEVICES: list[KnownDevice] = (
    STORAGE_DEVICES + PLATFORM_DEVICES + GPU_DEVICES + NETWORK_DEVICES
)
