"""PCI Express topology diagrams from lspci and dmidecode dumps."""

__version__ = "0.1.0"
