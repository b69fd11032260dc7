"""Tools, a shell parser, printf, a heap, ELF headers and an Sv39 page-table model."""

__version__ = "0.1.0"