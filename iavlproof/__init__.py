"""Merkle proof primitives for IAVL trees: proof nodes, ICS-23 style operations, merged iteration, options."""

__version__ = "0.1.0"
__all__ = ["options", "version", "proof", "ics23", "unsaved_iterator"]