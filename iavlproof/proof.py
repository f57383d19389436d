"""Proof nodes, their hashing and the inner path from root to a leaf."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_PATH_DISPLAY_LIMIT = 20


class ProofError(Exception):
    """Raised when a proof node cannot be hashed or validated."""


def _encode_uvarint(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def encode_varint(value: int) -> bytes:
    """Encode a signed 64-bit integer as a zig-zag varint."""
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise OverflowError(f"{value} does not fit in a signed 64-bit integer")
    return _encode_uvarint((value << 1) ^ (value >> 63))


def encode_bytes(data: bytes) -> bytes:
    """Encode bytes with an unsigned varint length prefix."""
    data = bytes(data)
    return _encode_uvarint(len(data)) + data


def _hex(data: Optional[bytes]) -> str:
    return (data or b"").hex().upper()


@dataclass(frozen=True)
class ProofInnerNode:
    """An inner node on a proof path.

    At most one of left and right is set; the other side is the child hash
    supplied when hashing.
    """

    height: int
    size: int
    version: int
    left: Optional[bytes] = None
    right: Optional[bytes] = None

    def hash(self, child_hash: bytes) -> bytes:
        """Return the SHA-256 hash of this node given the hash of the missing child."""
        if self.left and self.right:
            raise ProofError("both left and right child hashes are set")
        buf = encode_varint(self.height) + encode_varint(self.size) + encode_varint(self.version)
        if not self.left:
            buf += encode_bytes(child_hash) + encode_bytes(self.right or b"")
        else:
            buf += encode_bytes(self.left) + encode_bytes(child_hash)
        return hashlib.sha256(buf).digest()

    def _indented(self, indent: str) -> str:
        return (
            "ProofInnerNode{\n"
            f"{indent}  Height:  {self.height}\n"
            f"{indent}  Size:    {self.size}\n"
            f"{indent}  Version: {self.version}\n"
            f"{indent}  Left:    {_hex(self.left)}\n"
            f"{indent}  Right:   {_hex(self.right)}\n"
            f"{indent}}}"
        )

    def __str__(self) -> str:
        return self._indented("")


@dataclass(frozen=True)
class ProofLeafNode:
    """A leaf node on a proof path: a key, the hash of its value and a version."""

    key: bytes
    value_hash: bytes
    version: int

    def hash(self) -> bytes:
        """Return the SHA-256 hash of the leaf."""
        buf = (
            encode_varint(0)
            + encode_varint(1)
            + encode_varint(self.version)
            + encode_bytes(self.key)
            + encode_bytes(self.value_hash)
        )
        return hashlib.sha256(buf).digest()

    def _indented(self, indent: str) -> str:
        return (
            "ProofLeafNode{\n"
            f"{indent}  Key:       {_hex(self.key)}\n"
            f"{indent}  ValueHash: {_hex(self.value_hash)}\n"
            f"{indent}  Version:   {self.version}\n"
            f"{indent}}}"
        )

    def __str__(self) -> str:
        return self._indented("")


@dataclass
class PathToLeaf:
    """Inner nodes from the root down to a leaf, the root first."""

    nodes: List[ProofInnerNode] = field(default_factory=list)

    def append(self, node: ProofInnerNode) -> None:
        self.nodes.append(node)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ProofInnerNode]:
        return iter(self.nodes)

    def __getitem__(self, item):
        return self.nodes[item]

    def index(self) -> int:
        """Return the position of the leaf among all leaves, or -1 if the path is invalid."""
        idx = 0
        successors = [*self.nodes[1:], None]
        for node, below in zip(self.nodes, successors):
            if node.left is None:
                continue
            if node.right is not None:
                return -1
            idx += node.size - (below.size if below is not None else 1)
        return idx

    def _indented(self, indent: str) -> str:
        if not self.nodes:
            return "empty-PathToLeaf"
        parts = []
        for i, node in enumerate(self.nodes):
            if i == _PATH_DISPLAY_LIMIT:
                parts.append(f"... ({len(self.nodes)} total)")
                break
            parts.append(f"{i}:{node._indented(indent + '  ')}")
        sep = "\n" + indent + "  "
        return f"PathToLeaf{{\n{indent}  {sep.join(parts)}\n{indent}}}"

    def __str__(self) -> str:
        return self._indented("")