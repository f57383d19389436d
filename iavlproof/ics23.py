"""Commitment proof operations for trees hashed the IAVL way.

Leaf and inner operations describe how a hash is built from a key/value pair
and from a child hash, so that a root can be recomputed from an existence
proof without access to the tree.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional

from .proof import PathToLeaf, ProofError, ProofInnerNode, encode_bytes, encode_varint

# Length prefix written before each 32-byte SHA-256 child hash.
_HASH_LENGTH_PREFIX = bytes([0x20])


class HashOp(IntEnum):
    """Hash functions a proof operation may apply."""

    NO_HASH = 0
    SHA256 = 1
    SHA512 = 2
    KECCAK = 3
    RIPEMD160 = 4
    BITCOIN = 5
    SHA512_256 = 6


class LengthOp(IntEnum):
    """Ways of prefixing data with its length."""

    NO_PREFIX = 0
    VAR_PROTO = 1
    VAR_RLP = 2
    FIXED32_BIG = 3
    FIXED32_LITTLE = 4
    FIXED64_BIG = 5
    FIXED64_LITTLE = 6
    REQUIRE_32_BYTES = 7
    REQUIRE_64_BYTES = 8


def _named_hash(name: str, data: bytes) -> bytes:
    try:
        return hashlib.new(name, data).digest()
    except ValueError as exc:
        raise ProofError(f"hash function {name} is not available") from exc


def _do_hash(op: HashOp, data: bytes) -> bytes:
    if op == HashOp.NO_HASH:
        return data
    if op == HashOp.SHA256:
        return hashlib.sha256(data).digest()
    if op == HashOp.SHA512:
        return hashlib.sha512(data).digest()
    if op == HashOp.SHA512_256:
        return _named_hash("sha512_256", data)
    if op == HashOp.RIPEMD160:
        return _named_hash("ripemd160", data)
    if op == HashOp.BITCOIN:
        return _named_hash("ripemd160", hashlib.sha256(data).digest())
    raise ProofError(f"unsupported hashop: {HashOp(op).name}")


def _do_length(op: LengthOp, data: bytes) -> bytes:
    size = len(data)
    if op == LengthOp.NO_PREFIX:
        return data
    if op == LengthOp.VAR_PROTO:
        return encode_bytes(data)
    if op == LengthOp.FIXED32_BIG:
        return size.to_bytes(4, "big") + data
    if op == LengthOp.FIXED32_LITTLE:
        return size.to_bytes(4, "little") + data
    if op == LengthOp.FIXED64_BIG:
        return size.to_bytes(8, "big") + data
    if op == LengthOp.FIXED64_LITTLE:
        return size.to_bytes(8, "little") + data
    if op == LengthOp.REQUIRE_32_BYTES:
        if size != 32:
            raise ProofError(f"data was not 32 bytes, but {size}")
        return data
    if op == LengthOp.REQUIRE_64_BYTES:
        if size != 64:
            raise ProofError(f"data was not 64 bytes, but {size}")
        return data
    raise ProofError(f"unsupported lengthop: {LengthOp(op).name}")


@dataclass(frozen=True)
class LeafOp:
    """How a leaf hash is built from a key and a value."""

    hash: HashOp = HashOp.NO_HASH
    prehash_key: HashOp = HashOp.NO_HASH
    prehash_value: HashOp = HashOp.NO_HASH
    length: LengthOp = LengthOp.NO_PREFIX
    prefix: bytes = b""

    def apply(self, key: bytes, value: bytes) -> bytes:
        """Return the leaf hash of a key/value pair."""
        if not key:
            raise ProofError("leaf op needs key")
        if not value:
            raise ProofError("leaf op needs value")
        pkey = _do_length(self.length, _do_hash(self.prehash_key, bytes(key)))
        pvalue = _do_length(self.length, _do_hash(self.prehash_value, bytes(value)))
        return _do_hash(self.hash, self.prefix + pkey + pvalue)


@dataclass(frozen=True)
class InnerOp:
    """How a parent hash is built from one child hash and the sibling data around it."""

    hash: HashOp = HashOp.NO_HASH
    prefix: bytes = b""
    suffix: bytes = b""

    def apply(self, child: bytes) -> bytes:
        """Return the parent hash given the hash of the child on the path."""
        if not child:
            raise ProofError("inner op needs child value")
        return _do_hash(self.hash, self.prefix + bytes(child) + self.suffix)


@dataclass(frozen=True)
class ExistenceProof:
    """A key/value pair with the leaf and inner operations leading up to the root."""

    key: bytes
    value: bytes
    leaf: Optional[LeafOp]
    path: List[InnerOp] = field(default_factory=list)

    def calculate(self) -> bytes:
        """Return the root hash this proof commits to."""
        if self.leaf is None:
            raise ProofError("existence proof needs defined LeafOp")
        result = self.leaf.apply(self.key, self.value)
        for step in self.path:
            result = step.apply(result)
        return result


def convert_leaf_op(version: int) -> LeafOp:
    """Return the leaf operation of a leaf saved at the given version."""
    prefix = encode_varint(0) + encode_varint(1) + encode_varint(version)
    return LeafOp(
        hash=HashOp.SHA256,
        prehash_value=HashOp.SHA256,
        length=LengthOp.VAR_PROTO,
        prefix=prefix,
    )


def _convert_inner_node(node: ProofInnerNode) -> InnerOp:
    prefix = encode_varint(node.height) + encode_varint(node.size) + encode_varint(node.version)
    suffix = b""
    if node.left:
        prefix += _HASH_LENGTH_PREFIX + bytes(node.left) + _HASH_LENGTH_PREFIX
    else:
        prefix += _HASH_LENGTH_PREFIX
        suffix = _HASH_LENGTH_PREFIX + bytes(node.right or b"")
    return InnerOp(hash=HashOp.SHA256, prefix=prefix, suffix=suffix)


def convert_inner_ops(path: PathToLeaf | Iterable[ProofInnerNode]) -> List[InnerOp]:
    """Return inner operations from the leaf up to the root.

    The path runs from the root down, so it is walked in reverse.
    """
    return [_convert_inner_node(node) for node in reversed(list(path))]