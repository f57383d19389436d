# iavlproof

Building blocks for Merkle proofs over IAVL (immutable AVL) trees. It uses
only the standard library.

## Modules

- `iavlproof.proof`
  - `ProofInnerNode(height, size, version, left, right)` is an inner node on a
    proof path. At most one of `left` and `right` is set. `hash(child_hash)`
    returns the SHA-256 hash of the node, with the missing side filled in by
    `child_hash`. It raises `ProofError` if both sides are set.
  - `ProofLeafNode(key, value_hash, version)` is a leaf on a proof path.
    `hash()` returns its SHA-256 hash.
  - `PathToLeaf` holds the inner nodes from the root down to a leaf.
    `index()` returns the leaf's position among all leaves, or `-1` if the
    path is invalid.
  - `encode_varint(value)` encodes a signed 64-bit integer as a zig-zag
    varint. It raises `OverflowError` when the value is out of range.
    `encode_bytes(data)` prefixes data with its length as a varint.
- `iavlproof.ics23`
  - The `HashOp` and `LengthOp` enums.
  - `LeafOp.apply(key, value)` and `InnerOp.apply(child)` build a hash.
  - `ExistenceProof(key, value, leaf, path).calculate()` recomputes the root
    hash that a proof commits to.
  - `convert_leaf_op(version)` and `convert_inner_ops(path)` turn a leaf
    version and a `PathToLeaf` into the matching operations. The operations
    run from the leaf up to the root.
  - Failures raise `ProofError`.
- `iavlproof.unsaved_iterator`
  - `UnsavedFastIterator(start, end, ascending, disk_iterator, additions, removals)`
    merges sorted saved `(key, value)` pairs with unsaved changes. Each value
    in `additions` replaces the saved copy of its key. Keys in `removals` are
    skipped when they come from the saved pairs.
  - Only keys in `[start, end)` are yielded. A bound of `None` is open.
  - It is an iterator and a context manager. `close()` also closes the
    saved-pairs iterator if that iterator has a `close` method.
- `iavlproof.options`
  - `Options` has the fields `sync`, `initial_version`, `stat` and
    `flush_threshold`. The default `flush_threshold` is 100000.
  - `Options.apply(*options)` applies option functions in order. The option
    functions come from `sync_option`, `initial_version_option`,
    `stat_option` and `flush_threshold_option`.
  - `default_options()` returns the defaults.
  - `Statistics` keeps thread-safe cache hit and miss counters: `cache_hit`,
    `cache_miss`, `fast_cache_hit` and `fast_cache_miss`. The `inc_*` methods
    add one to a counter and `reset()` sets all counters to zero.
- `iavlproof.version`
  - `get_version_info()` returns a `VersionInfo` that holds the build fields
    and the Python runtime.

## Example

A root computed by hashing proof nodes matches the root computed from the
converted operations:

```python
import hashlib

from iavlproof.proof import PathToLeaf, ProofInnerNode, ProofLeafNode
from iavlproof.ics23 import ExistenceProof, convert_inner_ops, convert_leaf_op

key, value = b"k", b"v"
leaf = ProofLeafNode(key=key, value_hash=hashlib.sha256(value).digest(), version=1)
sibling = hashlib.sha256(b"sibling").digest()
path = PathToLeaf([ProofInnerNode(height=1, size=2, version=1, right=sibling)])

root = path[0].hash(leaf.hash())
proof = ExistenceProof(key, value, convert_leaf_op(1), convert_inner_ops(path))
assert proof.calculate() == root
```

Merging unsaved state with saved state:

```python
from iavlproof.unsaved_iterator import UnsavedFastIterator

disk = iter([(b"a", b"1"), (b"c", b"3")])
with UnsavedFastIterator(None, None, True, disk, {b"b": b"2"}, {b"c"}) as it:
    print(list(it))  # [(b'a', b'1'), (b'b', b'2')]
```

## What it does not do

There is no tree here. The package does not store nodes, keep versions,
build a proof path from a tree, or verify membership against a tree. You
supply the path, the saved pairs and the pending changes. The package also
has no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```