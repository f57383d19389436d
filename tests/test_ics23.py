import hashlib

import pytest

from iavlproof.ics23 import (
    ExistenceProof,
    HashOp,
    InnerOp,
    LeafOp,
    LengthOp,
    convert_inner_ops,
    convert_leaf_op,
)
from iavlproof.proof import PathToLeaf, ProofError, ProofInnerNode, ProofLeafNode

SIBLING_A = hashlib.sha256(b"sibling a").digest()
SIBLING_B = hashlib.sha256(b"sibling b").digest()


def test_leaf_op_prefix_for_version_one():
    op = convert_leaf_op(1)
    assert op.prefix == b"\x00\x02\x02"
    assert op.hash == HashOp.SHA256
    assert op.prehash_value == HashOp.SHA256
    assert op.prehash_key == HashOp.NO_HASH
    assert op.length == LengthOp.VAR_PROTO


@pytest.mark.parametrize("version", [0, 1, 100, 127, 128, 1 << 29, -1, -100, -127, -128, -(1 << 29)])
def test_leaf_op_matches_proof_leaf_node_hash(version):
    key, value = b"key", b"value"
    expected = ProofLeafNode(key, hashlib.sha256(value).digest(), version).hash()
    assert convert_leaf_op(version).apply(key, value) == expected


def test_inner_op_with_left_sibling_matches_proof_inner_node():
    node = ProofInnerNode(height=2, size=4, version=3, left=SIBLING_A)
    (op,) = convert_inner_ops([node])
    assert op.suffix == b""
    assert op.apply(SIBLING_B) == node.hash(SIBLING_B)


def test_inner_op_with_right_sibling_matches_proof_inner_node():
    node = ProofInnerNode(height=1, size=2, version=7, right=SIBLING_B)
    (op,) = convert_inner_ops([node])
    assert op.suffix == b"\x20" + SIBLING_B
    assert op.apply(SIBLING_A) == node.hash(SIBLING_A)


def test_inner_ops_run_from_leaf_to_root():
    root = ProofInnerNode(height=2, size=3, version=1, left=SIBLING_A)
    lower = ProofInnerNode(height=1, size=2, version=1, right=SIBLING_B)
    ops = convert_inner_ops(PathToLeaf([root, lower]))
    assert len(ops) == 2
    assert ops[0] == convert_inner_ops([lower])[0]
    assert ops[1] == convert_inner_ops([root])[0]


def test_existence_proof_calculates_root():
    key, value, version = b"k", b"v", 5
    root = ProofInnerNode(height=2, size=3, version=version, left=SIBLING_A)
    lower = ProofInnerNode(height=1, size=2, version=version, right=SIBLING_B)
    leaf_hash = ProofLeafNode(key, hashlib.sha256(value).digest(), version).hash()
    expected_root = root.hash(lower.hash(leaf_hash))

    proof = ExistenceProof(
        key=key,
        value=value,
        leaf=convert_leaf_op(version),
        path=convert_inner_ops(PathToLeaf([root, lower])),
    )
    assert proof.calculate() == expected_root


def test_existence_proof_without_path_is_leaf_hash():
    proof = ExistenceProof(key=b"a", value=b"b", leaf=convert_leaf_op(2))
    assert proof.calculate() == convert_leaf_op(2).apply(b"a", b"b")


def test_existence_proof_needs_leaf():
    with pytest.raises(ProofError):
        ExistenceProof(key=b"a", value=b"b", leaf=None).calculate()


def test_leaf_op_needs_key_and_value():
    op = convert_leaf_op(1)
    with pytest.raises(ProofError):
        op.apply(b"", b"v")
    with pytest.raises(ProofError):
        op.apply(b"k", b"")


def test_inner_op_needs_child():
    with pytest.raises(ProofError):
        InnerOp(hash=HashOp.SHA256).apply(b"")


def test_require_32_bytes_rejects_short_data():
    op = LeafOp(hash=HashOp.SHA256, length=LengthOp.REQUIRE_32_BYTES)
    with pytest.raises(ProofError):
        op.apply(b"short", b"x" * 32)


def test_unsupported_hash_op_raises():
    with pytest.raises(ProofError):
        InnerOp(hash=HashOp.KECCAK).apply(b"child")


def test_no_hash_inner_op_concatenates():
    op = InnerOp(hash=HashOp.NO_HASH, prefix=b"<", suffix=b">")
    assert op.apply(b"mid") == b"<mid>"