from __future__ import annotations

from loguru import logger

from huffproc.errors import BadMagic, CorruptPayload, TruncatedStream, UnsupportedHeader

from .bitio import EOF, BitReader, BitWriter
from .huff_tree import ALPH_SIZE, INTERNAL, PSEUDO_EOF, TreeNode

BITS_PER_INT = 32
BITS_PER_LEAF = 9  # 0..255 + PSEUDO_EOF (256)

HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1
HUFF_COUNTS = HUFF_NUMBER | 2

# Magic accettati in lettura come header ad albero.
TREE_MAGICS = frozenset({HUFF_NUMBER, HUFF_TREE})

# Con al più ALPH_SIZE + 1 foglie un albero pieno non supera questa profondità.
MAX_TREE_DEPTH = ALPH_SIZE


# -------------------
# Write
# -------------------
def write_header(writer: BitWriter, root: TreeNode, magic: int = HUFF_NUMBER) -> None:
    """
    Layout (bit-exact):
      magic(32) + albero pre-order:
        0 -> nodo interno, seguito da sinistro poi destro
        1 -> foglia, seguita dal valore su 9 bit
    Nessun campo lunghezza: la grammatica ricorsiva è auto-terminante.
    """
    writer.write_bits(BITS_PER_INT, magic)
    start = len(writer)
    _write_tree(writer, root)
    logger.debug(f"header: magic=0x{magic:08X} tree_bits={len(writer) - start}")


def _write_tree(writer: BitWriter, node: TreeNode) -> None:
    if node.is_leaf:
        writer.write_bits(1, 1)
        writer.write_bits(BITS_PER_LEAF, node.value)
        return
    if node.left is None or node.right is None:
        raise ValueError("write_header: nodo interno con un solo figlio")
    writer.write_bits(1, 0)
    _write_tree(writer, node.left)
    _write_tree(writer, node.right)


# -------------------
# Read
# -------------------
def read_magic(reader: BitReader) -> int:
    magic = reader.read_bits(BITS_PER_INT)
    if magic == EOF:
        raise BadMagic("header: stream più corto del magic (32 bit)")
    if magic == HUFF_COUNTS:
        raise UnsupportedHeader("header: formato a conteggi (0xFACE8202) non implementato")
    if magic not in TREE_MAGICS:
        raise BadMagic(f"header: magic non valido: 0x{magic:08X}")
    return magic


def read_header(reader: BitReader) -> TreeNode:
    """Valida il magic e ricostruisce l'albero (pesi a 0: il decoder non li usa)."""
    read_magic(reader)
    root = _read_tree(reader, 0)

    eof_leaves = 0
    seen: set[int] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)
            continue
        if node.value in seen:
            raise CorruptPayload(f"header: foglia duplicata: {node.value}")
        seen.add(node.value)
        if node.value == PSEUDO_EOF:
            eof_leaves += 1
    if eof_leaves != 1:
        raise CorruptPayload("header: albero senza foglia di fine stream")

    logger.debug(f"header: {len(seen)} leaves")
    return root


def _read_tree(reader: BitReader, depth: int) -> TreeNode:
    if depth > MAX_TREE_DEPTH:
        raise CorruptPayload(f"header: albero più profondo di {MAX_TREE_DEPTH}")
    bit = reader.read_bits(1)
    if bit == EOF:
        raise TruncatedStream("header: albero troncato")
    if bit == 1:
        value = reader.read_bits(BITS_PER_LEAF)
        if value == EOF:
            raise TruncatedStream("header: valore foglia troncato")
        if value > PSEUDO_EOF:
            raise CorruptPayload(f"header: valore foglia fuori range: {value}")
        return TreeNode(value=value)
    left = _read_tree(reader, depth + 1)
    right = _read_tree(reader, depth + 1)
    return TreeNode(value=INTERNAL, left=left, right=right)
