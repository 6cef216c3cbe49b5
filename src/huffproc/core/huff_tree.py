from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import heapq
import itertools

from loguru import logger

from .bitio import EOF, BitReader

BITS_PER_WORD = 8
ALPH_SIZE = 1 << BITS_PER_WORD  # 256
PSEUDO_EOF = ALPH_SIZE
INTERNAL = -1

# -------------------
# Strutture di base Huffman
# -------------------
@dataclass
class TreeNode:
    """
    Nodo dell'albero di codifica.

    value: 0-255 per i byte, PSEUDO_EOF per il terminatore, INTERNAL per i nodi interni.
    weight conta solo durante la costruzione: gli alberi riletti dall'header hanno peso 0
    e il decoder non lo consulta mai.
    """

    value: int
    weight: int = 0
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


@dataclass(frozen=True)
class Code:
    """Percorso radice->foglia come (bits, length), MSB = primo passo."""

    bits: int
    length: int

    def __str__(self) -> str:
        if self.length == 0:
            return ""
        return format(self.bits, f"0{self.length}b")


def count_frequencies(reader: BitReader) -> List[int]:
    """Primo pass: consuma tutta la sorgente. Il chiamante deve fare reset() prima dell'encoding."""
    counts = [0] * ALPH_SIZE
    while True:
        val = reader.read_bits(BITS_PER_WORD)
        if val == EOF:
            break
        counts[val] += 1
    return counts


def build_tree(counts: List[int]) -> TreeNode:
    """
    Min-heap su (weight, seq): seq cresce a ogni inserimento, quindi a parità di peso
    vince il nodo inserito prima (foglie in ordine di simbolo, poi PSEUDO_EOF, poi i
    nodi fusi). Il primo estratto diventa il figlio sinistro.
    """
    if len(counts) != ALPH_SIZE:
        raise ValueError(f"build_tree: attese {ALPH_SIZE} frequenze, ricevute {len(counts)}")

    heap: List[tuple[int, int, TreeNode]] = []
    counter = itertools.count()

    for sym, f in enumerate(counts):
        if f < 0:
            raise ValueError(f"build_tree: frequenza negativa per {sym}: {f}")
        if f > 0:
            heapq.heappush(heap, (f, next(counter), TreeNode(value=sym, weight=f)))

    # il terminatore c'è sempre, anche con input vuoto
    heapq.heappush(heap, (1, next(counter), TreeNode(value=PSEUDO_EOF, weight=1)))

    while len(heap) > 1:
        w1, _, left = heapq.heappop(heap)
        w2, _, right = heapq.heappop(heap)
        parent = TreeNode(value=INTERNAL, weight=w1 + w2, left=left, right=right)
        heapq.heappush(heap, (parent.weight, next(counter), parent))

    root = heap[0][2]
    logger.debug(f"huffman tree: {len(counts) - counts.count(0) + 1} leaves, weight={root.weight}")
    return root


def build_code_table(root: TreeNode) -> Dict[int, Code]:
    """Un codice per foglia; la radice-foglia (input vuoto) riceve Code(0, 0)."""
    codes: Dict[int, Code] = {}

    def dfs(node: TreeNode, bits: int, length: int) -> None:
        if node.is_leaf:
            codes[node.value] = Code(bits, length)
            return
        if node.left is not None:
            dfs(node.left, bits << 1, length + 1)
        if node.right is not None:
            dfs(node.right, (bits << 1) | 1, length + 1)

    dfs(root, 0, 0)
    return codes


def iter_leaves(root: TreeNode):
    """Foglie in pre-order (sinistra prima di destra)."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
            continue
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)
