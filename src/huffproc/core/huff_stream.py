from __future__ import annotations

from typing import Dict

from loguru import logger

from huffproc.errors import CorruptPayload, TruncatedStream

from .bitio import EOF, BitReader, BitWriter
from .huff_tree import BITS_PER_WORD, PSEUDO_EOF, Code, TreeNode


def encode_payload(reader: BitReader, writer: BitWriter, codes: Dict[int, Code]) -> int:
    """
    Secondo pass: un codice per byte letto, poi il codice di PSEUDO_EOF come terminatore.
    I codici di lunghezza 0 (albero ridotto alla sola foglia PSEUDO_EOF) non scrivono bit.
    Ritorna il numero di simboli codificati, terminatore escluso.
    """
    n = 0
    start = len(writer)
    while True:
        val = reader.read_bits(BITS_PER_WORD)
        if val == EOF:
            break
        _write_code(writer, codes[val])
        n += 1
    _write_code(writer, codes[PSEUDO_EOF])
    logger.debug(f"payload: symbols={n} bits={len(writer) - start}")
    return n


def _write_code(writer: BitWriter, code: Code) -> None:
    if code.length == 0:
        return
    writer.write_bits(code.length, code.bits)


def decode_payload(reader: BitReader, writer: BitWriter, root: TreeNode) -> int:
    """
    Cammina l'albero un bit alla volta (0 = sinistra, 1 = destra) fino a PSEUDO_EOF.
    Ogni passo controlla l'esaurimento della sorgente e l'esistenza del figlio.
    Ritorna il numero di byte emessi.
    """
    if root.is_leaf:
        # albero degenere: radice-foglia, nessun bit di payload
        if root.value != PSEUDO_EOF:
            raise CorruptPayload("payload: albero a foglia singola senza fine stream")
        return 0

    n = 0
    current = root
    while True:
        bit = reader.read_bits(1)
        if bit == EOF:
            raise TruncatedStream(f"payload troncato dopo {n} byte (manca il fine stream)")
        nxt = current.left if bit == 0 else current.right
        if nxt is None:
            raise CorruptPayload("payload: nodo interno senza figlio")
        current = nxt
        if not current.is_leaf:
            continue
        if current.value == PSEUDO_EOF:
            break
        writer.write_bits(BITS_PER_WORD, current.value)
        n += 1
        current = root

    logger.debug(f"payload: decoded {n} bytes")
    return n
