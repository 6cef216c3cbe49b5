from __future__ import annotations

from pathlib import Path

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

# read_bits() sentinel: not a valid value for any width.
EOF = -1


class BitReader:
    """
    Sorgente di bit MSB-first sopra un buffer di byte.

    read_bits(n) ritorna il valore dei prossimi n bit, oppure EOF se ne restano meno di n
    (in quel caso la sorgente risulta esaurita). reset() torna all'inizio: serve al
    compressore tra il pass di conteggio e quello di encoding.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._bits = bitarray(endian="big")
        self._data = bytes(data)
        self._bits.frombytes(self._data)
        self._pos = 0

    @classmethod
    def from_file(cls, path: str | Path) -> "BitReader":
        return cls(Path(path).read_bytes())

    def __len__(self) -> int:
        return len(self._bits)

    @property
    def position(self) -> int:
        return self._pos

    def read_bits(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"read_bits: larghezza non valida: {n}")
        end = self._pos + n
        if end > len(self._bits):
            self._pos = len(self._bits)
            return EOF
        if n == 1:
            value = self._bits[self._pos]
        elif n == 8 and not self._pos & 7:
            value = self._data[self._pos >> 3]
        else:
            value = ba2int(self._bits[self._pos:end])
        self._pos = end
        return value

    def reset(self) -> None:
        self._pos = 0


class BitWriter:
    """Sink di bit MSB-first; getvalue() completa l'ultimo byte con zeri."""

    def __init__(self) -> None:
        self._bits = bitarray(endian="big")

    def __len__(self) -> int:
        return len(self._bits)

    def write_bits(self, n: int, value: int) -> None:
        # only the low n bits of value are written
        if n <= 0:
            raise ValueError(f"write_bits: larghezza non valida: {n}")
        self._bits.extend(int2ba(int(value) & ((1 << n) - 1), length=n, endian="big"))

    def getvalue(self) -> bytes:
        return self._bits.tobytes()
