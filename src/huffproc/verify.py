"""Verification helpers.

We implement:
  - file verify: validate a compressed file (magic + tree; --full also decodes the payload)
  - file inspect: summarize the header (magic, leaves, code table)

Policy: light by default, --full walks the whole payload. Nothing is ever written to disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from huffproc.core.bitio import BitReader, BitWriter
from huffproc.core.huff_header import read_header, read_magic
from huffproc.core.huff_stream import decode_payload
from huffproc.core.huff_tree import PSEUDO_EOF, build_code_table, iter_leaves


@dataclass(frozen=True)
class HeaderSummary:
    magic: int
    leaves: int
    header_bits: int
    payload_bits: int
    codes: dict[int, str]

    def to_json(self) -> dict[str, Any]:
        return {
            "magic": f"0x{self.magic:08X}",
            "leaves": self.leaves,
            "header_bits": self.header_bits,
            "payload_bits": self.payload_bits,
            "codes": {("EOF" if k == PSEUDO_EOF else str(k)): v for k, v in self.codes.items()},
        }


def describe_header(input_path: Path) -> HeaderSummary:
    reader = BitReader.from_file(input_path)
    magic = read_magic(reader)
    reader.reset()
    root = read_header(reader)
    codes = build_code_table(root)
    return HeaderSummary(
        magic=magic,
        leaves=sum(1 for _ in iter_leaves(root)),
        header_bits=reader.position,
        payload_bits=len(reader) - reader.position,
        codes={k: str(codes[k]) for k in sorted(codes)},
    )


def verify_compressed_file(input_path: Path, *, full: bool = False) -> int:
    """Raise a HuffProcError if the file is not decodable.

    Returns the decoded size with full=True, else 0.
    """
    reader = BitReader.from_file(input_path)
    root = read_header(reader)
    if not full:
        return 0
    return decode_payload(reader, BitWriter(), root)
