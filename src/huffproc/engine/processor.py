"""Compress/decompress orchestration.

compress:   count -> tree -> code table -> header -> reset -> payload
decompress: header -> payload

Every call owns its tree and code table; nothing survives between calls.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from huffproc.config import HeaderMode, ProcessorConfig
from huffproc.core.bitio import BitReader, BitWriter
from huffproc.core.huff_header import HUFF_NUMBER, read_header, write_header
from huffproc.core.huff_stream import decode_payload, encode_payload
from huffproc.core.huff_tree import build_code_table, build_tree, count_frequencies
from huffproc.errors import UnsupportedHeader


@dataclass
class HuffProcessor:
    config: ProcessorConfig = field(default_factory=ProcessorConfig)

    def compress(self, reader: BitReader, writer: BitWriter) -> int:
        """Two passes over reader; returns the number of input bytes encoded."""
        logger.info(f"header mode: {self.config.header.value}")
        if self.config.header is not HeaderMode.TREE:
            raise UnsupportedHeader(
                f"compress: header mode {self.config.header.value!r} non implementato"
            )

        counts = count_frequencies(reader)
        root = build_tree(counts)
        codes = build_code_table(root)
        write_header(writer, root, magic=HUFF_NUMBER)
        reader.reset()
        return encode_payload(reader, writer, codes)

    def decompress(self, reader: BitReader, writer: BitWriter) -> int:
        """Returns the number of bytes written; on error the writer content is garbage."""
        root = read_header(reader)
        return decode_payload(reader, writer, root)


def compress_bytes(data: bytes, config: ProcessorConfig | None = None) -> bytes:
    writer = BitWriter()
    HuffProcessor(config or ProcessorConfig()).compress(BitReader(data), writer)
    return writer.getvalue()


def decompress_bytes(comp: bytes) -> bytes:
    writer = BitWriter()
    HuffProcessor().decompress(BitReader(comp), writer)
    return writer.getvalue()


def _write_atomic(output_path: Path, blob: bytes) -> None:
    """Write blob next to output_path and rename: a failure leaves nothing behind."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{output_path.name}.", dir=str(output_path.parent))
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(blob)
        os.replace(tmp, output_path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def compress_file(
    input_path: str | Path, output_path: str | Path, config: ProcessorConfig | None = None
) -> tuple[int, int]:
    """Returns (original size, compressed size) in bytes."""
    input_path = Path(input_path)
    output_path = Path(output_path)

    data = input_path.read_bytes()
    blob = compress_bytes(data, config)
    _write_atomic(output_path, blob)

    ratio = (len(blob) / len(data)) if data else 0.0
    logger.info(
        f"compressed {input_path} ({len(data)} byte) -> {output_path} ({len(blob)} byte), "
        f"ratio={ratio:.3f}"
    )
    return len(data), len(blob)


def decompress_file(input_path: str | Path, output_path: str | Path) -> int:
    """Decode fully in memory first: the output file exists only if decoding succeeded."""
    input_path = Path(input_path)
    output_path = Path(output_path)

    out = decompress_bytes(input_path.read_bytes())
    _write_atomic(output_path, out)

    logger.info(f"decompressed {input_path} -> {output_path} ({len(out)} byte)")
    return len(out)
