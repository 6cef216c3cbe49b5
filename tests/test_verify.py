from __future__ import annotations

from pathlib import Path

import pytest

from huffproc.engine.processor import compress_bytes
from huffproc.errors import BadMagic, TruncatedStream
from huffproc.verify import describe_header, verify_compressed_file


def test_verify_light_and_full(tmp_path: Path) -> None:
    p = tmp_path / "x.hf"
    data = b"HELLO 123\nHELLO 124\n" * 20
    p.write_bytes(compress_bytes(data))

    assert verify_compressed_file(p) == 0
    assert verify_compressed_file(p, full=True) == len(data)


def test_verify_full_detects_truncation(tmp_path: Path) -> None:
    p = tmp_path / "x.hf"
    p.write_bytes(compress_bytes(bytes(range(256)) * 4)[:-5])

    # header is intact: light verify passes
    verify_compressed_file(p)
    with pytest.raises(TruncatedStream):
        verify_compressed_file(p, full=True)


def test_verify_detects_bad_magic(tmp_path: Path) -> None:
    p = tmp_path / "x.hf"
    p.write_bytes(b"GCC\x06" + compress_bytes(b"abc")[4:])
    with pytest.raises(BadMagic):
        verify_compressed_file(p)


def test_describe_header_aaaa(tmp_path: Path) -> None:
    p = tmp_path / "a.hf"
    p.write_bytes(compress_bytes(b"aaaa"))

    s = describe_header(p)
    assert s.magic == 0xFACE8200
    assert s.leaves == 2
    assert s.header_bits == 32 + 21
    # 1111 + EOF "0" + 6 bits of padding
    assert s.payload_bits == 11
    assert s.codes == {97: "1", 256: "0"}
    assert s.to_json() == {
        "magic": "0xFACE8200",
        "leaves": 2,
        "header_bits": 53,
        "payload_bits": 11,
        "codes": {"97": "1", "EOF": "0"},
    }
