from __future__ import annotations

import subprocess
import sys

from loguru import logger

from huffproc.engine.processor import compress_bytes
from huffproc.log import configure_logging


def test_library_is_silent_without_configure() -> None:
    code = (
        "from huffproc.engine.processor import compress_bytes, decompress_bytes\n"
        "assert decompress_bytes(compress_bytes(b'abracadabra')) == b'abracadabra'\n"
    )
    r = subprocess.run([sys.executable, "-c", code], text=True, capture_output=True)
    assert r.returncode == 0, r.stderr
    assert r.stderr == ""


def test_configure_logging_enables_package_records() -> None:
    records: list[str] = []
    configure_logging(verbose=True)
    sink_id = logger.add(lambda m: records.append(m.record["message"]), level="DEBUG")
    try:
        compress_bytes(b"aaaa")
    finally:
        logger.remove(sink_id)
        logger.disable("huffproc")
    assert "header mode: tree" in records
    assert any(m.startswith("payload: symbols=4") for m in records)
