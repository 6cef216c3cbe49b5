#!/usr/bin/env python3
"""General smoke tests for huffproc.

Goal:
- deterministic, repeatable round-trips through the real CLI
- produce a JSON report
- fail fast (non-zero exit) on any mismatch

Each iteration writes a text file and a binary file, then runs
compress -> verify --full -> decompress -> compare, and finally corrupts the magic
and expects exit code 11 (BAD_MAGIC).

Usage examples:
  python tools/smoke_general.py --iters 10
  python tools/smoke_general.py --iters 50 --seed 123 --keep
"""

from __future__ import annotations

import argparse
import json
import random
import shutil
import string
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any


def _run(cmd: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(cmd, text=True, capture_output=True)


def _gen_invoice_like(rng: random.Random) -> str:
    lines: list[str] = []
    lines.append(f"FATTURA N. {rng.randint(1, 9999)}")
    for _ in range(rng.randint(3, 12)):
        art = rng.choice(["vite", "dado", "rondella", "bullone", "chiave", "cavo"])
        size = rng.choice(["M3", "M4", "M5", "M6", "M8"])
        qty = rng.randint(1, 200)
        price = rng.randint(1, 500) / 100.0
        lines.append(f"RIGA ARTICOLO: {art} {size} qty={qty} prezzo={price:.2f}")
    lines.append(f"TOTALE {rng.randint(10, 50000) / 100.0:.2f}")
    return "\n".join(lines) + "\n"


def _gen_binary(rng: random.Random, max_bytes: int) -> bytes:
    # skewed distribution so the code lengths actually differ
    alphabet = bytes(range(256))
    weights = [1 + (255 - i) ** 2 for i in range(256)]
    return bytes(rng.choices(alphabet, weights=weights, k=rng.randint(0, max_bytes)))


@dataclass
class StepResult:
    name: str
    ok: bool
    rc: int
    stdout: str
    stderr: str


def main() -> int:
    ap = argparse.ArgumentParser(description="huffproc smoke tests (file round-trips)")
    ap.add_argument("--iters", type=int, default=10, help="Number of iterations (default: 10)")
    ap.add_argument("--seed", type=int, default=12345, help="Deterministic RNG seed (default: 12345)")
    ap.add_argument("--max-bytes", type=int, default=50_000, help="Max binary file size (default: 50000)")
    ap.add_argument("--keep", action="store_true", help="Keep temp workdir on exit")
    ap.add_argument("--json-out", type=Path, default=None, help="Write JSON report to file")
    ap.add_argument("--python", dest="pyexe", default=sys.executable, help="Python executable to use")
    ns = ap.parse_args()

    rng = random.Random(ns.seed)
    wd = Path(tempfile.mkdtemp(prefix="huffproc-smoke-"))

    report: dict[str, Any] = {"ok": True, "seed": ns.seed, "iters": ns.iters, "steps": []}

    def add_step(name: str, res: subprocess.CompletedProcess[str], *, expect_rc: int = 0) -> None:
        step = StepResult(
            name=name,
            ok=res.returncode == expect_rc,
            rc=res.returncode,
            stdout=res.stdout,
            stderr=res.stderr,
        )
        report["steps"].append(step.__dict__)
        if not step.ok:
            report["ok"] = False

    def run_cli(*args: str) -> subprocess.CompletedProcess[str]:
        return _run([ns.pyexe, "-m", "huffproc.cli", *args])

    try:
        add_step("cli_help", run_cli("--help"))

        for it in range(ns.iters):
            it_dir = wd / f"iter_{it:03d}"
            it_dir.mkdir(parents=True, exist_ok=True)
            samples = {
                "text": _gen_invoice_like(rng).encode("utf-8"),
                "bin": _gen_binary(rng, ns.max_bytes),
            }
            for label, data in samples.items():
                src = it_dir / f"{label}.in"
                comp = it_dir / f"{label}.hf"
                back = it_dir / f"{label}.back"
                src.write_bytes(data)

                add_step(f"it{it:03d}_{label}_compress", run_cli("file", "compress", str(src), str(comp)))
                add_step(f"it{it:03d}_{label}_verify_full", run_cli("file", "verify", str(comp), "--full"))
                add_step(f"it{it:03d}_{label}_decompress", run_cli("file", "decompress", str(comp), str(back)))

                if not back.is_file() or back.read_bytes() != data:
                    report["ok"] = False
                    report["steps"].append(
                        {
                            "name": f"it{it:03d}_{label}_diff",
                            "ok": False,
                            "rc": 1,
                            "stdout": "",
                            "stderr": "File roundtrip mismatch (bytes differ)",
                        }
                    )

                if comp.is_file():
                    blob = bytearray(comp.read_bytes())
                    blob[0] ^= 0xFF
                    comp.write_bytes(bytes(blob))
                    add_step(
                        f"it{it:03d}_{label}_bad_magic_expect_11",
                        run_cli("file", "verify", str(comp)),
                        expect_rc=11,
                    )

        if ns.json_out:
            ns.json_out.parent.mkdir(parents=True, exist_ok=True)
            ns.json_out.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")

        print(json.dumps({"ok": report["ok"], "seed": ns.seed, "iters": ns.iters, "workdir": str(wd)}))
        return 0 if report["ok"] else 1

    finally:
        if not ns.keep:
            shutil.rmtree(wd, ignore_errors=True)


if __name__ == "__main__":
    raise SystemExit(main())
