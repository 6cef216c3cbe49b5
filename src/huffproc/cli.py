"""huffproc CLI.

This is the stable CLI entrypoint (console-script: ``huffproc``).

UX policy:
  - ``huffproc file compress|decompress|verify|inspect``
  - errors print ``[huffproc] <message>`` on stderr and map to stable exit codes
    (see huffproc.errors); ``--debug`` re-raises instead.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from huffproc.config import ConfigError, HeaderMode, ProcessorConfig, load_config
from huffproc.errors import EXIT_GENERIC, EXIT_USAGE, HuffProcError
from huffproc.log import configure_logging


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")


def _resolve_config(config_arg: str | None, header: str | None) -> ProcessorConfig:
    # precedence: CLI --header > config.header > default (tree)
    cfg = load_config(config_arg) if config_arg else ProcessorConfig()
    if header is not None:
        cfg = ProcessorConfig(header=HeaderMode.parse(header))
    return cfg


def _file_compress(input_path: Path, output_path: Path, cfg: ProcessorConfig) -> int:
    from huffproc.engine.processor import compress_file

    size_in, size_out = compress_file(input_path, output_path, cfg)
    print(f"File originale : {input_path} ({size_in} byte)")
    print(f"File compresso : {output_path} ({size_out} byte)")
    if size_in:
        print(f"Rapporto       : {size_out / size_in:.3f} (1.0 = nessuna compressione)")
    return 0


def _file_decompress(input_path: Path, output_path: Path) -> int:
    from huffproc.engine.processor import decompress_file

    decompress_file(input_path, output_path)
    return 0


def _file_verify(input_path: Path, *, full: bool) -> int:
    from huffproc.verify import verify_compressed_file

    verify_compressed_file(input_path, full=full)
    print("OK")
    return 0


def _file_inspect(input_path: Path, *, as_json: bool) -> int:
    from huffproc.verify import describe_header

    summary = describe_header(input_path)
    if as_json:
        print(json.dumps(summary.to_json(), indent=2, sort_keys=True))
        return 0
    print(f"Magic          : 0x{summary.magic:08X}")
    print(f"Foglie         : {summary.leaves}")
    print(f"Header (bit)   : {summary.header_bits}")
    print(f"Payload (bit)  : {summary.payload_bits} (padding incluso)")
    for sym, code in summary.codes.items():
        label = "EOF" if sym == 256 else f"{sym:3d}"
        print(f"  {label}  {code or '(vuoto)'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffproc", description="Huffman tree-header compressor")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_file = sub.add_parser("file", help="File operations")
    sub_file = p_file.add_subparsers(dest="file_cmd", required=True)

    p_c = sub_file.add_parser("compress", help="Lossless compress")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    p_c.add_argument(
        "--header",
        default=None,
        choices=[m.value for m in HeaderMode],
        help="Header mode (default: tree). 'counts' is reserved and not implemented.",
    )
    p_c.add_argument(
        "--config",
        default=None,
        help="Processor config (JSON). Use '@file.json' to load from file, or pass JSON inline.",
    )
    _add_common_args(p_c)

    p_d = sub_file.add_parser("decompress", help="Lossless decompress")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_common_args(p_d)

    p_v = sub_file.add_parser("verify", help="Verify a compressed file")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode the whole payload too")
    _add_common_args(p_v)

    p_i = sub_file.add_parser("inspect", help="Show header and code table")
    p_i.add_argument("input", type=Path)
    p_i.add_argument("--json", action="store_true", help="JSON output")
    _add_common_args(p_i)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)
    configure_logging(verbose=bool(getattr(ns, "verbose", False)))

    try:
        if ns.cmd == "file":
            if ns.file_cmd == "compress":
                cfg = _resolve_config(ns.config, ns.header)
                return _file_compress(ns.input, ns.output, cfg)
            if ns.file_cmd == "decompress":
                return _file_decompress(ns.input, ns.output)
            if ns.file_cmd == "verify":
                return _file_verify(ns.input, full=bool(ns.full))
            if ns.file_cmd == "inspect":
                return _file_inspect(ns.input, as_json=bool(ns.json))
            raise AssertionError("unreachable")

        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except ConfigError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffproc] {e}", file=sys.stderr)
        return EXIT_USAGE
    except HuffProcError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffproc] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffproc] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
