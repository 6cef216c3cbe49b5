"""Processor config (v1) for huffproc.

Goal: the header mode is an explicit value passed into compress, not shared mutable state.

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from huffproc.errors import UsageError

CONFIG_ID_V1 = "huffproc.config.v1"


class ConfigError(UsageError, ValueError):
    pass


class HeaderMode(str, enum.Enum):
    """How the code is described in front of the payload.

    TREE   - pre-order serialized tree (implemented)
    COUNTS - raw frequency counts (reserved magic, not implemented)
    """

    TREE = "tree"
    COUNTS = "counts"

    @classmethod
    def parse(cls, value: str) -> "HeaderMode":
        v = value.strip().lower()
        for m in cls:
            if m.value == v:
                return m
        allowed = ", ".join(m.value for m in cls)
        raise ConfigError(f"config: header non supportato: {value!r} (ammessi: {allowed})")


@dataclass(frozen=True)
class ProcessorConfig:
    """Options for a single compress call."""

    header: HeaderMode = HeaderMode.TREE


def _load_json_arg(config_arg: str) -> dict[str, Any]:
    s = config_arg.strip()
    if not s:
        raise ConfigError("config: argomento vuoto")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise ConfigError(f"config: file non trovato: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except Exception as e:
            raise ConfigError(f"config: JSON non valido in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise ConfigError(f"config: il JSON in {p} deve essere un oggetto")
        return obj

    try:
        obj = json.loads(s)
    except Exception as e:
        raise ConfigError(f"config: JSON inline non valido: {e}") from e
    if not isinstance(obj, dict):
        raise ConfigError("config: il JSON inline deve essere un oggetto")
    return obj


def load_config(config_arg: str) -> ProcessorConfig:
    """Load and validate a processor config.

    config_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _load_json_arg(config_arg)

    allowed = {"spec", "header"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise ConfigError(f"config: chiavi non supportate: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != CONFIG_ID_V1:
        raise ConfigError(f"config: spec non supportata: {spec_id!r} (attesa {CONFIG_ID_V1!r})")

    header = obj.get("header", HeaderMode.TREE.value)
    if not isinstance(header, str) or not header.strip():
        raise ConfigError("config: campo 'header' deve essere stringa")

    return ProcessorConfig(header=HeaderMode.parse(header))
