from __future__ import annotations

import json
from pathlib import Path

import pytest

from huffproc.config import (
    CONFIG_ID_V1,
    ConfigError,
    HeaderMode,
    ProcessorConfig,
    load_config,
)
from huffproc.errors import UsageError


def test_default_config_is_tree() -> None:
    assert ProcessorConfig().header is HeaderMode.TREE


def test_config_inline_minimal() -> None:
    cfg = load_config(json.dumps({"spec": CONFIG_ID_V1}))
    assert cfg.header is HeaderMode.TREE


def test_config_counts_mode() -> None:
    cfg = load_config(json.dumps({"spec": CONFIG_ID_V1, "header": "COUNTS"}))
    assert cfg.header is HeaderMode.COUNTS


def test_config_from_file(tmp_path: Path) -> None:
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"spec": CONFIG_ID_V1, "header": "tree"}), encoding="utf-8")
    assert load_config(f"@{p}").header is HeaderMode.TREE


@pytest.mark.parametrize(
    "arg",
    [
        "",
        "[]",
        "{not json",
        json.dumps({"header": "tree"}),
        json.dumps({"spec": "huffproc.config.v0"}),
        json.dumps({"spec": CONFIG_ID_V1, "header": "zip"}),
        json.dumps({"spec": CONFIG_ID_V1, "header": 3}),
        json.dumps({"spec": CONFIG_ID_V1, "wat": 1}),
        "@/nonexistent/cfg.json",
    ],
)
def test_config_rejected(arg: str) -> None:
    with pytest.raises(ConfigError):
        load_config(arg)


def test_config_error_is_usage_and_value_error() -> None:
    with pytest.raises(UsageError):
        HeaderMode.parse("nope")
    with pytest.raises(ValueError):
        HeaderMode.parse("nope")
    assert HeaderMode.parse(" Tree ") is HeaderMode.TREE
