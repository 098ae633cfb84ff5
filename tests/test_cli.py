from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from compositemark import cli

SPEC = {
    "data": {"values": [{"a": "x", "b": 1}, {"a": "x", "b": 3}, {"a": "y", "b": 2}]},
    "mark": {"type": "errorbar", "extent": "stdev"},
    "encoding": {
        "x": {"field": "a", "type": "nominal"},
        "y": {"field": "b", "type": "quantitative"},
    },
}


def _write_spec(tmp: Path, spec: dict) -> Path:
    p = tmp / "spec.json"
    p.write_text(json.dumps(spec), encoding="utf-8")
    return p


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as ei:
        cli.main(argv)
    return ei.value.code


def test_normalize_prints_layered_spec(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write_spec(tmp_path, SPEC)

    assert _run(["normalize", str(path)]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["data"] == SPEC["data"]
    assert [t.get("calculate") is not None for t in out["transform"]] == [False, True, True]
    assert [layer["mark"]["type"] for layer in out["layer"]] == ["rule", "point"]


def test_normalize_writes_out_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write_spec(tmp_path, SPEC)
    out_path = tmp_path / "layered.json"

    assert _run(["normalize", str(path), "--out", str(out_path), "--indent", "0"]) == 0

    assert "layer" in json.loads(out_path.read_text(encoding="utf-8"))


def test_normalize_reads_stdin(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(SPEC)))

    assert _run(["normalize", "-"]) == 0
    assert "layer" in json.loads(capsys.readouterr().out)


def test_spec_config_block_and_toml_are_applied(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COMPOSITEMARK_ERRORBAR_TICKS", raising=False)
    toml = tmp_path / "settings.toml"
    toml.write_text("[errorbar]\nticks = true\n", encoding="utf-8")
    path = _write_spec(tmp_path, {**SPEC, "config": {"errorbar": {"point": False}}})

    assert _run(["normalize", str(path), "--config", str(toml)]) == 0

    out = json.loads(capsys.readouterr().out)
    assert [layer["mark"]["type"] for layer in out["layer"]] == ["tick", "tick", "rule"]


def test_orientation_error_exits_nonzero(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    spec = {**SPEC, "encoding": {"x": {"field": "a", "type": "nominal"}}}
    path = _write_spec(tmp_path, spec)

    assert _run(["normalize", str(path)]) == 1
    assert "continuous axis" in capsys.readouterr().err


def test_invalid_json_exits_nonzero(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "bad.json"
    path.write_text("[1, 2", encoding="utf-8")

    assert _run(["normalize", str(path)]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_render_requires_an_output(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write_spec(tmp_path, SPEC)
    assert _run(["render", str(path)]) == 2


def test_render_html(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write_spec(tmp_path, SPEC)
    out_html = tmp_path / "chart.html"

    assert _run(["render", str(path), "--out-html", str(out_html)]) == 0
    assert "vega" in out_html.read_text(encoding="utf-8").lower()


def test_unknown_command(capsys) -> None:
    assert _run(["explode"]) == 2
    assert "Unknown command: explode" in capsys.readouterr().err


def test_no_arguments_prints_help(capsys) -> None:
    cli.main([])
    assert "compositemark" in capsys.readouterr().out
