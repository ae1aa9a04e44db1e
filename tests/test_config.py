"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from cexpr.cli import build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = ".1f"\n')
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"format": ".1f"}

    def test_auto_discover_cexpr_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cexpr.toml"
        cfg.write_text('[logging]\nlevel = "INFO"\n')
        result = load_config(None, tmp_path)
        assert result["logging"] == {"level": "INFO"}


class TestConfigMerge:
    def test_defaults(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        opts = resolve_options(build_parser().parse_args(["1"]))
        assert opts.result_format is None
        assert opts.log_level == "WARNING"

    def test_config_format(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cexpr.toml").write_text('[output]\nformat = ".3f"\n')
        opts = resolve_options(build_parser().parse_args(["1"]))
        assert opts.result_format == ".3f"

    def test_cli_overrides_config_format(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cexpr.toml").write_text('[output]\nformat = ".3f"\n')
        opts = resolve_options(build_parser().parse_args(["--format", "e", "1"]))
        assert opts.result_format == "e"

    def test_config_log_level_normalized(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cexpr.toml").write_text('[logging]\nlevel = "info"\n')
        opts = resolve_options(build_parser().parse_args(["1"]))
        assert opts.log_level == "INFO"

    def test_verbose_overrides_config_level(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cexpr.toml").write_text('[logging]\nlevel = "ERROR"\n')
        opts = resolve_options(build_parser().parse_args(["-v", "1"]))
        assert opts.log_level == "DEBUG"

    def test_invalid_log_level(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cexpr.toml").write_text('[logging]\nlevel = "LOUD"\n')
        with pytest.raises(argparse.ArgumentTypeError):
            resolve_options(build_parser().parse_args(["1"]))

    def test_config_next_to_input_file(self, tmp_path: Path) -> None:
        sub = tmp_path / "proj"
        sub.mkdir()
        (sub / "cexpr.toml").write_text('[output]\nformat = ".2f"\n')
        src = sub / "expr.c"
        src.write_text("1")
        opts = resolve_options(build_parser().parse_args(["-f", str(src)]))
        assert opts.result_format == ".2f"

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text('[output]\nformat = "g"\n')
        opts = resolve_options(build_parser().parse_args(["--config", str(cfg), "1"]))
        assert opts.result_format == "g"


class TestConfigEndToEnd:
    def test_format_applied(self, tmp_path: Path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cexpr.toml").write_text('[output]\nformat = ".1f"\n')
        assert main(["7/2"]) == 0
        assert capsys.readouterr().out == "3.5\n"

    def test_bad_level_exit_code(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cexpr.toml").write_text('[logging]\nlevel = "LOUD"\n')
        assert main(["1"]) == 2
