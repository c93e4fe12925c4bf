"""Tests for the psl-engine command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from psl_engine import main as main_module
from psl_engine.models import RuleTable
from psl_engine.persistence import load, save
from psl_engine.retriever import StaticListRetriever


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cache_path(tmp_path: Path, sample_table: RuleTable) -> Path:
    path = tmp_path / "psl.json.z"
    save(sample_table, path)
    return path


class TestLookup:
    def test_lookup_from_cache(self, cli_runner: CliRunner, cache_path: Path) -> None:
        result = cli_runner.invoke(
            main_module.cli, ["--cache", str(cache_path), "lookup", "www.example.co.uk", "com"]
        )
        assert result.exit_code == 0, result.output
        assert "www.example.co.uk\tsuffix=co.uk\ticann=True\tmatched=True\tetld+1=example.co.uk" in result.output
        assert "com\tsuffix=com\ticann=True\tmatched=True\tetld+1=-" in result.output

    def test_lookup_without_cache(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            main_module.cli, ["--cache", str(tmp_path / "missing.z"), "lookup", "a.example.co.uk"]
        )
        assert result.exit_code == 0, result.output
        assert "suffix=co.uk\ticann=True\tmatched=True\tetld+1=example.co.uk" in result.output

    def test_corrupt_cache_ignored(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.z"
        path.write_bytes(b"garbage")
        result = cli_runner.invoke(main_module.cli, ["--cache", str(path), "lookup", "example.com"])
        assert result.exit_code == 0, result.output
        assert "suffix=com" in result.output

    def test_requires_domain(self, cli_runner: CliRunner, cache_path: Path) -> None:
        result = cli_runner.invoke(main_module.cli, ["--cache", str(cache_path), "lookup"])
        assert result.exit_code != 0


class TestUpdate:
    def test_update_persists(
        self, cli_runner: CliRunner, cache_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(main_module, "_get_retriever", lambda: StaticListRetriever("r2", "ac\ncom.ac\n"))
        result = cli_runner.invoke(main_module.cli, ["--cache", str(cache_path), "update"])
        assert result.exit_code == 0, result.output
        assert "updated to release r2" in result.output
        assert load(cache_path).release == "r2"

    def test_already_current(
        self, cli_runner: CliRunner, cache_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(main_module, "_get_retriever", lambda: StaticListRetriever("sample-1"))
        result = cli_runner.invoke(main_module.cli, ["--cache", str(cache_path), "update"])
        assert result.exit_code == 0, result.output
        assert "already at release sample-1" in result.output

    def test_parse_failure_reported(
        self, cli_runner: CliRunner, cache_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(main_module, "_get_retriever", lambda: StaticListRetriever("r3", "COM\n"))
        result = cli_runner.invoke(main_module.cli, ["--cache", str(cache_path), "update"])
        assert result.exit_code == 1
        assert "bad publicsuffix.org list data" in result.output
        assert load(cache_path).release == "sample-1"


class TestRelease:
    def test_release(self, cli_runner: CliRunner, cache_path: Path) -> None:
        result = cli_runner.invoke(main_module.cli, ["--cache", str(cache_path), "release"])
        assert result.exit_code == 0, result.output
        assert "git revision: sample-1" in result.output
