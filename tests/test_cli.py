# File: tests/test_cli.py
"""Тесты для CLI (`privacy_scout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `discover`, `batch`, `config`, `--version`, а также обработку ошибок.
"""
import json

import pytest
from click.testing import CliRunner

import privacy_scout.cli as cli_module
from privacy_scout.aggregator import DiscoveryReport, aggregate_results
from privacy_scout.cli import cli, read_targets
from privacy_scout.logger import configure
from privacy_scout.models import DiscoveryResult, Entry, EntryStatus
from privacy_scout.store import ImportSummary

QUIET = ["--log-level", "ERROR"]


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI перенастраивает логгер на поток CliRunner; возвращаем обычный вывод."""
    yield
    configure(level="INFO")


@pytest.fixture()
def batch_calls(monkeypatch):
    """Патчим run_batch: возвращаем фиктивный отчёт без сетевых запросов."""
    calls = []

    async def fake_run_batch(cfg, items):
        calls.append((cfg, list(items)))
        entry = Entry(
            id=1,
            url="https://example.com",
            status=EntryStatus.DONE,
            privacy_url="https://example.com/privacy",
            scraped_emails=["privacy@example.com"],
        )
        return aggregate_results([entry], imported=ImportSummary(imported=1, total=1))

    monkeypatch.setattr(cli_module, "run_batch", fake_run_batch)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "PrivacyScout" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "custom.yaml"
    cfg_file.write_text("concurrency: 3\ntimeout: 9.5\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, [*QUIET, "--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["concurrency"] == 3
    assert data["timeout"] == 9.5


def test_bad_config_exits_with_error(tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("concurrency: 0\n", encoding="utf-8")

    result = CliRunner().invoke(cli, [*QUIET, "--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_discover_prints_result(monkeypatch):
    seen = {}

    async def fake_discover_one(url, cfg):
        seen["url"] = url
        return DiscoveryResult(privacy_url="https://example.com/privacy", emails=["dpo@example.com"])

    monkeypatch.setattr(cli_module, "discover_one", fake_discover_one)

    result = CliRunner().invoke(cli, [*QUIET, "discover", "https://example.com/login"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "privacyUrl": "https://example.com/privacy",
        "emails": ["dpo@example.com"],
    }
    assert seen["url"] == "https://example.com/login"


def test_batch_stdout(tmp_path, batch_calls):
    targets = tmp_path / "sites.txt"
    targets.write_text("# sites\nhttps://example.com\n\nhttps://us.example.org/app\n", encoding="utf-8")

    result = CliRunner().invoke(cli, [*QUIET, "batch", str(targets), "--concurrency", "4"])
    assert result.exit_code == 0, result.output

    cfg, items = batch_calls[0]
    assert cfg.concurrency == 4
    assert items == [{"url": "https://example.com"}, {"url": "https://us.example.org/app"}]
    data = json.loads(result.output)
    assert data["progress"]["done"] == 1
    assert data["entries"][0]["scrapedEmails"] == ["privacy@example.com"]
    assert data["import"]["imported"] == 1


def test_batch_json_file(tmp_path, batch_calls):
    targets = tmp_path / "sites.json"
    targets.write_text(json.dumps([{"url": "https://example.com", "username": "bob"}]), encoding="utf-8")
    out = tmp_path / "reports" / "privacy.json"

    result = CliRunner().invoke(cli, [*QUIET, "batch", str(targets), "--json", str(out), "--pretty"])
    assert result.exit_code == 0, result.output
    assert f"JSON report: {out}" in result.output
    saved = json.loads(out.read_text(encoding="utf-8"))
    assert saved["entries"][0]["status"] == "done"
    assert batch_calls[0][1] == [{"url": "https://example.com", "username": "bob"}]


def test_batch_rejects_non_list_json(tmp_path, batch_calls):
    targets = tmp_path / "sites.json"
    targets.write_text(json.dumps({"url": "https://example.com"}), encoding="utf-8")

    result = CliRunner().invoke(cli, [*QUIET, "batch", str(targets)])
    assert result.exit_code == 1
    assert not batch_calls


def test_batch_failure_reports_error(tmp_path, monkeypatch):
    async def broken(cfg, items):
        raise RuntimeError("store offline")

    monkeypatch.setattr(cli_module, "run_batch", broken)
    targets = tmp_path / "sites.txt"
    targets.write_text("https://example.com\n", encoding="utf-8")

    result = CliRunner().invoke(cli, [*QUIET, "batch", str(targets)])
    assert result.exit_code == 1
    assert "store offline" in result.output


def test_read_targets_mixed_json(tmp_path):
    path = tmp_path / "t.json"
    path.write_text(json.dumps(["https://a.test", {"url": "https://b.test", "name": "B"}]), encoding="utf-8")
    assert read_targets(path) == [{"url": "https://a.test"}, {"url": "https://b.test", "name": "B"}]


def test_report_json_shape():
    report = DiscoveryReport()
    assert json.loads(report.json()) == {
        "progress": {"total": 0, "pending": 0, "inProgress": 0, "done": 0, "error": 0, "noResults": 0},
        "entries": [],
    }
