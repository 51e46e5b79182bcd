from __future__ import annotations

from pathlib import Path

import pytest

from creatorsync.adapters.catalog import CatalogError, IndexReport
from creatorsync.app import SyncReport
from creatorsync.config import MissingConfigurationError
from creatorsync.domain.reconciliation import RunResult
from creatorsync.ui import cli as cli_module


def _report(*, interrupted: bool = False) -> SyncReport:
    return SyncReport(run=RunResult(interrupted=interrupted))


def test_sync_passes_options_and_stop_predicate(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> SyncReport:
        captured.update(kwargs)
        return _report()

    monkeypatch.setattr(cli_module, "sync_catalog", fake_sync)

    cli_module.main(["--data-dir", "catalog", "sync", "--delay", "0.25"])

    assert captured["catalog_dir"] == Path("catalog")
    assert captured["delay_seconds"] == pytest.approx(0.25)
    should_stop = captured["should_stop"]
    assert callable(should_stop)
    assert should_stop() is False


def test_sync_file_command(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync_file(path: Path, **kwargs: object) -> SyncReport:
        captured["path"] = path
        captured.update(kwargs)
        return _report()

    monkeypatch.setattr(cli_module, "sync_group_file", fake_sync_file)

    cli_module.main(["sync-file", "data/Creators/Alpha/members.json"])

    assert captured["path"] == Path("data/Creators/Alpha/members.json")
    assert captured["delay_seconds"] is None


def test_interrupted_run_exits_130(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "sync_catalog", lambda **_: _report(interrupted=True))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync"])

    assert excinfo.value.code == 130


def test_missing_configuration_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync(**_: object) -> SyncReport:
        raise MissingConfigurationError("Missing configuration for: YOUTUBE_API_KEY")

    monkeypatch.setattr(cli_module, "sync_catalog", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync"])

    assert excinfo.value.code == 2


def test_catalog_error_exits_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_master(**_: object) -> IndexReport:
        raise CatalogError("Catalog directory not found: data")

    monkeypatch.setattr(cli_module, "update_master_index", fake_master)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["master"])

    assert excinfo.value.code == 1


def test_invalid_delay_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync", "--delay", "-1"])

    assert excinfo.value.code == 2


def test_stop_request_first_interrupt_only_flags() -> None:
    stop = cli_module.StopRequest()

    stop.handle(2, None)

    assert stop()
    with pytest.raises(KeyboardInterrupt):
        stop.handle(2, None)
