from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from creatorsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    load_environment,
    optional_env_var,
    require_env_vars,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_load_environment_reads_local_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("CREATORSYNC_ENV", raising=False)
    # registered so the value loaded from the file is removed again afterwards
    monkeypatch.setenv("CREATORSYNC_TEST_VALUE", "")
    monkeypatch.delenv("CREATORSYNC_TEST_VALUE")
    (tmp_path / ".env.local").write_text("CREATORSYNC_TEST_VALUE=local\n")
    (tmp_path / ".env.production").write_text("CREATORSYNC_TEST_VALUE=production\n")

    path = load_environment(base_dir=tmp_path)

    assert path == tmp_path / ".env.local"
    assert optional_env_var("CREATORSYNC_TEST_VALUE") == "local"


def test_load_environment_production_keeps_process_values(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CREATORSYNC_TEST_VALUE", "process")
    (tmp_path / ".env.production").write_text("CREATORSYNC_TEST_VALUE=production\n")

    path = load_environment("production", base_dir=tmp_path)

    assert path.name == ".env.production"
    assert optional_env_var("CREATORSYNC_TEST_VALUE") == "process"


def test_load_environment_rejects_unknown_name(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_environment("staging", base_dir=tmp_path)
