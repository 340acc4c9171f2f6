from pathlib import Path

import pytest

from m8chords import cli
from m8chords.config import GeneratorConfig, default_output_root


@pytest.fixture(autouse=True)
def _isolated_logs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("M8CHORDS_LOG_DIR", str(tmp_path / "logs"))


def test_default_output_root_uses_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("M8CHORDS_OUTPUT_DIR", str(tmp_path))
    assert default_output_root() == tmp_path
    assert GeneratorConfig().output_root == tmp_path


def test_default_output_root_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("M8CHORDS_OUTPUT_DIR", raising=False)
    assert GeneratorConfig.resolve().output_root == Path("FM_CHORDS")


def test_cli_generate_writes_presets(tmp_path: Path) -> None:
    out = tmp_path / "out"
    assert cli.main(["generate", "--output", str(out)]) == 0
    assert (out / "POW_AUG" / "POW_AUG_HS.m8i").exists()


def test_cli_list_succeeds() -> None:
    assert cli.main(["list"]) == 0


def test_cli_reports_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    assert cli.main(["generate", "--output", str(blocker)]) == 1
    log_text = (tmp_path / "logs" / "m8chords.log").read_text(encoding="utf-8")
    assert "FolderCreationError" in log_text
