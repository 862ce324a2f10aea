from __future__ import annotations

from pathlib import Path

from stmt_cli.shared import paths


def test_default_config_path_uses_config_dir(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path / "cfg")}
    assert paths.default_config_path(env=env) == tmp_path / "cfg" / "config.yaml"


def test_default_config_path_respects_file_override(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "custom.yaml"
    env = {paths.CONFIG_FILE_ENV: str(target)}
    assert paths.default_config_path(create_parents=True, env=env) == target
    assert target.parent.exists()


def test_default_output_path_uses_source_stem(tmp_path: Path) -> None:
    result = paths.default_output_path(tmp_path / "statements" / "july.csv", tmp_path / "out")
    assert result == tmp_path / "out" / "july.csv"


def test_resolve_path_expands_user(monkeypatch) -> None:
    monkeypatch.setenv("HOME", "/tmp/stmt-home")
    assert paths.resolve_path("~/data") == Path("/tmp/stmt-home/data")
