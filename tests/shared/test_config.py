from __future__ import annotations

from pathlib import Path

import pytest

from stmt_cli.shared import paths
from stmt_cli.shared.config import AppConfig, load_config
from stmt_cli.shared.exceptions import ConfigurationError


def test_load_config_defaults(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path / "config")}
    cfg = load_config(env=env)
    assert isinstance(cfg, AppConfig)
    assert cfg.source_path == tmp_path / "config" / "config.yaml"
    assert cfg.input.encoding == "utf-8-sig"
    assert cfg.input.delimiter == "auto"
    assert cfg.output.directory == paths.resolve_path("output")
    assert cfg.patterns.extra == {}
    assert cfg.patterns.replace_defaults is False


def test_load_config_from_yaml(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(
        """
        input:
          encoding: latin-1
          delimiter: ";"
        output:
          directory: ~/converted
        patterns:
          payee: [Counter Party, "Paid To"]
          checkNumber: chq no
        """,
        encoding="utf-8",
    )
    cfg = load_config(config_path=cfg_file, env={})
    assert cfg.input.encoding == "latin-1"
    assert cfg.input.delimiter == ";"
    assert cfg.output.directory == paths.resolve_path("~/converted")
    assert cfg.patterns.extra == {
        "payee": ("counter party", "paid to"),
        "checkNumber": ("chq no",),
    }


def test_load_config_env_overrides(tmp_path: Path) -> None:
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path),
        "STMTNORM_INPUT_DELIMITER": "tab",
        "STMTNORM_OUTPUT_DIR": str(tmp_path / "out"),
        "STMTNORM_PATTERNS_REPLACE_DEFAULTS": "yes",
    }
    cfg = load_config(env=env)
    assert cfg.input.delimiter == "\t"
    assert cfg.output.directory == tmp_path / "out"
    assert cfg.patterns.replace_defaults is True


def test_invalid_yaml_raises_configuration_error(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("- just a list", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(config_path=cfg_file, env={})


def test_invalid_delimiter_raises_configuration_error(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("input:\n  delimiter: '::'\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(config_path=cfg_file, env={})


def test_invalid_env_bool_raises_configuration_error(tmp_path: Path) -> None:
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path),
        "STMTNORM_PATTERNS_REPLACE_DEFAULTS": "maybe",
    }
    with pytest.raises(ConfigurationError):
        load_config(env=env)


def test_missing_explicit_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(config_path=tmp_path / "absent.yaml", env={})


def test_unknown_encoding_raises_configuration_error(tmp_path: Path) -> None:
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path),
        "STMTNORM_INPUT_ENCODING": "bogus-enc",
    }
    with pytest.raises(ConfigurationError, match="bogus-enc"):
        load_config(env=env)
