import logging
import os

from dataclasses import dataclass

from slsa_provenance.config import (
    Config,
    ConfigSection,
    ProvenanceConfig,
    known_config_files,
)


def test_config():
    with open("slsa-provenance.toml", "w") as f:
        f.write(
            "[provenance]\njson_indent = 2\n"
            '  [provenance.log]\n  pretty = false\n  stream_fmt = "%(message)s"'
        )

    Config.load_file("slsa-provenance.toml")

    @dataclass
    class MyConfig(ConfigSection):
        title = "provenance.log"
        pretty: bool = True
        stream_fmt: str = ""

    config = MyConfig.load()
    assert not config.pretty
    assert config.stream_fmt == "%(message)s"

    provenance_config = ProvenanceConfig.load()
    assert provenance_config.json_indent == 2
    assert provenance_config.sort_keys
    assert provenance_config.keep_extra_fields


def test_config_defaults():
    config = ProvenanceConfig.load()
    assert config == ProvenanceConfig(
        json_indent=0, sort_keys=True, keep_extra_fields=True
    )


def test_config_invalid_type(caplog):
    with open("slsa-provenance.toml", "w") as f:
        f.write('[provenance]\njson_indent = "two"\nsort_keys = false\n')

    Config.load_file("slsa-provenance.toml")
    with caplog.at_level(logging.ERROR):
        config = ProvenanceConfig.load()

    # The invalid value is reported and the default kept
    assert config.json_indent == 0
    assert not config.sort_keys
    assert "provenance.json_indent" in caplog.text


def test_config_invalid_file(caplog):
    with open("slsa-provenance.toml", "w") as f:
        f.write("[provenance\njson_indent = 2\n")

    with caplog.at_level(logging.ERROR):
        Config.load_file("slsa-provenance.toml")
    assert "cannot load slsa-provenance.toml" in caplog.text
    assert ProvenanceConfig.load().json_indent == 0


def test_config_env_var(monkeypatch):
    with open("user.toml", "w") as f:
        f.write("[provenance]\nkeep_extra_fields = false\n")

    monkeypatch.setenv("SLSA_PROVENANCE_CONFIG", "user.toml")
    assert known_config_files() == ["user.toml"]
    # Known files are loaded the first time a section is requested
    assert not ProvenanceConfig.load().keep_extra_fields


def test_config_default_files(monkeypatch, tmp_path):
    monkeypatch.delenv("SLSA_PROVENANCE_CONFIG")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    os.makedirs(tmp_path / "xdg")
    os.makedirs(tmp_path / "home")

    assert known_config_files() == [
        str(tmp_path / "xdg" / "slsa-provenance.toml"),
        str(tmp_path / "home" / "slsa-provenance.toml"),
    ]

    with open(tmp_path / "xdg" / "slsa-provenance.toml", "w") as f:
        f.write("[provenance]\njson_indent = 4\nsort_keys = false\n")
    with open(tmp_path / "home" / "slsa-provenance.toml", "w") as f:
        f.write("[provenance]\njson_indent = 2\n")

    # Tables are merged, the home file taking precedence
    config = ProvenanceConfig.load()
    assert config.json_indent == 2
    assert not config.sort_keys


def test_config_unknown_setting(caplog):
    with open("slsa-provenance.toml", "w") as f:
        f.write("[provenance]\nindent = 2\n")

    Config.load_file("slsa-provenance.toml")
    with caplog.at_level(logging.WARNING):
        config = ProvenanceConfig.load()
    assert config.json_indent == 0
    assert "provenance.indent: unknown setting ignored" in caplog.text
