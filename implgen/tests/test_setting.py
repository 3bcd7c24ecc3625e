"""Tests for settings loading."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from implgen.setting import ENV_PREFIX, ImplementorSettings, load_settings


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    for name in ImplementorSettings.model_fields:
        monkeypatch.delenv(ENV_PREFIX + name.upper(), raising=False)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self):
        settings = load_settings()
        assert settings.class_suffix == "Impl"
        assert settings.source_roots == [Path(".")]
        assert settings.classpath == []
        assert settings.include_jdk_stubs
        assert settings.log_level == "INFO"

    def test_log_level_is_normalized(self):
        assert ImplementorSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            ImplementorSettings(log_level="chatty")

    @pytest.mark.parametrize("suffix", ["", "Im-pl", "Impl.java"])
    def test_bad_suffix(self, suffix):
        with pytest.raises(ValidationError):
            ImplementorSettings(class_suffix=suffix)


class TestYaml:
    def test_default_file_in_working_directory(self, tmp_path):
        (tmp_path / "implgen.yaml").write_text("class_suffix: Stub\njavac_timeout: 30\n")
        settings = load_settings()
        assert settings.class_suffix == "Stub"
        assert settings.javac_timeout == 30

    def test_nested_under_implgen_key(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("implgen:\n  source_roots: [src, lib/src]\n  bundle_contract_classes: true\n")
        settings = load_settings(path)
        assert settings.source_roots == [Path("src"), Path("lib/src")]
        assert settings.bundle_contract_classes

    def test_explicit_file_must_exist(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path).class_suffix == "Impl"

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_settings(path)


class TestEnvironment:
    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        (tmp_path / "implgen.yaml").write_text("class_suffix: Stub\n")
        monkeypatch.setenv("IMPLGEN_CLASS_SUFFIX", "Fake")
        assert load_settings().class_suffix == "Fake"

    def test_path_lists_split_on_pathsep(self, monkeypatch):
        monkeypatch.setenv("IMPLGEN_SOURCE_ROOTS", os.pathsep.join(["a", "b"]))
        monkeypatch.setenv("IMPLGEN_CLASSPATH", os.pathsep.join(["x.jar", "", "y.jar"]))
        settings = load_settings()
        assert settings.source_roots == [Path("a"), Path("b")]
        assert settings.classpath == ["x.jar", "y.jar"]

    def test_boolean_from_env(self, monkeypatch):
        monkeypatch.setenv("IMPLGEN_INCLUDE_JDK_STUBS", "false")
        assert not load_settings().include_jdk_stubs
