"""Tests for config.py — BuildConfig loading with env var overrides."""

from __future__ import annotations

import json
from pathlib import Path


class TestBuildConfigDefaults:
    def test_defaults(self):
        from pgrules.config import BuildConfig

        cfg = BuildConfig()
        assert cfg.rules_dir == "rules"
        assert cfg.sections_file == "_sections.md"
        assert cfg.metadata_file == "metadata.json"
        assert cfg.guide_output == "AGENTS.md"
        assert cfg.test_cases_output == "test-cases.json"

    def test_is_dataclass(self):
        import dataclasses

        from pgrules.config import BuildConfig

        assert dataclasses.is_dataclass(BuildConfig)

    def test_resolve(self):
        from pgrules.config import BuildConfig

        paths = BuildConfig().resolve(Path("/proj"))
        assert paths.rules_dir == Path("/proj/rules")
        assert paths.sections_file == Path("/proj/rules/_sections.md")
        assert paths.metadata_file == Path("/proj/metadata.json")
        assert paths.guide_output == Path("/proj/AGENTS.md")
        assert paths.test_cases_output == Path("/proj/test-cases.json")


class TestLoadBuildConfig:
    def test_returns_defaults_when_no_file(self, tmp_path, monkeypatch):
        from pgrules.config import load_build_config

        monkeypatch.delenv("PGRULES_RULES_DIR", raising=False)
        cfg = load_build_config(tmp_path / "nonexistent.json")
        assert cfg.rules_dir == "rules"

    def test_returns_defaults_for_none_path(self, monkeypatch):
        from pgrules.config import load_build_config

        monkeypatch.delenv("PGRULES_GUIDE_OUTPUT", raising=False)
        cfg = load_build_config(None)
        assert cfg.guide_output == "AGENTS.md"

    def test_loads_from_build_section(self, tmp_path, monkeypatch):
        from pgrules.config import load_build_config

        monkeypatch.delenv("PGRULES_RULES_DIR", raising=False)
        config_file = tmp_path / ".pgrules.json"
        config_file.write_text(
            json.dumps({"build": {"rules_dir": "skills/rules", "guide_output": "out/GUIDE.md"}})
        )
        cfg = load_build_config(config_file)
        assert cfg.rules_dir == "skills/rules"
        assert cfg.guide_output == "out/GUIDE.md"
        assert cfg.metadata_file == "metadata.json"

    def test_ignores_non_string_values(self, tmp_path):
        from pgrules.config import load_build_config

        config_file = tmp_path / ".pgrules.json"
        config_file.write_text(json.dumps({"build": {"metadata_file": 42}}))
        cfg = load_build_config(config_file)
        assert cfg.metadata_file == "metadata.json"

    def test_invalid_json_returns_defaults(self, tmp_path):
        from pgrules.config import load_build_config

        config_file = tmp_path / ".pgrules.json"
        config_file.write_text("{broken")
        cfg = load_build_config(config_file)
        assert cfg.test_cases_output == "test-cases.json"

    def test_empty_file_returns_defaults(self, tmp_path):
        from pgrules.config import load_build_config

        config_file = tmp_path / ".pgrules.json"
        config_file.write_text("   ")
        cfg = load_build_config(config_file)
        assert cfg.sections_file == "_sections.md"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        from pgrules.config import load_build_config

        config_file = tmp_path / ".pgrules.json"
        config_file.write_text(json.dumps({"build": {"rules_dir": "from-file"}}))
        monkeypatch.setenv("PGRULES_RULES_DIR", "from-env")
        monkeypatch.setenv("PGRULES_TEST_CASES_OUTPUT", "cases.json")
        cfg = load_build_config(config_file)
        assert cfg.rules_dir == "from-env"
        assert cfg.test_cases_output == "cases.json"
