"""BuildConfig dataclass and loader for input and output locations."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path

DEFAULT_CONFIG_FILE = ".pgrules.json"

_ENV_OVERRIDES: dict[str, str] = {
    "PGRULES_RULES_DIR": "rules_dir",
    "PGRULES_GUIDE_OUTPUT": "guide_output",
    "PGRULES_TEST_CASES_OUTPUT": "test_cases_output",
}


@dataclass
class BuildPaths:
    rules_dir: Path
    sections_file: Path
    metadata_file: Path
    guide_output: Path
    test_cases_output: Path


@dataclass
class BuildConfig:
    rules_dir: str = "rules"
    sections_file: str = "_sections.md"  # relative to rules_dir
    metadata_file: str = "metadata.json"
    guide_output: str = "AGENTS.md"
    test_cases_output: str = "test-cases.json"

    def resolve(self, root: Path) -> BuildPaths:
        """Resolve relative locations against the project root."""
        rules_dir = root / self.rules_dir
        return BuildPaths(
            rules_dir=rules_dir,
            sections_file=rules_dir / self.sections_file,
            metadata_file=root / self.metadata_file,
            guide_output=root / self.guide_output,
            test_cases_output=root / self.test_cases_output,
        )


def load_build_config(path: Path | None = None) -> BuildConfig:
    """Load build config from the "build" section of .pgrules.json."""
    config = BuildConfig()
    if path and path.exists():
        try:
            text = path.read_text()
            if text.strip():
                data = json.loads(text)
                section = data.get("build", {}) if isinstance(data, dict) else {}
                if isinstance(section, dict):
                    _apply(config, section)
        except (json.JSONDecodeError, OSError):
            pass
    for env_name, attr in _ENV_OVERRIDES.items():
        if env_val := os.environ.get(env_name):
            setattr(config, attr, env_val)
    return config


def _apply(cfg: BuildConfig, data: dict[str, object]) -> None:
    for f in fields(cfg):
        value = data.get(f.name)
        if isinstance(value, str) and value:
            setattr(cfg, f.name, value)
