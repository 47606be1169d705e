"""Output writers: the rendered guide and the test-case JSON list."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from pgrules.guide.models import TestCase


def _atomic_write(path: Path, content: str) -> None:
    """Write content to path atomically using tempfile + os.replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def write_guide(path: Path, text: str) -> Path:
    _atomic_write(path, text)
    return path


def write_test_cases(path: Path, cases: list[TestCase]) -> Path:
    """Write test cases as a JSON array; an empty run writes ``[]``."""
    payload = [case.model_dump(by_alias=True) for case in cases]
    _atomic_write(path, json.dumps(payload, indent=2))
    return path
