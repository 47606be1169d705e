"""Load document metadata (version, organization, date, abstract, references)."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from pgrules.errors import MetadataError
from pgrules.guide.models import Metadata

logger = logging.getLogger(__name__)


def default_date(today: date | None = None) -> str:
    """Month and year, e.g. "January 2026"."""
    return (today or date.today()).strftime("%B %Y")


def load_metadata(path: Path | None = None, *, today: date | None = None) -> Metadata:
    """Load metadata.json, falling back to defaults when the file is absent.

    Raises:
        MetadataError: If the file exists but is not a valid metadata object.
    """
    if path is None or not path.exists():
        logger.info("Metadata file not found at %s, using defaults", path)
        return Metadata(date=default_date(today))

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MetadataError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise MetadataError(f"Could not read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise MetadataError(f"{path} must contain a JSON object")

    data.setdefault("date", default_date(today))
    try:
        return Metadata.model_validate(data)
    except ValidationError as exc:
        raise MetadataError(f"Invalid metadata in {path}: {exc}") from exc
