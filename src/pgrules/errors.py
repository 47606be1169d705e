"""Exceptions for fatal configuration problems.

Per-file parse and validation problems are never raised; they are returned
as structured results. Only conditions that make a whole run meaningless
end up here.
"""


class PgRulesError(Exception):
    """Base class for pgrules failures that abort a run."""


class MetadataError(PgRulesError):
    """Raised when the metadata file exists but cannot be used."""


class RulesDirectoryError(PgRulesError):
    """Raised when the configured rules path is not a directory."""
