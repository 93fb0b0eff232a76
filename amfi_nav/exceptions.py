"""
Custom exception hierarchy for amfi-nav.

Problems with individual feed lines are *not* exceptions: they are
reported as ``LineError`` values in the parsed stream so that one bad
line never aborts the feed.  The exceptions below are reserved for
setup and caller errors (bad config, bad layout files, failed exports)
plus the internal ``FieldConversionError`` that field converters raise
and the classifier turns into a ``LineError``.
"""


class AmfiNavError(Exception):
    """Base exception for all amfi-nav errors."""


class ConfigValidationError(AmfiNavError):
    """Raised when a parser config file is empty or semantically invalid."""


class LayoutError(AmfiNavError):
    """Raised when feed layout YAML files are missing or inconsistent.

    For example, two layouts declaring the same column count, or a
    layout whose mandatory columns are not part of its column list.
    """


class FieldConversionError(AmfiNavError):
    """Raised by a field converter when a raw value cannot be converted.

    Carries the ``ErrorKind`` so the classifier can report the right
    reason without re-inspecting the message.
    """

    def __init__(self, kind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class ExportError(AmfiNavError):
    """Raised when parsed records cannot be written to disk."""
