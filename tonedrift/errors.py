"""Error types surfaced by an analysis run.

All of these are user-facing: the analysis trigger catches them and shows
the message inline instead of aborting.
"""


class DriftError(Exception):
    """Base class for recoverable analysis errors."""


class ValidationError(DriftError):
    """Fewer than two journal entries have content."""


class TransportError(DriftError):
    """The outbound completion request failed."""


class ParseError(DriftError):
    """The model output held no usable JSON object."""
