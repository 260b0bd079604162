"""
Exceptions raised by the DSD conversion pipeline.

Only structural failures surface as errors. Missing optional sections are
represented as absent handles and irregular cell or note content falls back
to documented defaults, so neither raises.
"""


class DsdError(Exception):
    """Base class for all conversion failures."""


class ContainerError(DsdError):
    """The DSD archive is unreadable or lacks its contents member."""


class ParseError(DsdError):
    """The document markup could not be parsed."""


class MissingBodyError(DsdError):
    """The document has no BODY container to segment."""
