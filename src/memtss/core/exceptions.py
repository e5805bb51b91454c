"""Exceptions raised by the storage engine."""


class UnsupportedOperationError(ValueError):
    """Raised when a request asks for a capability the engine lacks.

    Examples are an aggregation other than NONE, or a tag matcher type
    the evaluator does not know. Subclasses ValueError so callers that
    treat every rejected argument alike can catch ValueError.
    """
