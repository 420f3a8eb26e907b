"""Exception hierarchy for the risk engine."""


class RiskEngineError(Exception):
    """Base class for every error raised by the engine."""


class InvalidProfileError(RiskEngineError, ValueError):
    """Profile cannot yield a usable BMI; the submission must be aborted."""

    def __init__(self, message: str, *, weight: float | None = None, height: float | None = None):
        super().__init__(message)
        self.weight = weight
        self.height = height


class UnknownRiskLevelError(RiskEngineError, ValueError):
    """A recommendation was requested for a risk level outside low/medium/high."""


class StorageError(RiskEngineError):
    """The record store failed to persist or read a record."""

    def __init__(self, message: str, *, collection: str | None = None):
        super().__init__(message)
        self.collection = collection
