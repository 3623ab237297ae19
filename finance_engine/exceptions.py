"""Exceptions raised inside the engine"""


class FinanceEngineError(Exception):
    """Base exception for the finance engine"""

    pass


class RecordSerializationError(FinanceEngineError):
    """A record could not be turned into a delimited row"""

    pass


class SinkError(FinanceEngineError):
    """An export document could not be written to its destination"""

    pass
