from typing import Optional


class PopReportError(Exception):
    pass


class ConfigurationError(PopReportError):
    """Invalid job or settings; raised before any task is launched."""


class SourceParseError(PopReportError):
    def __init__(self, source_id: str, cause: Optional[BaseException] = None, detail: str = ""):
        self.source_id = source_id
        self.cause = cause
        reason = detail or (str(cause) if cause is not None else "unreadable source")
        self.reason = reason
        super().__init__(f"{source_id}: {reason}")
