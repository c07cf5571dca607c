class JobNotFound(Exception):
    def __init__(self, job_id: int):
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id


class AnalysisError(Exception):
    """Base for every failure surfaced by the analysis gateway."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class Throttled(AnalysisError):
    """Another analysis is already in flight."""


class UpstreamError(AnalysisError):
    """The completion provider failed or answered outside the contract."""


class UpstreamFormatError(UpstreamError):
    pass


class UpstreamQuotaExceeded(UpstreamError):
    pass


class UpstreamUnavailable(UpstreamError):
    pass
