class JobError(Exception):
    """Base exception for job lifecycle errors."""


class InvalidTransitionError(JobError):
    """Raised when a job is moved to a status its current status does not allow."""


class JobNotFoundError(JobError):
    """Raised when a job id is not present in the registry."""
