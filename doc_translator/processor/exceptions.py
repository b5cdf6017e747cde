class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class FileReadError(ProcessorError):
    """Raised when an input or working file cannot be read from disk."""


class OutputWriteError(ProcessorError):
    """Raised when the translated document cannot be written to disk."""
