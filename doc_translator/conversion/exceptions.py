class ConversionFailedError(Exception):
    """Raised when a PDF cannot be converted to DOCX."""
