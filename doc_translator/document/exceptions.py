class DocumentError(Exception):
    """Base exception for DOCX parsing and write-back errors."""


class InvalidContainerError(DocumentError):
    """Raised when the input is not a readable DOCX archive or its body is not XML."""


class MissingBodyPartError(DocumentError):
    """Raised when the archive has no word/document.xml entry."""


class SerializationError(DocumentError):
    """Raised when the modified body tree cannot be rendered back to XML."""
