class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UnsupportedFileError(ValidationError):
    """Raised when an upload is not an accepted spreadsheet or is too large."""


class DuplicateStudentError(ValidationError):
    """Raised when a manual entry matches a student already on the roster."""


class ImportParseError(DomainError):
    """Raised when tabular content cannot be read; the whole batch is rejected."""


class PersistenceError(DomainError):
    """Raised when the roster store cannot be read or written."""


class NoActiveRosterError(DomainError):
    """Raised when an operation needs a selected roster and there is none."""


class ExportError(DomainError):
    """Raised when the export workbook cannot be produced."""


class UnsavedChangesError(DomainError):
    """Raised when replacing the active roster would drop unsaved changes."""
