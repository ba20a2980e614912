from __future__ import annotations


class ListError(Exception):
    """Base for every failure the list pipeline reports to the caller."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFileError(ListError):
    default_message = "No file uploaded"


class UnsupportedFileTypeError(ListError):
    default_message = "Only CSV, XLSX, and XLS files are allowed"


class FileTooLargeError(ListError):
    default_message = "File size too large. Maximum 5MB allowed."


class EmptyFileError(ListError):
    default_message = "File is empty"


class ParseError(ListError):
    # Library detail stays in the logs; callers only see this text.
    default_message = "Unable to read the uploaded file. Check that it is a valid CSV or Excel file."


class ValidationError(ListError):
    def __init__(self, reason: str, *, row: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.row = row


class InsufficientAgentsError(ListError):
    def __init__(self, count: int, required: int):
        super().__init__(
            f"Please add at least {required} agents before uploading. Currently you have {count} agents."
        )
        self.count = count
        self.required = required


class InvalidRosterError(ListError):
    status_code = 500
    default_message = "No agents available for distribution"


class PersistenceError(ListError):
    status_code = 500
    default_message = "Server error during file upload and distribution"


class NotFoundError(ListError):
    status_code = 404
    default_message = "Not found"


class DuplicateAgentError(ListError):
    default_message = "Agent with this email already exists"
