"""Domain errors for the upload and distribution pipeline."""


class ListDistributionError(Exception):
    """Base class for list distribution failures."""

    error_code = "LIST_DISTRIBUTION_ERROR"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message())

    @property
    def message(self) -> str:
        return str(self)

    def default_message(self) -> str:
        return "List distribution failed"


# --------------------------------------------------
# INPUT ERRORS
# --------------------------------------------------
class InputError(ListDistributionError):
    """Raised when the caller's file or data cannot be accepted."""

    error_code = "INPUT_ERROR"


class UnsupportedFileType(InputError):
    error_code = "UNSUPPORTED_FILE_TYPE"

    def default_message(self) -> str:
        return "Invalid file format. Only CSV, XLSX, and XLS files are allowed"


class EmptyFile(InputError):
    error_code = "EMPTY_FILE"

    def default_message(self) -> str:
        return "Empty file"


class FileTooLarge(InputError):
    error_code = "FILE_TOO_LARGE"

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(f"File exceeds the maximum size of {max_bytes / (1024 * 1024):g} MB")


class EmptyBatch(InputError):
    error_code = "EMPTY_BATCH"

    def default_message(self) -> str:
        return "CSV file is empty"


class RowError(InputError):
    """Input error tied to one 1-based row of the uploaded file."""

    def __init__(self, message: str, row: int, field: str | None = None):
        self.row = row
        self.field = field
        super().__init__(message)


class MissingRequiredField(RowError):
    error_code = "MISSING_REQUIRED_FIELD"

    def __init__(self, field: str, row: int):
        super().__init__(
            f"Missing or empty required field '{field}' at row {row}",
            row=row,
            field=field,
        )


class InvalidPhoneFormat(RowError):
    error_code = "INVALID_PHONE_FORMAT"

    def __init__(self, row: int):
        super().__init__(f"Invalid phone number format at row {row}", row=row, field="phone")


class FieldTooLong(RowError):
    error_code = "FIELD_TOO_LONG"

    def __init__(self, field: str, row: int, max_length: int = 100):
        self.max_length = max_length
        super().__init__(
            f"Field '{field}' too long at row {row} (max {max_length} characters)",
            row=row,
            field=field,
        )


class NoAgentsAvailable(InputError):
    error_code = "NO_AGENTS_AVAILABLE"

    def default_message(self) -> str:
        return "No active agents available for distribution"


class NoItemsToDistribute(InputError):
    error_code = "NO_ITEMS_TO_DISTRIBUTE"

    def default_message(self) -> str:
        return "No items to distribute"


# --------------------------------------------------
# NOT FOUND / CONFLICT
# --------------------------------------------------
class NotFoundError(ListDistributionError):
    error_code = "NOT_FOUND"


class AgentNotFound(NotFoundError):
    error_code = "AGENT_NOT_FOUND"

    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__("Agent not found")


class BatchNotFound(NotFoundError):
    error_code = "BATCH_NOT_FOUND"

    def __init__(self, upload_batch: str):
        self.upload_batch = upload_batch
        super().__init__("No lists found for this batch")


class ConflictError(ListDistributionError):
    error_code = "CONFLICT"


class DuplicateAgentEmail(ConflictError):
    error_code = "DUPLICATE_AGENT_EMAIL"

    def __init__(self, email: str):
        self.email = email
        super().__init__("Agent with this email already exists")


# --------------------------------------------------
# INTERNAL
# --------------------------------------------------
class InternalError(ListDistributionError):
    error_code = "INTERNAL_ERROR"


class SpreadsheetParseError(InternalError):
    error_code = "SPREADSHEET_PARSE_ERROR"
