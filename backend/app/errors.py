from enum import Enum


class ErrorType(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    REFERENCE_CONFLICT = "reference_conflict"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.REFERENCE_CONFLICT: 400,
    ErrorType.INTERNAL_ERROR: 500,
}
