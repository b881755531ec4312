"""Domain errors raised by the directory service and access gate."""


class DirectoryError(Exception):
    """Base error for the staff directory."""

    error_code = "DIRECTORY_ERROR"
    status_code = 500
    default_message = "Unexpected directory error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(DirectoryError):
    error_code = "INVALID_CREDENTIALS"
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(DirectoryError):
    error_code = "UNAUTHENTICATED"
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(DirectoryError):
    error_code = "FORBIDDEN"
    status_code = 403
    default_message = "Not authorized"


class EmployeeNotFound(DirectoryError):
    error_code = "NOT_FOUND"
    status_code = 404
    default_message = "Employee not found"

    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id!r} not found")


class InvalidPagination(DirectoryError):
    error_code = "INVALID_PAGINATION"
    status_code = 400
    default_message = "page and pageSize must be positive integers"
