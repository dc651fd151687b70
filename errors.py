class StoreError(Exception):
    """Base for errors that map onto an HTTP status and a user-facing message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    status_code = 400


class AuthorizationError(StoreError):
    status_code = 401

    def __init__(self, message: str = "دسترسی غیرمجاز"):
        super().__init__(message)


class NotFoundError(StoreError):
    status_code = 404


class ConflictError(StoreError):
    status_code = 409


class ConfigurationError(StoreError):
    status_code = 500


class BackendUnavailable(Exception):
    """Document store failure absorbed by the file store fallback."""

    def __init__(self, collection: str, action: str, cause: BaseException):
        super().__init__(f"{collection}.{action}: {cause}")
        self.collection = collection
        self.action = action
        self.cause = cause
