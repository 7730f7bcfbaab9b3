class DomainError(Exception):
    """Expected failure of a service call, reported to clients as ``{"ok": False}``."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(DomainError):
    status_code = 400


class Unauthorized(DomainError):
    status_code = 401


class PermissionDenied(DomainError):
    status_code = 403


class NotFound(DomainError):
    status_code = 404


class AlreadyExists(DomainError):
    status_code = 409
