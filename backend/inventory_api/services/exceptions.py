class InventoryError(Exception):
    """Base for every error a service raises on purpose."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(InventoryError):
    status_code = 404


class ConflictError(InventoryError):
    status_code = 409


class InvalidArgumentError(InventoryError):
    status_code = 400


class AuthenticationError(InventoryError):
    status_code = 401


class AuthorizationError(InventoryError):
    status_code = 403
