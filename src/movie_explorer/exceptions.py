"""Domain exceptions raised by repositories, strategies and services.

Route handlers and the handlers registered in ``main`` are the only places that
translate these into HTTP responses.
"""


class MovieExplorerError(Exception):
    """Base exception for application errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(MovieExplorerError):
    """Raised when input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(MovieExplorerError):
    """Raised when credentials or a token are rejected."""

    status_code = 401
    default_message = "Could not validate credentials"


class ResourceNotFoundError(MovieExplorerError):
    """Raised when a stored resource does not exist."""

    status_code = 404
    default_message = "Resource not found"


class UserNotFoundError(ResourceNotFoundError):
    default_message = "User not found"


class FavoriteNotFoundError(ResourceNotFoundError):
    default_message = "Movie not in favorites"


class ConflictError(MovieExplorerError):
    """Raised when a uniqueness constraint would be violated."""

    status_code = 409
    default_message = "Resource already exists"


class EmailAlreadyExistsError(ConflictError):
    default_message = "Email already in use"


class FavoriteAlreadyExistsError(ConflictError):
    default_message = "Movie already in favorites"


class DatabaseNotInitializedError(RuntimeError):
    """Raised when the database is used before ``Database.connect()``."""

    def __init__(self) -> None:
        super().__init__("Database not initialized. Call Database.connect() first.")


class InsecureSecretKeyError(RuntimeError):
    """Raised when asked to sign tokens with a missing or placeholder secret."""

    def __init__(self) -> None:
        super().__init__("SECRET_KEY is unset or insecure; refusing to issue tokens")
