"""Domain error taxonomy.

Every failure a caller can act on is raised as a subclass of
``RecipeShareError`` carrying a stable ``kind`` and a human-readable message.
The API layer maps kinds to HTTP status codes.
"""

from uuid import UUID


class RecipeShareError(Exception):
    """Base class for all domain errors."""

    kind = "server_error"

    def __init__(
        self, message: str, details: dict[str, object] | None = None
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(RecipeShareError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: UUID | str) -> None:
        super().__init__(
            f"{resource} not found",
            details={"resource": resource, "id": str(identifier)},
        )


class AccessDeniedError(RecipeShareError):
    """Raised when an authenticated requester is not allowed to act."""

    kind = "access_denied"


class ValidationFailedError(RecipeShareError):
    """Raised when input fails a value-level check."""

    kind = "validation_failed"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class AlreadyLikedError(RecipeShareError):
    """Raised when a user likes a recipe they already like."""

    kind = "already_liked"

    def __init__(self) -> None:
        super().__init__("Recipe already liked")


class NotLikedError(RecipeShareError):
    """Raised when a user unlikes a recipe they have not liked."""

    kind = "not_liked"

    def __init__(self) -> None:
        super().__init__("Recipe not liked yet")


class AlreadyFavoritedError(RecipeShareError):
    """Raised when a recipe is already in the user's favorites."""

    kind = "already_favorited"

    def __init__(self) -> None:
        super().__init__("Recipe already in favorites")


class NotFavoritedError(RecipeShareError):
    """Raised when a recipe is not in the user's favorites."""

    kind = "not_favorited"

    def __init__(self) -> None:
        super().__init__("Recipe not in favorites")


class StorageError(RecipeShareError):
    """Raised when the backing store fails unexpectedly."""

    kind = "server_error"
