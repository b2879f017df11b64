"""Domain-specific exceptions: framework-independent."""


class DomainError(Exception):
    """Base class for expected business failures surfaced to the caller verbatim."""


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str, field: str = "id"):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.field = field
        super().__init__(f"{entity_type} with {field} '{entity_id}' not found")


class DuplicateEntityError(DomainError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class InvalidInputError(DomainError):
    """Raised for malformed identifiers or values the domain refuses."""


class RateLimitedError(DomainError):
    """Raised when a caller exceeded a daily interaction cap."""


class BotDetectedError(DomainError):
    """Raised when a request looks scripted (user-agent signature match)."""


class AuthenticationError(DomainError):
    """Raised when credentials or a bearer token cannot be verified."""


class AuthorizationError(DomainError):
    """Raised when an authenticated user lacks the required role."""


class EntityInUseError(DomainError):
    """Raised when deleting an entity that other records still reference."""

    def __init__(self, entity_type: str, entity_id: str, references: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.references = references
        super().__init__(
            f"{entity_type} '{entity_id}' is still referenced by {references} article(s)"
        )
