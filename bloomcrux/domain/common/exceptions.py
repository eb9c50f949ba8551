"""
Domain layer exceptions.

Raised by entities and domain services when a business rule or invariant
does not hold. The HTTP layer translates them into responses.
"""


class DomainError(Exception):
    """Base class for every domain error."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when an input value is not acceptable.

    Example: an empty card front, a negative ``correct`` count.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    """Raised when an entity lookup comes back empty."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """
    Raised when an operation breaks a business rule.

    Example: claiming a streak chest that is not available.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})
        self.rule = rule


class AuthorizationError(DomainError):
    """Raised when the caller may not act on a resource."""

    def __init__(self, message: str = "Not authorized to perform this action") -> None:
        super().__init__(message)
