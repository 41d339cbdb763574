# core/exceptions.py
from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class CycleDetectedError(BusinessRuleError):
    """Raised when a dependency graph handed to the scheduler contains a cycle."""
    def __init__(self, message: str, *, cycle: list[str] | None = None, code: str | None = None):
        super().__init__(message, code=code or "SCHEDULE_CYCLE")
        self.cycle = list(cycle or [])


class ScheduleLimitError(DomainError):
    """Raised when a scheduling request exceeds the configured graph ceiling."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message, code=code or "SCHEDULE_LIMIT")
