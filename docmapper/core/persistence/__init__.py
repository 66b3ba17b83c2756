from .memory import InMemoryRepository
from .repository import Repository, ValidationFailures

__all__ = ["InMemoryRepository", "Repository", "ValidationFailures"]
