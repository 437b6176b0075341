from .base import BaseService
from .errors import (
    DependencyMissingError,
    ExternalCommandFailedError,
    IoFailedError,
    ServiceFailure,
    ValidationFailedError,
)

__all__ = [
    "BaseService",
    "DependencyMissingError",
    "ExternalCommandFailedError",
    "IoFailedError",
    "ServiceFailure",
    "ValidationFailedError",
]
