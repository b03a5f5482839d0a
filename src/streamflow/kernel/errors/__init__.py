"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── ValidationError
    ├── ApplicationError         (processing.py)
    │   └── ProcessingError
    │       ├── TransientProcessingError
    │       └── ExhaustionFailure
    └── InfrastructureError      (infrastructure.py)
        └── SerializationError
"""

from streamflow.kernel.errors.base import BaseError, describe_error
from streamflow.kernel.errors.domain import DomainError, ValidationError
from streamflow.kernel.errors.infrastructure import InfrastructureError, SerializationError
from streamflow.kernel.errors.processing import (
    ApplicationError,
    ExhaustionFailure,
    ProcessingError,
    TransientProcessingError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "ExhaustionFailure",
    "InfrastructureError",
    "ProcessingError",
    "SerializationError",
    "TransientProcessingError",
    "ValidationError",
    "describe_error",
]
