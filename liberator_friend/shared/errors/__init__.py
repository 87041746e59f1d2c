from .base import AppError, ContractViolation, DomainError, ValidationError
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ContractViolation",
    "DomainError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
