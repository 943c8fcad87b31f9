"""
Custom exceptions for the e-commerce service
"""
from typing import Any, Dict, Optional


class EcommerceException(Exception):
    """Base exception for the e-commerce service"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class OrderValidationError(EcommerceException):
    """Order input violates a business rule"""
    pass


class OrderStateError(EcommerceException):
    """Illegal order status transition"""
    pass


class RepositoryError(EcommerceException):
    """Data-access collaborator failed"""
    pass


class InstrumentationError(EcommerceException):
    """Measurement namespace could not be registered"""
    pass
