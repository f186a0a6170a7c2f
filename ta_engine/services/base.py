"""
Base Service Interface

Services wrap the pure indicator functions behind a typed request/response
contract. They hold no state between calls.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")


class BaseService(ABC, Generic[RequestT, ResultT]):
    """
    Base class for all services.

    Each service:
    - Accepts one request schema and returns one result schema
    - Rejects invalid requests with ValidationError
    - Reports its health
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging and error messages."""
        pass

    @abstractmethod
    def execute(self, request: RequestT) -> ResultT:
        """
        Run the service on one request.

        Raises:
            ServiceError: If the request cannot be computed
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        pass

    def validate_input(self, request: RequestT) -> RequestT:
        """
        Check cross-field rules that the schema cannot express.
        Default implementation returns the request as-is.
        """
        return request


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Request rejected before or during calculation."""
    pass
