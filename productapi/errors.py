"""
Error classifications raised by the store and the request handlers.

Every failure that reaches a client is one of these (or an unexpected
exception, which the app turns into a 500). The exception handlers in
``productapi.main`` are the only place that maps them to HTTP responses.
"""


class ProductAPIError(Exception):
    """Base class for classified API errors."""
    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(ProductAPIError):
    """Raised when a create/update payload is missing required fields."""
    status_code = 400
    message = "Missing required fields"


class NotFoundError(ProductAPIError):
    """Raised when no product matches the requested id."""
    status_code = 404
    message = "Product not found"
