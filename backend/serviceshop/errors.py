from typing import Dict, Optional


class ShopException(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        return {"success": False, "message": self.message}


class ValidationError(ShopException):
    """Missing or malformed input. `errors` maps field name -> problem."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}

    def to_dict(self) -> Dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFound(ShopException):
    status_code = 404
    default_message = "Not found"


class StoreError(ShopException):
    # message is what the caller sees; the underlying error is only logged
    status_code = 500
    default_message = "Server error"


class Unauthorized(ShopException):
    status_code = 401
    default_message = "Unauthorized: invalid admin key"
