from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

class ErrorItem(BaseModel):
    """One entry of the `errors` list. `field` is set for request validation errors only."""
    msg: str
    code: Optional[str] = None
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every JSON endpoint, success or failure."""
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    errors: List[ErrorItem] = []

    @classmethod
    def ok(cls, data: Optional[T] = None, message: Optional[str] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, errors: List[ErrorItem], message: Optional[str] = None) -> "ApiResponse[T]":
        return cls(success=False, message=message, errors=errors)

    def to_content(self) -> Dict[str, Any]:
        """JSON-ready body for a JSONResponse; empty fields are left out."""
        return self.model_dump(mode="json", exclude_none=True)
