from typing import List

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str


class ValidationErrorResponse(BaseModel):
    errors: List[str]
