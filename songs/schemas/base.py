"""
Base schema with shared configuration.
"""

from pydantic import BaseModel, ConfigDict


class BaseResponseSchema(BaseModel):
    """
    Base for response schemas built from ORM objects.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
