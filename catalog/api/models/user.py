"""
Pydantic schemas for users as they appear in API responses.
"""

from pydantic import BaseModel


class CreatorSummary(BaseModel):
    """Display-safe view of the user who created a record."""

    user_id: int
    name: str
    email: str

    class Config:
        from_attributes = True
