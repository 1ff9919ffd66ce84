"""
User model — payload of GET /me and the author of a comment.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    username: str = ""
    avatar_url: Optional[str] = None
    provider: Optional[str] = None
    role: Optional[str] = None
    created_at: Optional[str] = None
