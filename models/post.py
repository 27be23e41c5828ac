from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime


class Post(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime
    likes: List[Like] = []
    comments: List[Comment] = []


class TextRequest(BaseModel):
    """Body of create-post and add-comment"""
    text: str = Field(default="", validate_default=True)

    @field_validator("text")
    @classmethod
    def text_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Text is required")
        return value


class PostCreate(TextRequest):
    pass


class CommentCreate(TextRequest):
    pass
