from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ForumPostForm(BaseModel):
    course_id: int
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class ForumReplyForm(BaseModel):
    post_id: int
    content: str = Field(min_length=1)


class ForumReplyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_email: str
    content: str
    created_at: datetime


class ForumPostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_id: int
    author_email: str
    title: str
    content: str
    created_at: datetime
    replies: List[ForumReplyOut] = []
