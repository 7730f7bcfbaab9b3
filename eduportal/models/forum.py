from typing import List, Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Relationship

from ._common import utcnow


class ForumPost(SQLModel, table=True):
    __tablename__ = "forum_posts"

    id: Optional[int] = Field(default=None, primary_key=True)
    course_id: int = Field(foreign_key="courses.id", index=True)
    author_email: str = Field(index=True)
    title: str
    content: str
    created_at: datetime = Field(default_factory=utcnow, index=True)

    replies: List["ForumReply"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={"order_by": "ForumReply.id"},
    )


class ForumReply(SQLModel, table=True):
    __tablename__ = "forum_replies"

    id: Optional[int] = Field(default=None, primary_key=True)
    post_id: int = Field(foreign_key="forum_posts.id", index=True)
    author_email: str
    content: str
    created_at: datetime = Field(default_factory=utcnow)

    post: "ForumPost" = Relationship(back_populates="replies")
