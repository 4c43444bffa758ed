from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from songgpt.core.database import Base


class Post(Base):

    __tablename__ = "post"

    post_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    create_post = Column(DateTime, nullable=False, server_default=func.now())
    modify_post = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    member_id = Column(Integer, ForeignKey("member.member_id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)

    member = relationship("Member", back_populates="posts")
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_post_member_id", "member_id"),
    )
