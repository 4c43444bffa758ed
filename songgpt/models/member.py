from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from songgpt.core.database import Base


class Member(Base):
    __tablename__ = "member"

    member_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)  # 해시 저장 전제
    nickname = Column(String(50), nullable=False, unique=True)
    create_member = Column(DateTime, nullable=False, server_default=func.now())
    modify_member = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # 관계
    posts = relationship("Post", back_populates="member", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="member", cascade="all, delete-orphan")
