from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from songgpt.core.database import Base


class Like(Base):
    __tablename__ = "post_like"

    like_id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("post.post_id", ondelete="CASCADE"), nullable=False)
    member_id = Column(Integer, ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False)

    post = relationship("Post", back_populates="likes")
    member = relationship("Member", back_populates="likes")

    # 1 like / member
    __table_args__ = (UniqueConstraint("post_id", "member_id", name="uq_post_like_member"),)
