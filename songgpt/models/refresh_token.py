from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from songgpt.core.database import Base


# refresh 원문 저장 아닌 hash 처리된 값 저장
class RefreshToken(Base):
    __tablename__ = "refresh_token"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # 1인(email) 1 refresh만 유지
    email = Column(String(255), nullable=False, unique=True)
    refresh_token = Column(String(255), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    create_token = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    modify_token = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def update_token(self, token_hash: str, expires_at) -> "RefreshToken":
        self.refresh_token = token_hash
        self.expires_at = expires_at
        return self
