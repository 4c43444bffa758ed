from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from songgpt.core.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# 개발 단계 테이블 생성 (AUTO_CREATE_TABLES=true)
def init_db(bind=None) -> None:
    # model import 해야 metadata에 등록됨
    from songgpt import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
