"""数据库连接与会话管理（仅 ``sql`` 存储后端使用）。"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """SQLAlchemy 基类。"""

    pass


def build_engine(database_url: str) -> Engine:
    """按 URL 创建引擎。"""

    kwargs: dict = {}
    if database_url.startswith("sqlite"):
        # SQLite 需要 ``check_same_thread=False`` 以支持多线程；其他数据库可忽略
        kwargs["connect_args"] = {"check_same_thread": False}
        database = make_url(database_url).database
        if not database or database == ":memory:":
            # 内存库必须共享同一连接，否则每个连接都是一个空库
            kwargs["poolclass"] = StaticPool
        else:
            Path(database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """提供事务范围的 Session 上下文管理器。"""

    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
