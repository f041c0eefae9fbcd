"""存储连接与基础设施管理。

本模块负责存储的底层基础设施，包括：
- SQLite 引擎创建（内存数据库使用单连接池，保证同一实例共享同一份数据）
- 会话（Session）管理
- 表创建

本模块不包含任何业务逻辑，仅提供存储基础操作。
"""
from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .models import Base
from config.settings import settings


def is_memory_url(database_url: str) -> bool:
    """判断是否为 SQLite 内存数据库 URL。"""
    return database_url in ("sqlite://", "sqlite:///:memory:") \
        or ":memory:" in database_url


class StoreConnection:
    """存储连接管理器。

    每个实例拥有独立的引擎。对于内存数据库，所有会话复用同一个连接，
    数据随实例存在，调用 ``close()`` 或进程退出后即丢失。

    Attributes:
        database_url: 数据库连接URL。
        engine: SQLAlchemy 引擎对象。
        SessionLocal: 会话工厂。

    Example:
        ```python
        # 内存数据库（默认）
        conn = StoreConnection()

        # 文件数据库（调试时查看数据）
        conn = StoreConnection("sqlite:///data/studio.db")
        ```
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        """初始化存储连接。

        Args:
            database_url: 数据库连接URL，如果为None则使用settings中的配置。
        """
        self.database_url: str = database_url or settings.database_url

        if not self.database_url.startswith("sqlite"):
            raise ValueError(
                f"Unsupported database URL: {self.database_url}, "
                f"expected a sqlite URL"
            )

        if is_memory_url(self.database_url):
            self.engine = create_engine(
                self.database_url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                self.database_url,
                echo=False,
                connect_args={"check_same_thread": False}
            )
        # 读取结果在会话关闭后作为独立快照使用
        self.SessionLocal = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False,
            expire_on_commit=False
        )

    def create_tables(self) -> None:
        """创建所有表（幂等操作）。"""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """获取数据库会话。"""
        return self.SessionLocal()

    def close(self) -> None:
        """关闭连接，释放引擎资源。

        内存数据库的数据随之丢失。调用后不应再使用此连接实例。
        """
        if self.engine is not None:
            self.engine.dispose()
