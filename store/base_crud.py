"""通用 CRUD 基类。

为各仓库提供按模型的通用增删改查能力，不包含领域逻辑。

写入约定：
- 只接受模型上映射的列，未知字段记录警告后忽略；
- ``id`` 永远不可通过写入指定或修改；
- 更新为浅合并：仅覆盖传入的字段，嵌套对象/列表整体替换；
- 按 id 更新或删除不存在的记录为静默空操作。
"""
from typing import Optional, List, Dict, Any, Iterable, Type, TypeVar
from sqlalchemy import inspect
from sqlalchemy.orm import Session
from loguru import logger

from .connection import StoreConnection
from .models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD:
    """通用 CRUD 基类。

    Attributes:
        conn: 存储连接管理器。
    """

    # 任何写入都不可触及的字段
    protected_fields = frozenset({"id"})

    def __init__(self, conn: StoreConnection) -> None:
        self.conn = conn

    def _get_session(self) -> Session:
        return self.conn.get_session()

    @staticmethod
    def column_names(model: Type[Base]) -> List[str]:
        """返回模型映射的列名（按定义顺序）。"""
        return [attr.key for attr in inspect(model).column_attrs]

    def _filter_fields(self, model: Type[Base], data: Dict[str, Any],
                       exclude: Iterable[str] = ()) -> Dict[str, Any]:
        """过滤出可写入的字段。

        Args:
            model: ORM 模型类。
            data: 原始字段字典。
            exclude: 额外排除的字段（静默忽略）。

        Returns:
            仅包含可写列的新字典。
        """
        columns = set(self.column_names(model))
        skipped = self.protected_fields | set(exclude)
        fields = {}
        for key, value in data.items():
            if key in skipped:
                continue
            if key not in columns:
                logger.warning(
                    f"Ignoring unknown field '{key}' for {model.__name__}"
                )
                continue
            fields[key] = value
        return fields

    def create(self, model: Type[ModelT], data: Dict[str, Any],
               exclude: Iterable[str] = ()) -> int:
        """创建记录并返回新 id。

        Args:
            model: ORM 模型类。
            data: 字段字典，未提供的字段使用列默认值。
            exclude: 额外忽略的字段。

        Returns:
            新记录 id。
        """
        fields = self._filter_fields(model, data, exclude)
        with self._get_session() as session:
            obj = model(**fields)
            session.add(obj)
            session.commit()
            session.refresh(obj)
            logger.info(f"Created {model.__name__} {obj.id}")
            return obj.id

    def get_by_id(self, model: Type[ModelT], record_id: int,
                  session: Optional[Session] = None) -> Optional[ModelT]:
        """按 id 查询记录，不存在返回 None。"""
        def _query(sess):
            return sess.query(model).filter(model.id == record_id).first()

        if session:
            return _query(session)

        with self._get_session() as sess:
            return _query(sess)

    def get_all(self, model: Type[ModelT],
                filters: Optional[Dict[str, Any]] = None,
                session: Optional[Session] = None) -> List[ModelT]:
        """查询全部记录，按插入顺序（id 升序）返回。

        Args:
            model: ORM 模型类。
            filters: 等值过滤条件（可选）。

        Returns:
            记录列表。
        """
        def _query(sess):
            query = sess.query(model)
            if filters:
                query = query.filter_by(**filters)
            return query.order_by(model.id).all()

        if session:
            return _query(session)

        with self._get_session() as sess:
            return _query(sess)

    def update_by_id(self, model: Type[ModelT], record_id: int,
                     session: Optional[Session] = None,
                     **updates: Any) -> Optional[ModelT]:
        """浅合并更新记录。

        Args:
            model: ORM 模型类。
            record_id: 记录 id。
            session: 外部会话（可选，由调用方提交）。
            **updates: 需要覆盖的字段。

        Returns:
            更新后的记录；记录不存在时返回 None（空操作）。
            没有可写字段时同样返回 None，不触碰记录。
        """
        fields = self._filter_fields(model, updates)
        if not fields:
            logger.debug(
                f"{model.__name__} {record_id} update has no writable fields, "
                f"skipped"
            )
            return None

        def _do(sess):
            obj = sess.query(model).filter(model.id == record_id).first()
            if obj is None:
                logger.debug(
                    f"{model.__name__} {record_id} not found, update skipped"
                )
                return None
            for key, value in fields.items():
                setattr(obj, key, value)
            sess.flush()
            return obj

        if session:
            return _do(session)

        with self._get_session() as sess:
            obj = _do(sess)
            if obj is not None:
                sess.commit()
            return obj

    def delete_by_id(self, model: Type[ModelT], record_id: int,
                     session: Optional[Session] = None) -> bool:
        """按 id 删除记录（不级联）。

        Returns:
            是否删除了记录；不存在时返回 False（空操作）。
        """
        def _do(sess):
            deleted = sess.query(model).filter(
                model.id == record_id
            ).delete()
            return deleted > 0

        if session:
            return _do(session)

        with self._get_session() as sess:
            deleted = _do(sess)
            if deleted:
                sess.commit()
                logger.info(f"Deleted {model.__name__} {record_id}")
            return deleted


class EntityCRUD(BaseCRUD):
    """绑定单个实体模型的 CRUD 仓库。

    子类只需声明 ``model``，必要时覆盖 ``_prepare`` 做写入前规范化。
    ``add`` 忽略调用方传入的 ``created_at``，由列默认值统一盖上创建时间；
    需要保留历史时间的导入请使用 ``import_record``。
    """

    model: Type[Base] = Base

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """写入前的字段规范化，子类按需覆盖。"""
        return data

    def add(self, data: Dict[str, Any]) -> int:
        """新增记录，返回生成的 id。"""
        return self.create(
            self.model, self._prepare(data), exclude=("created_at",)
        )

    def import_record(self, data: Dict[str, Any]) -> int:
        """导入记录，保留传入的 created_at（用于初始数据）。"""
        return self.create(self.model, self._prepare(data))

    def get(self, record_id: int,
            session: Optional[Session] = None) -> Optional[Base]:
        return self.get_by_id(self.model, record_id, session=session)

    def list_all(self, session: Optional[Session] = None) -> List[Base]:
        """按插入顺序返回全部记录。"""
        return self.get_all(self.model, session=session)

    def update(self, record_id: int, **updates: Any) -> Optional[Base]:
        return self.update_by_id(
            self.model, record_id, **self._prepare(updates)
        )

    def delete(self, record_id: int) -> bool:
        return self.delete_by_id(self.model, record_id)
