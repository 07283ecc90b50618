"""基于 DB-API 2.0 (PEP 249) 连接的数据源存储."""

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypeVar

from .exceptions import SourceNotFoundError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DBAPIStore:
    """从关系数据库按 SQL 查询流式读取记录的存储.

    每个数据源对应一条 SQL 查询；stream 通过 fetchmany 分批读取，
    内存中最多保留 fetch_size 行。transaction 成功时提交、失败时回滚，
    并关闭事务期间打开的所有游标。

    Args:
        connection: 任意 DB-API 2.0 连接（sqlite3、psycopg 等）
        queries: 数据源描述到 SQL 查询的映射，值也可以是 (sql, params) 元组
        row_factory: 把 (cursor, row) 转换为领域记录的函数，默认原样返回行
        fetch_size: 每次 fetchmany 读取的行数

    Example:
        >>> store = DBAPIStore(
        ...     conn,
        ...     {"posts": "SELECT id, title FROM posts"},
        ...     row_factory=lambda cursor, row: Post(*row),
        ... )
    """

    def __init__(
        self,
        connection: Any,
        queries: Mapping[Any, str | tuple[str, Any]],
        row_factory: Callable[[Any, Any], Any] | None = None,
        fetch_size: int = 500,
    ):
        if fetch_size < 1:
            raise StoreError(f"fetch_size 必须 >= 1，当前值: {fetch_size}")
        self.connection = connection
        self.queries = dict(queries)
        self.row_factory = row_factory
        self.fetch_size = fetch_size
        self._cursors: list[Any] = []

    def stream(self, source: Any) -> Iterator[Any]:
        """执行数据源对应的查询，逐行产出记录.

        Raises:
            SourceNotFoundError: 数据源未配置查询时抛出
        """
        if source not in self.queries:
            raise SourceNotFoundError(f"未找到数据源 {source!r} 的查询")

        query = self.queries[source]
        sql, params = query if isinstance(query, tuple) else (query, ())

        cursor = self.connection.cursor()
        self._cursors.append(cursor)
        cursor.execute(sql, params)
        return self._rows(cursor)

    def _rows(self, cursor: Any) -> Iterator[Any]:
        while True:
            rows = cursor.fetchmany(self.fetch_size)
            if not rows:
                return
            for row in rows:
                yield self.row_factory(cursor, row) if self.row_factory else row

    def transaction(self, fn: Callable[[], T]) -> T:
        """在一个数据库事务中执行 fn."""
        try:
            result = fn()
        except BaseException:
            logger.warning("事务执行失败，回滚")
            self.connection.rollback()
            raise
        finally:
            self._close_cursors()
        self.connection.commit()
        return result

    def _close_cursors(self) -> None:
        while self._cursors:
            cursor = self._cursors.pop()
            try:
                cursor.close()
            except Exception as e:
                logger.warning(f"关闭游标失败: {str(e)}")
