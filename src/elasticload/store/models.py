"""数据源存储协议定义模块."""

from collections.abc import Callable, Iterable
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Store(Protocol):
    """数据源存储协议.

    stream 返回某个数据源的惰性记录序列；transaction 在一个工作单元内执行 fn，
    无论成功与否都释放相关资源，并返回 fn 的结果。
    """

    def stream(self, source: Any) -> Iterable[Any]: ...

    def transaction(self, fn: Callable[[], T]) -> T: ...
