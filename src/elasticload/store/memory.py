"""内存数据源存储."""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, TypeVar

from .exceptions import SourceNotFoundError

T = TypeVar("T")


class IterableStore:
    """以字典形式保存数据源的存储，适用于测试和一次性导入.

    每个数据源的值可以是可迭代对象，也可以是返回可迭代对象的函数
    （后者在每次 stream 时重新调用，适合生成器）。

    Args:
        sources: 数据源描述到记录集合的映射

    Example:
        >>> store = IterableStore({"posts": lambda: (Post(i) for i in range(10))})
    """

    def __init__(self, sources: Mapping[Any, Iterable[Any] | Callable[[], Iterable[Any]]]):
        self.sources = dict(sources)

    def stream(self, source: Any) -> Iterator[Any]:
        if source not in self.sources:
            raise SourceNotFoundError(f"未找到数据源 {source!r}")
        records = self.sources[source]
        if callable(records):
            records = records()
        return iter(records)

    def transaction(self, fn: Callable[[], T]) -> T:
        return fn()
