"""批量分页模块.

把惰性的动作序列切分为固定大小的页，并在页与页之间插入节流标记。
所有函数都是生成器，最多只比消费者多读取一页。
"""

from collections.abc import Iterable, Iterator
from itertools import islice
from typing import TypeVar

from ..typing import PageItem

T = TypeVar("T")


def chunk(items: Iterable[T], page_size: int) -> Iterator[list[T]]:
    """按顺序把 items 切分为最多 page_size 个元素的页，最后一页可能更短.

    Raises:
        ValueError: page_size < 1 时抛出
    """
    if page_size < 1:
        raise ValueError(f"page_size 必须 >= 1，当前值: {page_size}")

    iterator = iter(items)
    while True:
        page = list(islice(iterator, page_size))
        if not page:
            return
        yield page


def intersperse(pages: Iterable[list[T]], pace_ms: int) -> Iterator[list[T] | int]:
    """在相邻两页之间插入节流标记 pace_ms，最后一页之后不插入."""
    first = True
    for page in pages:
        if not first:
            yield pace_ms
        first = False
        yield page


def build_pages(actions: Iterable[str], page_size: int, pace_ms: int) -> Iterator[PageItem]:
    """组合 chunk 与 intersperse.

    Example:
        >>> list(build_pages(["a", "b", "c"], 2, 100))
        [['a', 'b'], 100, ['c']]
    """
    return intersperse(chunk(actions, page_size), pace_ms)
