"""文档能力数据模型定义模块.

任何实现了 Document 协议（doc_id、routing、to_fields 三个方法）的对象
都可以被索引，无需继承任何基类。
"""

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Document(Protocol):
    """可索引文档协议.

    Examples:
        >>> class Post:
        ...     def __init__(self, id, title):
        ...         self.id = id
        ...         self.title = title
        ...
        ...     def doc_id(self) -> str:
        ...         return str(self.id)
        ...
        ...     def routing(self) -> str | None:
        ...         return None
        ...
        ...     def to_fields(self) -> dict:
        ...         return {"title": self.title}
    """

    def doc_id(self) -> str: ...

    def routing(self) -> str | None: ...

    def to_fields(self) -> Mapping[str, Any]: ...
