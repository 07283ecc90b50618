"""文档能力分发模块.

通过 functools.singledispatch 按具体类型分发 id、routing、fields 三项能力：
- 实现了 Document 协议的对象直接调用其方法
- 无法修改的第三方类型可以通过 register_document 注册适配函数
"""

from collections.abc import Callable, Mapping
from functools import singledispatch
from typing import Any

from .exceptions import DocumentNotSupportedError
from .models import Document


@singledispatch
def document_id(value: Any) -> str:
    """获取文档ID."""
    if isinstance(value, Document):
        return value.doc_id()
    raise DocumentNotSupportedError(value)


@singledispatch
def document_routing(value: Any) -> str | None:
    """获取文档路由键，没有路由时返回 None."""
    if isinstance(value, Document):
        return value.routing()
    raise DocumentNotSupportedError(value)


@singledispatch
def document_fields(value: Any) -> Mapping[str, Any]:
    """获取文档字段字典."""
    if isinstance(value, Document):
        return value.to_fields()
    raise DocumentNotSupportedError(value)


def register_document(
    cls: type,
    *,
    doc_id: Callable[[Any], str],
    fields: Callable[[Any], Mapping[str, Any]],
    routing: Callable[[Any], str | None] | None = None,
) -> None:
    """为指定类型注册 Document 能力适配器.

    Args:
        cls: 要注册的类型
        doc_id: 提取文档ID的函数
        fields: 提取字段字典的函数
        routing: 提取路由键的函数，不指定时该类型的文档不带路由

    Example:
        >>> register_document(
        ...     dict,
        ...     doc_id=lambda d: str(d["id"]),
        ...     fields=lambda d: {k: v for k, v in d.items() if k != "id"},
        ... )
    """
    document_id.register(cls, doc_id)
    document_fields.register(cls, fields)
    document_routing.register(cls, routing or (lambda value: None))
