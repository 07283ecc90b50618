"""文档能力模块.

定义可索引记录需要提供的能力：稳定的文档ID、可选的路由键和可序列化的字段字典。

示例用法:
    >>> from elasticload.document import register_document
    >>> register_document(User, doc_id=lambda u: str(u.pk), fields=lambda u: u.as_dict())
"""

from .exceptions import DocumentError, DocumentNotSupportedError
from .models import Document
from .tool import (
    document_fields,
    document_id,
    document_routing,
    register_document,
)

__all__ = [
    "Document",
    "document_id",
    "document_routing",
    "document_fields",
    "register_document",
    "DocumentError",
    "DocumentNotSupportedError",
]
