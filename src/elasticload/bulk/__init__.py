"""批量上传模块.

该模块提供流式的 Elasticsearch 批量索引功能，包括：
- 记录编码为 _bulk 动作（header 行 + body 行）
- 固定大小分页与页间节流
- 逐页提交，收集单个文档与传输层错误而不中断上传
- 按数据源划分的事务边界

示例用法:
    >>> from elasticload.bulk import upload
    >>> result = upload(es_client, "posts", {"store": store, "sources": ["posts"]})
    >>> print(result.ok, result.get_error_summary())
"""

from .collector import collect_errors, error_from_item
from .encoder import compact_dumps, encode, encode_strict, render_action
from .exceptions import (
    BulkOperationError,
    BulkTransportError,
    EncodingError,
    UploadConfigError,
)
from .models import (
    BulkAction,
    BulkErrorItem,
    BulkOperation,
    IndexUploadConfig,
    SubmissionResult,
    UploadResult,
)
from .pager import build_pages, chunk, intersperse
from .submitter import BulkSubmitter, parse_response
from .tool import BulkUploader, upload

__all__ = [
    "BulkAction",
    "BulkErrorItem",
    "BulkOperation",
    "IndexUploadConfig",
    "SubmissionResult",
    "UploadResult",
    "BulkUploader",
    "BulkSubmitter",
    "upload",
    "encode",
    "encode_strict",
    "render_action",
    "compact_dumps",
    "chunk",
    "intersperse",
    "build_pages",
    "parse_response",
    "collect_errors",
    "error_from_item",
    "BulkOperationError",
    "BulkTransportError",
    "EncodingError",
    "UploadConfigError",
]
