"""elasticload - Elasticsearch 流式批量索引工具包.

把任意规模的数据源中的记录编码为 _bulk 动作，分页提交，并汇总单个文档的失败，
而不会因为部分失败中断整个上传。

主要功能:
    - Document / register_document: 记录的可索引能力
    - IterableStore / DBAPIStore: 数据源存储
    - BulkUploader / upload: 上传编排
    - ESClientFactory / ClusterConfig: 客户端与配置

使用示例:
    from elasticload import IterableStore, upload

    store = IterableStore({"posts": posts})
    result = upload(es_client, "posts", {"store": store, "sources": ["posts"]})
"""

__version__ = "0.1.0"

# 导出批量上传
from elasticload.bulk import (
    BulkErrorItem,
    BulkUploader,
    IndexUploadConfig,
    UploadResult,
    encode,
    encode_strict,
    upload,
)

# 导出连接配置
from elasticload.connection import ClusterConfig, ESClientFactory

# 导出文档能力
from elasticload.document import Document, register_document

# 导出异常
from elasticload.exceptions import ElasticLoadError
from elasticload.bulk.exceptions import (
    BulkOperationError,
    BulkTransportError,
    EncodingError,
    UploadConfigError,
)
from elasticload.document.exceptions import DocumentNotSupportedError
from elasticload.store import DBAPIStore, IterableStore, Store, StoreError

__all__ = [
    # 版本
    "__version__",
    # 上传
    "BulkUploader",
    "IndexUploadConfig",
    "UploadResult",
    "BulkErrorItem",
    "upload",
    "encode",
    "encode_strict",
    # 文档
    "Document",
    "register_document",
    # 存储
    "Store",
    "IterableStore",
    "DBAPIStore",
    # 连接
    "ClusterConfig",
    "ESClientFactory",
    # 异常
    "ElasticLoadError",
    "BulkOperationError",
    "BulkTransportError",
    "EncodingError",
    "UploadConfigError",
    "DocumentNotSupportedError",
    "StoreError",
]
