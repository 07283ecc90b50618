"""批量上传异常定义模块."""

from typing import Any

from ..exceptions import ElasticLoadError


class BulkOperationError(ElasticLoadError):
    """批量操作基础异常类."""

    pass


class EncodingError(BulkOperationError):
    """记录无法编码为批量动作时的异常.

    Attributes:
        value: 无法编码的记录
        reason: 失败原因
    """

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"无法编码 {value!r}: {reason}")


class BulkTransportError(BulkOperationError):
    """批量请求本身失败的异常（网络错误、非 2xx 响应、响应无法解析）.

    Attributes:
        index_name: 目标索引名称
        page_size: 失败页中的动作数
    """

    def __init__(self, index_name: str, page_size: int, reason: str):
        self.index_name = index_name
        self.page_size = page_size
        super().__init__(
            f"索引 '{index_name}' 的批量请求失败（{page_size} 个动作）: {reason}"
        )


class UploadConfigError(BulkOperationError):
    """上传配置校验异常."""

    pass
