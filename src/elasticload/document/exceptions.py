"""文档能力异常定义模块."""

from ..exceptions import ElasticLoadError


class DocumentError(ElasticLoadError):
    """文档能力基础异常类."""

    pass


class DocumentNotSupportedError(DocumentError):
    """值未实现 Document 能力时抛出.

    Attributes:
        value: 不受支持的值
    """

    def __init__(self, value, message: str | None = None):
        self.value = value
        if message is None:
            message = (
                f"Document 能力未对 {value!r} (类型 {type(value).__name__}) 实现，"
                f"请实现 doc_id/routing/to_fields 或调用 register_document 注册适配器"
            )
        super().__init__(message)
