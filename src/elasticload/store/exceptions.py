"""数据源存储异常定义模块."""

from ..exceptions import ElasticLoadError


class StoreError(ElasticLoadError):
    """存储基础异常类."""

    pass


class SourceNotFoundError(StoreError):
    """请求的数据源在存储中不存在."""

    pass
