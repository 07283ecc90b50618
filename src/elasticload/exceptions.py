"""elasticload 异常定义模块."""


class ElasticLoadError(Exception):
    """elasticload 基础异常类."""

    pass
