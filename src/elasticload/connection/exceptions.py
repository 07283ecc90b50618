"""ES 客户端工厂异常定义模块."""

from ..exceptions import ElasticLoadError


class ESClientFactoryError(ElasticLoadError):
    """客户端工厂基础异常类.

    所有客户端工厂相关异常的基类，继承自 ElasticLoadError。
    """

    pass


class ConnectionConfigError(ESClientFactoryError):
    """连接配置校验异常.

    当集群配置参数不合法时抛出，例如 hosts 为空、request_timeout 小于 0、
    请求的索引没有上传配置等。
    """

    pass
