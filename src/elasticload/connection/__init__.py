"""ES 客户端工厂模块 - 管理 Elasticsearch 客户端的创建、认证配置和生命周期.

主要组件:
    - ESClientFactory: 客户端工厂
    - ClusterConfig: 集群配置模型（含各索引的上传配置）

使用示例:
    from elasticload.connection import ESClientFactory, ClusterConfig

    factory = ESClientFactory(ClusterConfig(hosts=["http://localhost:9200"]))
    client = factory.get_client()
"""

from .exceptions import ConnectionConfigError, ESClientFactoryError
from .models import ClusterConfig
from .tool import ESClientFactory

__all__ = [
    "ESClientFactory",
    "ClusterConfig",
    "ESClientFactoryError",
    "ConnectionConfigError",
]
