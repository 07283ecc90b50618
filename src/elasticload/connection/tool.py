"""ES 客户端工厂工具模块.

提供 ESClientFactory 类，根据 ClusterConfig 创建并缓存 Elasticsearch 客户端，
并解析各索引的上传配置。

使用示例:
    from elasticload.connection import ESClientFactory, ClusterConfig

    with ESClientFactory(ClusterConfig.from_env(indexes=indexes)) as factory:
        result = factory.upload("posts")
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from ..bulk import BulkUploader, IndexUploadConfig, UploadResult
from .exceptions import ConnectionConfigError
from .models import ClusterConfig

logger = logging.getLogger(__name__)


class ESClientFactory:
    """Elasticsearch 客户端工厂.

    惰性创建并缓存客户端，支持多种认证方式和上下文管理器。

    Attributes:
        _cluster_config: 集群配置
        _client: 缓存的客户端

    Examples:
        >>> factory = ESClientFactory(ClusterConfig(hosts=["http://localhost:9200"]))
        >>> client = factory.get_client()
    """

    def __init__(self, cluster_config: ClusterConfig) -> None:
        """初始化客户端工厂.

        Args:
            cluster_config: 集群配置

        Raises:
            ConnectionConfigError: 当 cluster_config 为 None 时抛出
        """
        if cluster_config is None:
            raise ConnectionConfigError("cluster_config 不能为 None")
        self._cluster_config = cluster_config
        self._client: Elasticsearch | None = None

    def _create_client(self) -> Elasticsearch:
        """根据认证方式（Basic Auth / API Key / Bearer Token / 无认证）和 SSL 配置构建客户端."""
        config = self._cluster_config
        kwargs: dict = {
            "hosts": config.hosts,
            "request_timeout": config.request_timeout,
        }

        # Basic Auth 认证
        if config.username and config.password:
            kwargs["basic_auth"] = (config.username, config.password)

        # API Key 认证
        if config.api_key:
            kwargs["api_key"] = config.api_key

        # Bearer Token 认证
        if config.bearer_token:
            kwargs["bearer_auth"] = config.bearer_token

        # SSL/TLS 配置
        if config.ca_certs:
            kwargs["ca_certs"] = config.ca_certs
        kwargs["verify_certs"] = config.verify_certs

        logger.info(f"创建 Elasticsearch 客户端: hosts={config.hosts}")
        return Elasticsearch(**kwargs)

    def get_client(self) -> Elasticsearch:
        """获取客户端，首次调用时创建."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def index_settings(self, index_name: str) -> dict[str, Any]:
        """获取索引的上传配置.

        Raises:
            ConnectionConfigError: 索引未配置时抛出
        """
        try:
            return self._cluster_config.indexes[index_name]
        except KeyError:
            raise ConnectionConfigError(
                f"未找到索引 '{index_name}' 的上传配置"
            ) from None

    def upload(self, index_name: str, target_index: str | None = None) -> UploadResult:
        """按索引配置上传数据.

        Args:
            index_name: 配置中的索引名称
            target_index: 实际写入的索引名称（例如带版本后缀的新索引），默认同 index_name
        """
        config = IndexUploadConfig.from_settings(
            target_index or index_name, self.index_settings(index_name)
        )
        return BulkUploader(self.get_client()).upload(config)

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ESClientFactory:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭客户端."""
        self.close()

    def close(self) -> None:
        """关闭已创建的客户端连接并清空缓存."""
        if self._client is not None:
            try:
                self._client.close()
            except Exception as e:
                logger.warning(f"关闭客户端失败: {str(e)}")
            self._client = None
