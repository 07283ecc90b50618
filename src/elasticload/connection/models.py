"""集群配置数据模型定义模块."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ConnectionConfigError


@dataclass
class ClusterConfig:
    """集群配置模型.

    定义 ES 集群的连接信息、认证方式，以及各索引的上传配置。

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        indexes: 索引名称到上传配置字典（store、sources、bulk_page_size、
            bulk_wait_interval）的映射

    Raises:
        ConnectionConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ClusterConfig(
        ...     hosts=["http://localhost:9200"],
        ...     indexes={"posts": {"store": store, "sources": ["posts"]}},
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True
    request_timeout: int = 30
    indexes: dict[str, dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """校验集群配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )

    @classmethod
    def from_env(
        cls,
        prefix: str = "ELASTICSEARCH_",
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "ClusterConfig":
        """从环境变量读取集群配置.

        读取 {prefix}URL（逗号分隔的多个地址）、{prefix}USERNAME、
        {prefix}PASSWORD、{prefix}API_KEY、{prefix}REQUEST_TIMEOUT。

        Args:
            prefix: 环境变量前缀
            environ: 环境变量字典，默认 os.environ
            **overrides: 覆盖环境变量的字段，例如 indexes

        Raises:
            ConnectionConfigError: URL 未设置或超时不是整数时抛出
        """
        env = os.environ if environ is None else environ
        url = env.get(f"{prefix}URL", "")
        hosts = [host.strip() for host in url.split(",") if host.strip()]

        kwargs: dict[str, Any] = {
            "hosts": hosts,
            "username": env.get(f"{prefix}USERNAME"),
            "password": env.get(f"{prefix}PASSWORD"),
            "api_key": env.get(f"{prefix}API_KEY"),
        }
        timeout = env.get(f"{prefix}REQUEST_TIMEOUT")
        if timeout:
            try:
                kwargs["request_timeout"] = int(timeout)
            except ValueError as e:
                raise ConnectionConfigError(
                    f"{prefix}REQUEST_TIMEOUT 必须是整数，当前值: {timeout}"
                ) from e

        kwargs.update(overrides)
        return cls(**kwargs)
