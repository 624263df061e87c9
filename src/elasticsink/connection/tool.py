"""客户端工厂工具模块.

提供 AsyncClientFactory 类，根据集群配置创建 AsyncElasticsearch 客户端，
并创建绑定该客户端的批量写入器。

使用示例:
    from elasticsink.connection import AsyncClientFactory, ClusterConfig

    async with AsyncClientFactory(ClusterConfig(hosts=["http://localhost:9200"])) as factory:
        async with factory.create_sink(high_water_mark=500) as sink:
            await sink.submit(record)
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import AsyncElasticsearch

from ..sink.models import SinkConfig
from ..sink.tool import ElasticsearchBulkSink
from .models import ClusterConfig, ConnectionConfig

logger = logging.getLogger(__name__)


class AsyncClientFactory:
    """AsyncElasticsearch 客户端工厂.

    惰性创建并缓存客户端，支持多种认证方式和异步上下文管理器。

    Attributes:
        _cluster: 集群配置
        _connection_config: 传输层配置
        _client: 已创建的客户端，未创建时为 None

    Examples:
        >>> factory = AsyncClientFactory(ClusterConfig(hosts=["http://localhost:9200"]))
        >>> client = factory.get_client()
    """

    def __init__(
        self,
        cluster: ClusterConfig,
        connection_config: ConnectionConfig | None = None,
    ) -> None:
        self._cluster = cluster
        self._connection_config = connection_config or ConnectionConfig()
        self._client: AsyncElasticsearch | None = None

    def _create_client(self) -> AsyncElasticsearch:
        """根据集群配置创建 AsyncElasticsearch 客户端实例.

        根据认证方式（Basic Auth / API Key / Bearer Token / 无认证）
        和 SSL 配置构建客户端。
        """
        kwargs: dict[str, Any] = {
            "hosts": self._cluster.hosts,
            "max_retries": self._connection_config.max_retries,
            "retry_on_timeout": self._connection_config.retry_on_timeout,
            "request_timeout": self._connection_config.request_timeout,
            "http_compress": self._connection_config.http_compress,
        }

        # Basic Auth 认证
        if self._cluster.username and self._cluster.password:
            kwargs["basic_auth"] = (self._cluster.username, self._cluster.password)

        # API Key 认证
        if self._cluster.api_key:
            kwargs["api_key"] = self._cluster.api_key

        # Bearer Token 认证
        if self._cluster.bearer_token:
            kwargs["bearer_auth"] = self._cluster.bearer_token

        # SSL/TLS 配置
        if self._cluster.ca_certs:
            kwargs["ca_certs"] = self._cluster.ca_certs
        kwargs["verify_certs"] = self._cluster.verify_certs

        logger.info(f"创建 AsyncElasticsearch 客户端: hosts={self._cluster.hosts}")
        return AsyncElasticsearch(**kwargs)

    def get_client(self) -> AsyncElasticsearch:
        """获取客户端，首次调用时创建并缓存."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def create_sink(
        self,
        config: SinkConfig | None = None,
        **kwargs: Any,
    ) -> ElasticsearchBulkSink:
        """创建绑定本工厂客户端的批量写入器.

        Args:
            config: 写入器配置
            **kwargs: 透传给 ElasticsearchBulkSink，例如 high_water_mark

        Returns:
            批量写入器实例
        """
        return ElasticsearchBulkSink(self.get_client(), config, **kwargs)

    # ============================================================
    # 生命周期管理
    # ============================================================

    async def __aenter__(self) -> AsyncClientFactory:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """异步上下文管理器退出，自动关闭客户端."""
        await self.close()

    async def close(self) -> None:
        """关闭已创建的客户端连接.

        关闭后可重新调用 get_client() 创建新的客户端。
        """
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.close()
