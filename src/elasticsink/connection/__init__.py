"""客户端工厂模块 - 创建 bulk 传输所用的 AsyncElasticsearch 客户端.

主要组件:
    - AsyncClientFactory: 客户端工厂，负责客户端创建、缓存与关闭
    - ClusterConfig: 集群配置模型
    - ConnectionConfig: 传输层配置模型

使用示例:
    from elasticsink.connection import AsyncClientFactory, ClusterConfig

    factory = AsyncClientFactory(ClusterConfig(hosts=["http://localhost:9200"]))
    sink = factory.create_sink()
"""

from .exceptions import ClientFactoryError, ConnectionConfigError
from .models import ClusterConfig, ConnectionConfig
from .tool import AsyncClientFactory

__all__ = [
    # 工厂
    "AsyncClientFactory",
    # 模型
    "ClusterConfig",
    "ConnectionConfig",
    # 异常
    "ClientFactoryError",
    "ConnectionConfigError",
]
