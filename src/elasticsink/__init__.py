"""elasticsink - Buffering Bulk Sink for Elasticsearch.

这是一个缓冲式的 Elasticsearch 批量写入库。

主要功能:
    - ElasticsearchBulkSink: 按容量缓冲记录并通过 bulk 请求刷新
    - AsyncClientFactory: 创建 bulk 传输所用的 AsyncElasticsearch 客户端

使用示例:
    from elasticsink import BulkRecord, ElasticsearchBulkSink

    async with ElasticsearchBulkSink(es_client, high_water_mark=500) as sink:
        sink.add_error_listener(print)
        await sink.submit(BulkRecord("users", "_doc", "1", {"name": "Alice"}))
"""

__version__ = "0.1.0"

# 导出客户端工厂
from elasticsink.connection import AsyncClientFactory, ClusterConfig, ConnectionConfig

# 导出异常
from elasticsink.exceptions import ElasticSinkError

# 导出写入器
from elasticsink.sink import (
    BulkItemError,
    BulkRecord,
    ElasticsearchBulkSink,
    FlushOutcome,
    RecordValidationError,
    SinkClosedError,
    SinkConfig,
    SinkConfigError,
    SinkStats,
)

__all__ = [
    # 版本
    "__version__",
    # 写入器
    "ElasticsearchBulkSink",
    "BulkRecord",
    "SinkConfig",
    "FlushOutcome",
    "SinkStats",
    # 客户端工厂
    "AsyncClientFactory",
    "ClusterConfig",
    "ConnectionConfig",
    # 异常
    "ElasticSinkError",
    "SinkConfigError",
    "SinkClosedError",
    "RecordValidationError",
    "BulkItemError",
]
