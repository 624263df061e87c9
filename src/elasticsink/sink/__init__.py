"""批量写入器模块.

该模块提供缓冲式的 Elasticsearch 批量写入功能，包括：
- 按 high_water_mark 缓冲记录并自动刷新
- 填满缓冲区的写入等待刷新完成（背压）
- 关闭时刷新剩余记录
- 通过错误监听器报告校验失败、传输失败和部分条目失败

示例用法:
    >>> from elasticsink.sink import ElasticsearchBulkSink, BulkRecord
    >>> sink = ElasticsearchBulkSink(es_client, high_water_mark=500)
    >>> sink.add_error_listener(print)
    >>> await sink.submit(BulkRecord("users", "_doc", "1", {"name": "Alice"}))
    >>> await sink.close()
"""

from .exceptions import (
    BulkItemError,
    BulkSinkError,
    RecordValidationError,
    SinkClosedError,
    SinkConfigError,
)
from .models import (
    DEFAULT_HIGH_WATER_MARK,
    BulkRecord,
    FlushOutcome,
    SinkConfig,
    SinkStats,
)
from .tool import ElasticsearchBulkSink
from .translator import build_bulk_payload, interpret_bulk_response, validate_record

__all__ = [
    "DEFAULT_HIGH_WATER_MARK",
    "BulkRecord",
    "FlushOutcome",
    "SinkConfig",
    "SinkStats",
    "ElasticsearchBulkSink",
    "build_bulk_payload",
    "interpret_bulk_response",
    "validate_record",
    "BulkSinkError",
    "SinkConfigError",
    "SinkClosedError",
    "RecordValidationError",
    "BulkItemError",
]
