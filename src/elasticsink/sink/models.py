"""批量写入器数据模型定义模块."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import SinkConfigError

DEFAULT_HIGH_WATER_MARK = 64

# 校验顺序即为报错顺序
REQUIRED_FIELDS = ("index", "type", "id", "body")


@dataclass
class BulkRecord:
    """待写入的单条记录.

    字段缺失不在构造时校验，而是在刷新时由批次校验统一报告。

    Attributes:
        index: 目标索引名称
        type: 文档类型
        id: 文档ID
        body: 文档内容
    """

    index: str | None = None
    type: str | None = None
    id: str | None = None
    body: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BulkRecord":
        """从字典构造记录，缺失的键保留为 None."""
        return cls(
            index=data.get("index"),
            type=data.get("type"),
            id=data.get("id"),
            body=data.get("body"),
        )


@dataclass(frozen=True)
class SinkConfig:
    """写入器配置模型.

    Attributes:
        high_water_mark: 缓冲区容量，达到该数量时触发刷新，默认 64，必须 >= 1
        include_type: 动作描述中是否携带 _type，Elasticsearch 8 及以上需设为 False

    Raises:
        SinkConfigError: 当参数不合法时抛出

    Examples:
        >>> config = SinkConfig(high_water_mark=500)
    """

    high_water_mark: int = DEFAULT_HIGH_WATER_MARK
    include_type: bool = True

    def __post_init__(self) -> None:
        """校验写入器配置参数合法性."""
        if not isinstance(self.high_water_mark, int) or isinstance(
            self.high_water_mark, bool
        ):
            raise SinkConfigError(
                f"high_water_mark 必须为整数，当前值: {self.high_water_mark!r}"
            )
        if self.high_water_mark < 1:
            raise SinkConfigError(
                f"high_water_mark 必须 >= 1，当前值: {self.high_water_mark}"
            )


@dataclass
class FlushOutcome:
    """单次刷新结果.

    Attributes:
        record_count: 本次刷新的记录数
        error: 失败原因，成功时为 None
        took: 耗时（秒）
    """

    record_count: int = 0
    error: BaseException | None = None
    took: float = 0.0

    def is_success(self) -> bool:
        """判断刷新是否成功."""
        return self.error is None


@dataclass
class SinkStats:
    """写入器运行统计.

    Attributes:
        submitted: 已接收的记录数
        flush_count: 刷新次数（不含空缓冲区刷新）
        flushed_records: 成功写入的记录数
        failed_flushes: 失败的刷新次数
        last_error: 最近一次刷新失败的原因
    """

    submitted: int = 0
    flush_count: int = 0
    flushed_records: int = 0
    failed_flushes: int = 0
    last_error: BaseException | None = field(default=None, repr=False)

    def record_outcome(self, outcome: FlushOutcome) -> None:
        """累计一次刷新结果."""
        self.flush_count += 1
        if outcome.is_success():
            self.flushed_records += outcome.record_count
        else:
            self.failed_flushes += 1
            self.last_error = outcome.error
