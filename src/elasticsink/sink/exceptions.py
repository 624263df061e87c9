"""批量写入器异常定义模块."""

from typing import Any

from ..exceptions import ElasticSinkError


class BulkSinkError(ElasticSinkError):
    """批量写入器基础异常类."""

    pass


class SinkConfigError(BulkSinkError):
    """写入器配置异常.

    构造时配置不合法（缺少客户端、high_water_mark 小于 1 等）时抛出。
    """

    pass


class SinkClosedError(BulkSinkError):
    """写入器已关闭后继续写入时抛出."""

    pass


class RecordValidationError(BulkSinkError):
    """记录缺少必填字段异常.

    Attributes:
        field_name: 第一个缺失的字段名
    """

    def __init__(self, field_name: str):
        super().__init__(f"{field_name} is required")
        self.field_name = field_name


class BulkItemError(BulkSinkError):
    """bulk 请求部分条目失败异常.

    消息为去重后的错误类型，按首次出现顺序以逗号连接。

    Attributes:
        reasons: 去重后的错误类型列表
        failed_items: 失败条目的原始响应
    """

    def __init__(
        self,
        reasons: list[str],
        failed_items: list[dict[str, Any]] | None = None,
    ):
        message = ",".join(reasons) if reasons else "bulk request reported errors"
        super().__init__(message)
        self.reasons = reasons
        self.failed_items = failed_items or []
