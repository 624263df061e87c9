"""批次转换模块.

负责把缓冲区快照转换为 bulk 请求体，以及把 bulk 响应解释为统一的成功/失败结果。
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..typing import BulkPayload, BulkResponseDict
from .exceptions import BulkItemError, RecordValidationError
from .models import REQUIRED_FIELDS, BulkRecord

logger = logging.getLogger(__name__)


def _get_field(record: BulkRecord | Mapping[str, Any], name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _is_missing(name: str, value: Any) -> bool:
    if value is None:
        return True
    # body 允许为空字典等“假值”，其余字段不允许为空字符串
    return name != "body" and value == ""


def validate_record(record: BulkRecord | Mapping[str, Any]) -> None:
    """校验记录的必填字段.

    按 index、type、id、body 的顺序检查，遇到第一个缺失字段即抛出。

    Args:
        record: 待校验的记录

    Raises:
        RecordValidationError: 记录缺少必填字段
    """
    for name in REQUIRED_FIELDS:
        if _is_missing(name, _get_field(record, name)):
            raise RecordValidationError(name)


def build_bulk_payload(
    records: Sequence[BulkRecord | Mapping[str, Any]],
    include_type: bool = True,
) -> BulkPayload:
    """构造 bulk 请求体.

    先校验整个批次，任何一条记录不合法则整批放弃，不生成请求体。

    Args:
        records: 缓冲区快照
        include_type: 动作描述中是否携带 _type

    Returns:
        动作描述与文档交替排列的列表，顺序与 records 一致

    Raises:
        RecordValidationError: 批次中存在缺少必填字段的记录
    """
    for record in records:
        validate_record(record)

    payload: BulkPayload = []
    for record in records:
        action: dict[str, Any] = {"_index": _get_field(record, "index")}
        if include_type:
            action["_type"] = _get_field(record, "type")
        action["_id"] = _get_field(record, "id")
        payload.append({"index": action})
        payload.append(_get_field(record, "body"))
    return payload


def _response_body(response: Any) -> BulkResponseDict:
    # ObjectApiResponse 通过 body 暴露原始字典
    body = getattr(response, "body", response)
    if isinstance(body, Mapping):
        return dict(body)
    return {}


def _error_type(error: Any) -> str | None:
    if isinstance(error, Mapping):
        return error.get("type")
    if error:
        return str(error)
    return None


def interpret_bulk_response(response: Any) -> BulkItemError | None:
    """解释 bulk 响应.

    顶层 errors 为假时视为全部成功；否则收集所有失败条目的错误类型，
    去重并保持首次出现的顺序。

    Args:
        response: bulk 响应（ObjectApiResponse 或字典）

    Returns:
        部分失败时返回 BulkItemError，全部成功时返回 None
    """
    body = _response_body(response)
    if not body.get("errors"):
        return None

    reasons: list[str] = []
    failed_items: list[dict[str, Any]] = []
    for item in body.get("items") or []:
        # 每个条目形如 {"index": {"_id": ..., "status": ..., "error": {...}}}
        if not isinstance(item, Mapping):
            logger.warning(f"忽略无法识别的 bulk 响应条目: {item!r}")
            continue
        for result in item.values():
            if not isinstance(result, Mapping) or "error" not in result:
                continue
            failed_items.append(dict(result))
            error_type = _error_type(result["error"])
            if error_type and error_type not in reasons:
                reasons.append(error_type)

    logger.debug(f"bulk 响应包含 {len(failed_items)} 个失败条目: {reasons}")
    return BulkItemError(reasons, failed_items)
