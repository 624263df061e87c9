"""批次转换（校验、请求体构造、响应解释）单元测试."""

from types import SimpleNamespace

import pytest

from elasticsink.sink.exceptions import BulkItemError, RecordValidationError
from elasticsink.sink.models import BulkRecord
from elasticsink.sink.translator import (
    build_bulk_payload,
    interpret_bulk_response,
    validate_record,
)


def record(doc_id: str = "1", **overrides) -> dict:
    data = {"index": "users", "type": "_doc", "id": doc_id, "body": {"n": doc_id}}
    data.update(overrides)
    return data


class TestValidateRecord:
    """validate_record 测试."""

    def test_valid_dict(self) -> None:
        """测试合法字典记录."""
        validate_record(record())

    def test_valid_dataclass(self) -> None:
        """测试合法 BulkRecord 记录."""
        validate_record(BulkRecord("users", "_doc", "1", {"name": "Alice"}))

    @pytest.mark.parametrize("field_name", ["index", "type", "id", "body"])
    def test_missing_key(self, field_name: str) -> None:
        """测试缺少字段."""
        data = record()
        del data[field_name]
        with pytest.raises(RecordValidationError, match=f"^{field_name} is required$"):
            validate_record(data)

    @pytest.mark.parametrize("field_name", ["index", "type", "id"])
    def test_empty_string(self, field_name: str) -> None:
        """测试字段为空字符串视为缺失."""
        with pytest.raises(RecordValidationError) as exc_info:
            validate_record(record(**{field_name: ""}))
        assert exc_info.value.field_name == field_name

    def test_empty_body_allowed(self) -> None:
        """测试空文档内容是合法的."""
        validate_record(record(body={}))

    def test_first_missing_field_reported(self) -> None:
        """测试多个字段缺失时报告第一个."""
        with pytest.raises(RecordValidationError, match="^type is required$"):
            validate_record({"index": "users", "id": "1"})

    def test_from_mapping_keeps_missing_as_none(self) -> None:
        """测试 from_mapping 保留缺失字段，由校验报告."""
        converted = BulkRecord.from_mapping({"type": "_doc", "id": "1", "body": {}})
        assert converted.index is None
        with pytest.raises(RecordValidationError, match="^index is required$"):
            validate_record(converted)


class TestBuildBulkPayload:
    """build_bulk_payload 测试."""

    def test_preserves_order(self) -> None:
        """测试请求体顺序与记录顺序一致."""
        payload = build_bulk_payload([record("3"), record("1"), record("2")])

        assert payload == [
            {"index": {"_index": "users", "_type": "_doc", "_id": "3"}},
            {"n": "3"},
            {"index": {"_index": "users", "_type": "_doc", "_id": "1"}},
            {"n": "1"},
            {"index": {"_index": "users", "_type": "_doc", "_id": "2"}},
            {"n": "2"},
        ]

    def test_without_type(self) -> None:
        """测试不携带 _type."""
        payload = build_bulk_payload([record()], include_type=False)
        assert payload[0] == {"index": {"_index": "users", "_id": "1"}}

    def test_empty_batch(self) -> None:
        """测试空批次."""
        assert build_bulk_payload([]) == []

    def test_invalid_record_aborts(self) -> None:
        """测试批次中任意记录不合法时不生成请求体."""
        bad = record("2")
        del bad["body"]
        with pytest.raises(RecordValidationError, match="^body is required$"):
            build_bulk_payload([record("1"), bad, record("3")])


class TestInterpretBulkResponse:
    """interpret_bulk_response 测试."""

    def test_success(self) -> None:
        """测试全部成功."""
        response = {"errors": False, "items": [{"index": {"status": 201}}]}
        assert interpret_bulk_response(response) is None

    def test_distinct_reasons_in_order(self) -> None:
        """测试错误类型去重并保持首次出现顺序."""
        response = {
            "errors": True,
            "items": [
                {"index": {"status": 500, "error": {"type": "InternalServerError"}}},
                {"index": {"status": 201}},
                {"index": {"status": 403, "error": {"type": "Forbidden"}}},
                {"index": {"status": 500, "error": {"type": "InternalServerError"}}},
            ],
        }

        error = interpret_bulk_response(response)

        assert isinstance(error, BulkItemError)
        assert str(error) == "InternalServerError,Forbidden"
        assert error.reasons == ["InternalServerError", "Forbidden"]
        assert len(error.failed_items) == 3

    def test_string_error(self) -> None:
        """测试错误为字符串时直接作为错误类型."""
        response = {
            "errors": True,
            "items": [{"create": {"status": 409, "error": "VersionConflict"}}],
        }
        assert str(interpret_bulk_response(response)) == "VersionConflict"

    def test_errors_flag_without_details(self) -> None:
        """测试 errors 为真但条目无错误信息."""
        error = interpret_bulk_response({"errors": True, "items": []})
        assert str(error) == "bulk request reported errors"
        assert error.reasons == []

    def test_non_mapping_items_skipped(self) -> None:
        """测试跳过无法识别的条目."""
        response = {
            "errors": True,
            "items": ["bad", None, {"index": {"error": {"type": "Forbidden"}}}],
        }
        error = interpret_bulk_response(response)
        assert str(error) == "Forbidden"
        assert len(error.failed_items) == 1

    def test_response_object(self) -> None:
        """测试带 body 属性的响应对象."""
        response = SimpleNamespace(
            body={
                "errors": True,
                "items": [{"index": {"error": {"type": "Forbidden"}}}],
            }
        )
        assert str(interpret_bulk_response(response)) == "Forbidden"
