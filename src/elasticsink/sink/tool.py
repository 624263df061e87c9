"""批量写入器核心工具类."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Iterable
from typing import Any

from ..typing import ErrorListener
from .exceptions import RecordValidationError, SinkClosedError, SinkConfigError
from .models import BulkRecord, FlushOutcome, SinkConfig, SinkStats
from .translator import build_bulk_payload, interpret_bulk_response

logger = logging.getLogger(__name__)


class ElasticsearchBulkSink:
    """Elasticsearch 批量写入器.

    缓冲写入的记录，缓冲区达到 high_water_mark 时通过一次 bulk 请求刷新。
    同一时间只有一个刷新在进行；填满缓冲区的那次写入会等待刷新完成后才返回，
    从而对生产者形成背压。刷新失败不会从 submit/close 抛出，而是通知错误监听器。

    Args:
        client: bulk 传输客户端，通常为 AsyncElasticsearch，必须提供 bulk(operations=...)
        config: 写入器配置，默认使用 SinkConfig 的默认值
        high_water_mark: 覆盖 config 中的 high_water_mark

    Raises:
        SinkConfigError: 未提供 client 或配置不合法时抛出

    Examples:
        >>> sink = ElasticsearchBulkSink(AsyncElasticsearch("http://localhost:9200"))
        >>> sink.add_error_listener(lambda error: print(error))
        >>> await sink.submit(BulkRecord("users", "_doc", "1", {"name": "Alice"}))
        >>> await sink.close()
    """

    def __init__(
        self,
        client: Any,
        config: SinkConfig | None = None,
        *,
        high_water_mark: int | None = None,
    ) -> None:
        if client is None:
            raise SinkConfigError("client is required")
        config = config or SinkConfig()
        if high_water_mark is not None:
            config = SinkConfig(
                high_water_mark=high_water_mark,
                include_type=config.include_type,
            )
        self._client = client
        self._config = config
        self._buffer: list[BulkRecord | dict[str, Any]] = []
        self._flush_lock = asyncio.Lock()
        self._flush_tasks: set[asyncio.Task] = set()
        self._listeners: list[ErrorListener] = []
        self._closed = False
        self.stats = SinkStats()
        logger.info(
            f"初始化批量写入器: high_water_mark={config.high_water_mark}, "
            f"include_type={config.include_type}"
        )

    @property
    def high_water_mark(self) -> int:
        """缓冲区容量."""
        return self._config.high_water_mark

    @property
    def config(self) -> SinkConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """当前缓冲区中尚未刷新的记录数."""
        return len(self._buffer)

    # ============================================================
    # 错误通道
    # ============================================================

    def add_error_listener(self, listener: ErrorListener) -> None:
        """注册错误监听器，刷新失败时以异常对象调用.

        监听器必须是同步可调用对象，在刷新所在的事件循环中直接调用。

        Raises:
            TypeError: 监听器是协程函数
        """
        if inspect.iscoroutinefunction(listener):
            raise TypeError(f"错误监听器必须是同步可调用对象: {listener!r}")
        self._listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        """移除错误监听器."""
        self._listeners.remove(listener)

    def _emit_error(self, error: BaseException) -> None:
        if not self._listeners:
            logger.error(f"刷新失败且没有错误监听器: {error!r}")
            return
        for listener in list(self._listeners):
            try:
                listener(error)
            except Exception:
                logger.exception(f"错误监听器 {listener!r} 处理失败")

    # ============================================================
    # 写入
    # ============================================================

    async def submit(self, record: BulkRecord | dict[str, Any]) -> None:
        """写入一条记录.

        缓冲区未满时立即返回；写入后缓冲区达到 high_water_mark 时，
        先刷新该缓冲区，刷新完成（无论成败）后才返回。

        Args:
            record: 待写入的记录

        Raises:
            SinkClosedError: 写入器已关闭
        """
        if self._closed:
            raise SinkClosedError("写入器已关闭，不能继续写入")
        self._buffer.append(record)
        self.stats.submitted += 1
        if len(self._buffer) < self._config.high_water_mark:
            return
        await self._flush()

    async def submit_many(self, records: Iterable[BulkRecord | dict[str, Any]]) -> int:
        """按顺序写入多条记录，背压规则与 submit 相同.

        Args:
            records: 记录迭代器

        Returns:
            写入的记录数
        """
        count = 0
        for record in records:
            await self.submit(record)
            count += 1
        return count

    async def flush(self) -> FlushOutcome:
        """立即刷新当前缓冲区.

        Returns:
            本次刷新的结果；写入器已关闭时返回空的成功结果
        """
        if self._closed:
            return FlushOutcome()
        return await self._flush()

    async def close(self, final_record: BulkRecord | dict[str, Any] | None = None) -> None:
        """关闭写入器.

        写入可选的最后一条记录，然后无条件刷新剩余缓冲区，刷新完成后返回。
        重复关闭不做任何操作。

        Args:
            final_record: 关闭前写入的最后一条记录
        """
        if self._closed:
            return
        if final_record is not None:
            self._buffer.append(final_record)
            self.stats.submitted += 1
        self._closed = True
        await self._flush()
        logger.info(
            f"批量写入器已关闭: 刷新 {self.stats.flush_count} 次, "
            f"写入 {self.stats.flushed_records} 条, 失败 {self.stats.failed_flushes} 次"
        )

    async def __aenter__(self) -> ElasticsearchBulkSink:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ============================================================
    # 刷新
    # ============================================================

    async def _flush(self) -> FlushOutcome:
        """取出缓冲区快照并在独立任务中写入.

        取快照后缓冲区立即替换为新列表，刷新期间的写入进入下一批次。
        刷新任务不随等待方取消而中止，快照总会被写入或报告错误。
        """
        batch, self._buffer = self._buffer, []
        task = asyncio.ensure_future(self._flush_snapshot(batch))
        self._flush_tasks.add(task)
        task.add_done_callback(self._flush_tasks.discard)
        return await asyncio.shield(task)

    async def _flush_snapshot(self, batch: list[BulkRecord | dict[str, Any]]) -> FlushOutcome:
        # 空快照也要排队，保证返回时之前的刷新均已完成
        async with self._flush_lock:
            if not batch:
                return FlushOutcome()

            outcome = await self._flush_batch(batch)
            self.stats.record_outcome(outcome)
            if outcome.error is not None:
                self._emit_error(outcome.error)
            return outcome

    async def _flush_batch(self, batch: list[BulkRecord | dict[str, Any]]) -> FlushOutcome:
        start_time = time.time()
        logger.debug(f"开始刷新 {len(batch)} 条记录")

        try:
            payload = build_bulk_payload(batch, include_type=self._config.include_type)
        except RecordValidationError as e:
            logger.warning(f"批次校验失败，放弃刷新 {len(batch)} 条记录: {e}")
            return FlushOutcome(len(batch), e, time.time() - start_time)

        try:
            response = self._client.bulk(operations=payload)
            if inspect.isawaitable(response):
                response = await response
        except Exception as e:
            logger.warning(f"bulk 请求失败: {e!r}")
            return FlushOutcome(len(batch), e, time.time() - start_time)

        try:
            error = interpret_bulk_response(response)
        except Exception as e:
            logger.warning(f"bulk 响应解析失败: {e!r}")
            return FlushOutcome(len(batch), e, time.time() - start_time)
        took = time.time() - start_time
        if error is not None:
            logger.warning(
                f"bulk 请求部分失败: {len(error.failed_items)}/{len(batch)} 条, "
                f"原因: {error}"
            )
            return FlushOutcome(len(batch), error, took)

        logger.info(f"刷新完成: {len(batch)} 条记录, 耗时 {took:.3f}秒")
        return FlushOutcome(len(batch), None, took)
