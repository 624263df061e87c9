"""批量写入器使用示例.

本文件展示了如何使用 ElasticsearchBulkSink 缓冲写入记录并批量刷新到 Elasticsearch。
"""

import asyncio
import logging

from elasticsink import (
    AsyncClientFactory,
    BulkRecord,
    ClusterConfig,
    ConnectionConfig,
    ElasticsearchBulkSink,
    SinkConfig,
)

logging.basicConfig(level=logging.INFO)

factory = AsyncClientFactory(
    ClusterConfig(hosts=["http://localhost:9200"]),
    ConnectionConfig(max_retries=3, request_timeout=30),
)


# ==================== 示例1：逐条写入 ====================
async def example_submit():
    """逐条写入，缓冲区满 500 条时自动刷新."""
    sink = factory.create_sink(SinkConfig(high_water_mark=500, include_type=False))
    sink.add_error_listener(lambda error: print(f"刷新失败: {error}"))

    for i in range(1200):
        await sink.submit(
            BulkRecord(index="users", type="_doc", id=str(i), body={"seq": i})
        )

    # 关闭时刷新剩余的 200 条
    await sink.close()

    print("写入结果:")
    print(f"  提交: {sink.stats.submitted}")
    print(f"  刷新次数: {sink.stats.flush_count}")
    print(f"  写入: {sink.stats.flushed_records}")
    print(f"  失败刷新: {sink.stats.failed_flushes}")


# ==================== 示例2：上下文管理器与字典记录 ====================
async def example_context_manager():
    """使用 async with 自动关闭写入器."""
    documents = [
        {"id": "1", "name": "张三", "city": "北京"},
        {"id": "2", "name": "李四", "city": "上海"},
        {"id": "3", "name": "王五", "city": "广州"},
    ]

    async with ElasticsearchBulkSink(
        factory.get_client(), high_water_mark=2, config=SinkConfig(include_type=False)
    ) as sink:
        sink.add_error_listener(print)
        await sink.submit_many(
            {"index": "users", "type": "_doc", "id": doc["id"], "body": doc}
            for doc in documents
        )


async def main():
    try:
        await example_submit()
        await example_context_manager()
    finally:
        await factory.close()


if __name__ == "__main__":
    asyncio.run(main())
