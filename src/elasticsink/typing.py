"""elasticsink 类型定义模块."""

from collections.abc import Callable
from typing import Any, Dict, List

# bulk 请求体类型
# 格式: [动作描述, 文档, 动作描述, 文档, ...]
BulkPayload = List[Dict[str, Any]]

# bulk 响应体类型
BulkResponseDict = Dict[str, Any]

# 错误监听器类型，同步可调用对象，接收刷新失败时的异常
ErrorListener = Callable[[BaseException], Any]
