"""elasticsink 异常定义模块."""


class ElasticSinkError(Exception):
    """elasticsink 基础异常类."""

    pass
