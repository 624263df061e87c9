"""数据模型（ClusterConfig、ConnectionConfig）单元测试."""

import pytest

from elasticsink.connection.exceptions import ConnectionConfigError
from elasticsink.connection.models import ClusterConfig, ConnectionConfig


class TestClusterConfig:
    """ClusterConfig 数据模型测试."""

    def test_create_with_hosts(self) -> None:
        """测试使用 hosts 创建配置."""
        config = ClusterConfig(hosts=["http://localhost:9200"])
        assert config.hosts == ["http://localhost:9200"]
        assert config.verify_certs is True
        assert config.username is None

    def test_create_with_basic_auth(self) -> None:
        """测试使用 Basic Auth 创建配置."""
        config = ClusterConfig(
            hosts=["http://localhost:9200"],
            username="elastic",
            password="changeme",
        )
        assert config.username == "elastic"
        assert config.password == "changeme"

    def test_empty_hosts_raises_error(self) -> None:
        """测试空 hosts 抛出异常."""
        with pytest.raises(ConnectionConfigError, match="hosts 不能为空"):
            ClusterConfig(hosts=[])

    def test_default_hosts_raises_error(self) -> None:
        """测试未提供 hosts 抛出异常."""
        with pytest.raises(ConnectionConfigError):
            ClusterConfig()


class TestConnectionConfig:
    """ConnectionConfig 数据模型测试."""

    def test_defaults(self) -> None:
        """测试默认值."""
        config = ConnectionConfig()
        assert config.max_retries == 3
        assert config.retry_on_timeout is True
        assert config.request_timeout == 30
        assert config.http_compress is True

    def test_zero_values_allowed(self) -> None:
        """测试边界值 0 合法."""
        config = ConnectionConfig(max_retries=0, request_timeout=0)
        assert config.max_retries == 0
        assert config.request_timeout == 0

    def test_negative_max_retries(self) -> None:
        """测试 max_retries 为负数时抛出."""
        with pytest.raises(ConnectionConfigError, match="max_retries 必须 >= 0"):
            ConnectionConfig(max_retries=-1)

    def test_negative_request_timeout(self) -> None:
        """测试 request_timeout 为负数时抛出."""
        with pytest.raises(ConnectionConfigError, match="request_timeout 必须 >= 0"):
            ConnectionConfig(request_timeout=-1)
