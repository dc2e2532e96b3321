"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ZeebeConfig(BaseSettings):
    """Zeebe gateway (gRPC) configuration."""

    model_config = {"env_prefix": "ZEEBE_OPS_ZEEBE_"}

    gateway_address: str = "localhost:26500"
    use_tls: bool = False
    request_timeout_s: float | None = None  # None leaves the deadline to the gateway


class ElasticsearchConfig(BaseSettings):
    """Elasticsearch (Zeebe exporter index) configuration."""

    model_config = {"env_prefix": "ZEEBE_OPS_ES_"}

    url: str = "http://localhost:9200"
    index_pattern: str = "zeebe-*"
    process_name_field: str = "value.bpmnProcessId"
    definition_key_field: str = "value.processDefinitionKey"
    process_name_limit: int = Field(default=5, ge=1)
    definition_key_limit: int = Field(default=1005, ge=1)
    request_timeout_s: float = 10.0


class OperationsConfig(BaseSettings):
    """Operator action configuration."""

    model_config = {"env_prefix": "ZEEBE_OPS_OPS_"}

    recovery_message_name: str = "operator-manual-recovery"
    message_ttl_ms: int = Field(default=30_000, ge=0)
    bulk_cancel_workers: int = Field(default=8, ge=1)


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "ZEEBE_OPS_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    zeebe: ZeebeConfig = ZeebeConfig()
    elasticsearch: ElasticsearchConfig = ElasticsearchConfig()
    operations: OperationsConfig = OperationsConfig()
