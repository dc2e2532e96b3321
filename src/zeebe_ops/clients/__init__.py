"""Remote collaborators (Zeebe gateway, Elasticsearch) behind Protocol interfaces."""

from __future__ import annotations

from zeebe_ops.clients.elasticsearch_client import ElasticsearchIndexClient
from zeebe_ops.clients.zeebe_client import ZeebeCommandClient
from zeebe_ops.core.config import AppSettings


def create_command_client(settings: AppSettings) -> ZeebeCommandClient:
    return ZeebeCommandClient(
        gateway_address=settings.zeebe.gateway_address,
        use_tls=settings.zeebe.use_tls,
        timeout_s=settings.zeebe.request_timeout_s,
    )


def create_index_client(settings: AppSettings) -> ElasticsearchIndexClient:
    return ElasticsearchIndexClient(
        url=settings.elasticsearch.url,
        request_timeout_s=settings.elasticsearch.request_timeout_s,
    )

