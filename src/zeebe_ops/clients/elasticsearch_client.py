"""Elasticsearch index client implementing IIndexClient."""

from __future__ import annotations

from typing import Any

from elasticsearch import Elasticsearch

from zeebe_ops.core.exceptions import IndexQueryError


class ElasticsearchIndexClient:
    """Production IIndexClient backed by the official Elasticsearch client."""

    def __init__(self, url: str = "http://localhost:9200", request_timeout_s: float = 10.0,
                 client: Elasticsearch | None = None) -> None:
        self._url = url
        self._client = client or Elasticsearch(url, request_timeout=request_timeout_s)

    def aggregate(self, index_pattern: str, aggregations: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self._client.search(index=index_pattern, size=0, aggregations=aggregations)
        except Exception as exc:
            raise IndexQueryError(f"Aggregation on {index_pattern!r} failed: {exc}") from exc
        body = getattr(resp, "body", resp)
        return body.get("aggregations", {})

    def list_indices(self, pattern: str = "*") -> list[str]:
        try:
            resp = self._client.indices.get(index=pattern)
        except Exception as exc:
            raise IndexQueryError(f"Listing indices {pattern!r} failed: {exc}") from exc
        return list(getattr(resp, "body", resp).keys())

    def close(self) -> None:
        self._client.close()
