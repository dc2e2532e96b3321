"""DefinitionIndexService — process definition names and keys from the exporter index."""

from __future__ import annotations

from typing import Any

from zeebe_ops.core.config import ElasticsearchConfig
from zeebe_ops.core.logging import get_logger
from zeebe_ops.core.protocols import IIndexClient

logger = get_logger("services.definitions")

PROCESS_NAME_AGG = "process_names"
DEFINITION_KEY_AGG = "definition_keys"


class DefinitionIndexService:
    """Maps each BPMN process id to the definition keys of its deployed versions.

    Only the ``process_name_limit`` most frequent names and, per name, the
    ``definition_key_limit`` most frequent keys are returned. Anything beyond is
    truncated by the search engine.
    """

    def __init__(self, *, index: IIndexClient, config: ElasticsearchConfig) -> None:
        self._index = index
        self._config = config

    def aggregation(self) -> dict[str, Any]:
        return {
            PROCESS_NAME_AGG: {
                "terms": {"field": self._config.process_name_field,
                          "size": self._config.process_name_limit},
                "aggs": {
                    DEFINITION_KEY_AGG: {
                        "terms": {"field": self._config.definition_key_field,
                                  "size": self._config.definition_key_limit},
                    },
                },
            },
        }

    def definitions(self) -> dict[str, list[int]]:
        logger.info("Get process definition keys and names",
                    extra={"structured": {"index_pattern": self._config.index_pattern}})
        result = self._index.aggregate(self._config.index_pattern, self.aggregation())
        return self.reshape(result)

    def reshape(self, aggregations: dict[str, Any]) -> dict[str, list[int]]:
        """Flatten name buckets into ``{name: [key, ...]}``, keeping bucket order."""
        names = aggregations.get(PROCESS_NAME_AGG, {})
        if names.get("sum_other_doc_count"):
            logger.debug("Process names truncated at %d", self._config.process_name_limit)

        index: dict[str, list[int]] = {}
        for bucket in names.get("buckets", []):
            keys = bucket.get(DEFINITION_KEY_AGG, {})
            if keys.get("sum_other_doc_count"):
                logger.debug("Definition keys of %s truncated at %d", bucket["key"],
                             self._config.definition_key_limit)
            index[bucket["key"]] = [int(k["key"]) for k in keys.get("buckets", [])]
        return index
