from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

if TYPE_CHECKING:
    from partition_resolver.core.validation.policies import PolicyOutcome

LOGGER = logging.getLogger(__name__)

_LABELS = ("template", "policy", "status")


class PrometheusMetricsClient:
    """Pushgateway client for pre-flight validation runs.

    Expected environment:
    - PROMETHEUS_PUSHGATEWAY_URL: URL to the Pushgateway.
      Example: http://pushgateway.monitoring.svc.cluster.local:9091

    Optional:
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object used as grouping key.
      Example: {"workflow_uid": "abc123"}

    Metrics are a side-effect: callers must never fail a validation run
    because of metrics delivery.
    """

    def __init__(self, *, pushgateway_url: str | None = None) -> None:
        self._pushgateway_url = pushgateway_url or os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self._registry = CollectorRegistry()
        self._candidates = Gauge(
            "partition_resolver_candidates",
            "Partitions validated for a source",
            labelnames=_LABELS,
            registry=self._registry,
        )
        self._good = Gauge(
            "partition_resolver_good_candidates",
            "Validated partitions judged good",
            labelnames=_LABELS,
            registry=self._registry,
        )
        self._selected = Gauge(
            "partition_resolver_selected_paths",
            "Partitions selected for reading",
            labelnames=_LABELS,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def is_enabled(self) -> bool:
        return self._pushgateway_url is not None

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        return {
            key: value
            for key, value in data.items()
            if isinstance(key, str) and isinstance(value, str)
        }

    def record_outcome(self, *, template: str, outcome: PolicyOutcome) -> None:
        """Set the gauges for one validated source."""
        labels = {
            "template": template,
            "policy": outcome.policy.value,
            "status": "usable" if outcome.is_usable else type(outcome.failure).__name__,
        }
        self._candidates.labels(**labels).set(len(outcome.candidates))
        self._good.labels(**labels).set(sum(1 for c in outcome.candidates if c.is_good))
        self._selected.labels(**labels).set(len(outcome.selected))

    def push_all(self, *, job: str) -> None:
        if not self._pushgateway_url:
            return

        push_to_gateway(
            gateway=self._pushgateway_url,
            job=job,
            registry=self._registry,
            grouping_key=self._grouping_key,
        )

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": job, "grouping_key": self._grouping_key},
        )
