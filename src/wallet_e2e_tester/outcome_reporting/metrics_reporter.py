"""Prometheus Pushgateway transport for the aggregate run verdict."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, pushadd_to_gateway

from wallet_e2e_tester.configuration.runtime_settings import MetricsSettings

logger = logging.getLogger(__name__)

SELF_SEND_METRIC_NAME = "metamask_self_send"

PushFunction = Callable[..., None]


class OutcomeReporter(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for metrics sinks receiving pass/fail observations."""

    def report(self, succeeded: bool) -> None: ...


class PushgatewayOutcomeReporter:
    """Counts self-send outcomes and pushes them to a Prometheus Pushgateway."""

    def __init__(
        self,
        settings: MetricsSettings,
        *,
        push: PushFunction | None = None,
        registry: CollectorRegistry | None = None,
    ) -> None:
        self._settings = settings
        self._push = push or pushadd_to_gateway
        self._registry = registry or CollectorRegistry()
        self._counter = Counter(
            SELF_SEND_METRIC_NAME,
            "Outcomes of the wallet self-send transaction workflow.",
            labelnames=("success",),
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def report(self, succeeded: bool) -> None:
        """Increment the outcome counter and push it; transport errors are only logged."""
        label = "true" if succeeded else "false"
        self._counter.labels(success=label).inc()
        if not self._settings.pushgateway_url:
            logger.info("Self-send outcome success=%s (no Pushgateway configured)", label)
            return
        try:
            self._push(
                self._settings.pushgateway_url,
                job=self._settings.job_name,
                registry=self._registry,
                timeout=self._settings.push_timeout_seconds,
            )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning(
                "Failed to push self-send outcome success=%s to %s: %s",
                label,
                self._settings.pushgateway_url,
                exc,
            )
            return
        logger.info("Pushed self-send outcome success=%s", label)
