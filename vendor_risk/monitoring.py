"""
Vendor Risk Evaluation Engine - Metric Monitoring.

============================================================
PURPOSE
============================================================
Threshold checks for continuously monitored third-party
metrics (security score, uptime, response time, compliance).

============================================================
THRESHOLD LOGIC
============================================================
For lower-is-worse metrics:
    value <= critical  -> CRITICAL
    value <= warning   -> HIGH
    otherwise          -> no breach

For higher-is-worse metrics the comparisons are >=.

Missing values never breach.

============================================================
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from .config import MetricThreshold, MonitoringConfig
from .types import AlertSeverity


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricBreach:
    """A monitored metric crossing one of its thresholds."""

    metric: str
    value: float
    threshold: float
    severity: AlertSeverity

    @property
    def is_critical(self) -> bool:
        return self.severity == AlertSeverity.CRITICAL


def check_metric(
    metric: str,
    value: Optional[float],
    threshold: MetricThreshold,
) -> Optional[MetricBreach]:
    """
    Check one metric value against its thresholds.

    Returns:
        MetricBreach for a warning or critical crossing, else None
    """
    if value is None:
        return None

    if threshold.lower_is_worse:
        if value <= threshold.critical:
            return MetricBreach(metric, value, threshold.critical, AlertSeverity.CRITICAL)
        if value <= threshold.warning:
            return MetricBreach(metric, value, threshold.warning, AlertSeverity.HIGH)
        return None

    if value >= threshold.critical:
        return MetricBreach(metric, value, threshold.critical, AlertSeverity.CRITICAL)
    if value >= threshold.warning:
        return MetricBreach(metric, value, threshold.warning, AlertSeverity.HIGH)
    return None


def check_readings(
    readings: Mapping[str, Optional[float]],
    config: Optional[MonitoringConfig] = None,
) -> List[MetricBreach]:
    """
    Check every configured metric present in a reading.

    Metrics without a configured threshold are ignored.
    """
    thresholds: Dict[str, MetricThreshold] = (config or MonitoringConfig()).thresholds()
    breaches = []
    for metric, value in readings.items():
        threshold = thresholds.get(metric)
        if threshold is None:
            continue
        breach = check_metric(metric, value, threshold)
        if breach is not None:
            breaches.append(breach)

    if breaches:
        logger.debug(f"{len(breaches)} metric breaches: {[b.metric for b in breaches]}")
    return breaches
