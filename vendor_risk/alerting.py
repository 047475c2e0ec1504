"""
Vendor Risk Evaluation Engine - Alerting.

============================================================
PURPOSE
============================================================
Turns engine results into alerts and dispatches them.

Provides:
- Alert building from obligation evaluations and metric breaches
- Alert lifecycle (active -> acknowledged -> resolved)
- Rate limiting to prevent alert fatigue
- Pluggable senders

============================================================
ALERT PHILOSOPHY
============================================================
- Overdue and critical-window obligations are CRITICAL
- CRITICAL alerts are never rate limited
- Alerts are immutable; lifecycle changes return new alerts

============================================================
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from .config import AlertingConfig
from .monitoring import MetricBreach
from .obligations import severity_for
from .types import (
    AlertSeverity,
    AlertStatus,
    Obligation,
    ObligationEvaluation,
    ObligationKind,
    ObligationStatus,
    RiskEvaluationError,
)


logger = logging.getLogger(__name__)


# ============================================================
# ALERT MESSAGE DATACLASS
# ============================================================


@dataclass(frozen=True)
class RiskAlert:
    """
    Structured alert for a vendor risk event.

    ============================================================
    FIELDS
    ============================================================
    - key: Stable identity used for de-duplication
    - alert_type: renewal, expiry, assessment, follow_up, security, performance, compliance
    - severity: AlertSeverity
    - status: AlertStatus

    ============================================================
    """

    key: str
    alert_type: str
    severity: AlertSeverity
    title: str
    message: str
    created_at: datetime
    subject_id: Optional[str] = None
    status: AlertStatus = AlertStatus.ACTIVE
    resolved_at: Optional[datetime] = None
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return self.status == AlertStatus.ACTIVE

    def acknowledge(self) -> "RiskAlert":
        if self.status == AlertStatus.RESOLVED:
            raise RiskEvaluationError(f"Alert {self.key} is already resolved", field="status")
        return replace(self, status=AlertStatus.ACKNOWLEDGED)

    def resolve(self, at: datetime) -> "RiskAlert":
        if self.status == AlertStatus.RESOLVED:
            return self
        return replace(self, status=AlertStatus.RESOLVED, resolved_at=at)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "key": self.key,
            "alert_type": self.alert_type,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
            "subject_id": self.subject_id,
            "status": self.status.value,
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
            "context": self.context,
        }


# ============================================================
# ALERT BUILDERS
# ============================================================

_OBLIGATION_ALERT_TYPES = {
    ObligationKind.CONTRACT_END: "renewal",
    ObligationKind.CONTRACT_RENEWAL: "renewal",
    ObligationKind.NEXT_ASSESSMENT: "assessment",
    ObligationKind.FOLLOW_UP: "follow_up",
    ObligationKind.REVIEW: "review",
}


def _obligation_alert(
    obligation: Obligation,
    evaluation: ObligationEvaluation,
    now: datetime,
) -> Optional[RiskAlert]:
    severity = severity_for(obligation, evaluation)
    if severity is None:
        return None

    subject = obligation.subject_id or obligation.name
    if evaluation.status == ObligationStatus.OVERDUE:
        is_contract = obligation.kind in (ObligationKind.CONTRACT_END, ObligationKind.CONTRACT_RENEWAL)
        alert_type = "expiry" if is_contract else _OBLIGATION_ALERT_TYPES[obligation.kind]
        title = "Contract Expired" if is_contract else f"{obligation.name} Overdue"
        message = f"{obligation.name} is {-evaluation.days_remaining} days past due"
        suffix = "overdue"
    else:
        alert_type = _OBLIGATION_ALERT_TYPES[obligation.kind]
        title = f"{obligation.name} Due Soon"
        message = f"{obligation.name} is due in {evaluation.days_remaining} days"
        suffix = severity.value

    return RiskAlert(
        key=f"{subject}-{obligation.kind.value}-{suffix}",
        alert_type=alert_type,
        severity=severity,
        title=title,
        message=message,
        created_at=now,
        subject_id=obligation.subject_id,
        context={
            "days_remaining": evaluation.days_remaining,
            "status": evaluation.status.value,
        },
    )


def build_obligation_alerts(
    evaluations: Iterable[Tuple[Obligation, ObligationEvaluation]],
    now: datetime,
) -> List[RiskAlert]:
    """Alerts for every overdue or expiring obligation."""
    alerts = []
    for obligation, evaluation in evaluations:
        alert = _obligation_alert(obligation, evaluation, now)
        if alert is not None:
            alerts.append(alert)
    return alerts


_METRIC_ALERT_TYPES = {
    "security_score": "security",
    "uptime_percentage": "performance",
    "response_time_ms": "performance",
    "compliance_score": "compliance",
}


def build_metric_alerts(
    subject_id: str,
    breaches: Iterable[MetricBreach],
    now: datetime,
) -> List[RiskAlert]:
    """Alerts for monitoring threshold breaches of one vendor."""
    alerts = []
    for breach in breaches:
        label = breach.metric.replace("_", " ")
        alerts.append(RiskAlert(
            key=f"{subject_id}-{breach.metric}-{breach.severity.value}",
            alert_type=_METRIC_ALERT_TYPES.get(breach.metric, "performance"),
            severity=breach.severity,
            title=f"{'Critical' if breach.is_critical else 'Degraded'} {label}",
            message=f"{label} is {breach.value:g} (threshold {breach.threshold:g}) for vendor {subject_id}",
            created_at=now,
            subject_id=subject_id,
            context={"metric": breach.metric, "value": breach.value, "threshold": breach.threshold},
        ))
    return alerts


# ============================================================
# ALERT SENDER PROTOCOL
# ============================================================


class AlertSender(Protocol):
    """
    Protocol for alert sending implementations.

    Allows different alert destinations (log, chat, email).
    """

    async def send(self, alert: RiskAlert) -> bool:
        """
        Send an alert.

        Returns:
            True if sent successfully
        """
        ...


class LoggingAlertSender:
    """Write alerts to the application log."""

    _LEVELS = {
        AlertSeverity.LOW: logging.INFO,
        AlertSeverity.MEDIUM: logging.INFO,
        AlertSeverity.HIGH: logging.WARNING,
        AlertSeverity.CRITICAL: logging.ERROR,
    }

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger

    async def send(self, alert: RiskAlert) -> bool:
        self._log.log(
            self._LEVELS[alert.severity],
            f"[{alert.severity.value.upper()}] {alert.title}: {alert.message}",
        )
        return True


# ============================================================
# RATE LIMITER
# ============================================================


class AlertRateLimiter:
    """
    Rate limits alerts to prevent spam.

    ============================================================
    LOGIC
    ============================================================
    - Track last send time per alert key
    - Enforce minimum interval between alerts
    - Always allow CRITICAL alerts

    ============================================================
    """

    def __init__(self, min_interval_seconds: float = 3600.0):
        self._min_interval = timedelta(seconds=min_interval_seconds)
        self._last_alerts: Dict[str, datetime] = {}

    def should_send(self, alert: RiskAlert, now: datetime) -> bool:
        if alert.severity == AlertSeverity.CRITICAL:
            return True

        last_alert = self._last_alerts.get(alert.key)
        if last_alert is None:
            return True

        return (now - last_alert) >= self._min_interval

    def record_sent(self, alert: RiskAlert, now: datetime) -> None:
        self._last_alerts[alert.key] = now

    def reset(self) -> None:
        """Clear all rate limit state."""
        self._last_alerts.clear()


# ============================================================
# ALERTING SERVICE
# ============================================================


class RiskAlertingService:
    """
    Dispatches alerts to the configured senders.

    ============================================================
    RESPONSIBILITIES
    ============================================================
    1. Skip non-active alerts
    2. Rate limit alerts
    3. Send via every configured sender

    ============================================================
    """

    def __init__(
        self,
        config: Optional[AlertingConfig] = None,
        senders: Optional[List[AlertSender]] = None,
    ):
        self._config = config or AlertingConfig()
        self._senders: List[AlertSender] = list(senders) if senders else []
        self._rate_limiter = AlertRateLimiter(
            min_interval_seconds=self._config.min_seconds_between_alerts
        )

    def add_sender(self, sender: AlertSender) -> None:
        self._senders.append(sender)

    async def dispatch(self, alerts: Iterable[RiskAlert], now: datetime) -> int:
        """
        Send active alerts that pass the rate limiter.

        Returns:
            Number of alerts delivered by at least one sender
        """
        sent = 0
        for alert in alerts:
            if not alert.is_active:
                continue
            if not self._rate_limiter.should_send(alert, now):
                logger.debug(f"Rate limited alert {alert.key}")
                continue

            delivered = False
            for sender in self._senders:
                if await sender.send(alert):
                    delivered = True
                else:
                    logger.warning(f"Sender {type(sender).__name__} failed to deliver {alert.key}")

            if delivered:
                self._rate_limiter.record_sent(alert, now)
                sent += 1

        return sent


def create_logging_alerting_service(config: Optional[AlertingConfig] = None) -> RiskAlertingService:
    """Alerting service that writes to the log."""
    return RiskAlertingService(config=config, senders=[LoggingAlertSender()])
