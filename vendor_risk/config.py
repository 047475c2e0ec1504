"""
Vendor Risk Evaluation Engine - Configuration.

============================================================
PURPOSE
============================================================
Defines all configuration dataclasses and threshold values
for the Vendor Risk Evaluation Engine.

============================================================
DESIGN PRINCIPLES
============================================================
- Thresholds are configuration, never hard-coded at call sites
- Immutable configurations
- Each threshold has documentation

============================================================
THRESHOLD SCHEMES
============================================================
Two tier schemes exist across the vendor screens:
- DEFAULT:   low <= 39, medium 40-59, high 60-79, critical >= 80
- ALTERNATE: low <= 25, medium 26-50, high 51-75, critical > 75

Callers needing the alternate scheme pass its thresholds.

============================================================
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv


logger = logging.getLogger(__name__)


# ============================================================
# TIER THRESHOLDS
# ============================================================


@dataclass(frozen=True)
class TierThresholds:
    """
    Inclusive upper bounds of the low, medium and high tiers.

    Anything above high_max is CRITICAL.
    """

    low_max: float = 39.0
    medium_max: float = 59.0
    high_max: float = 79.0

    def __post_init__(self) -> None:
        if not (self.low_max < self.medium_max < self.high_max):
            raise ValueError(
                f"Tier thresholds must be strictly increasing, got "
                f"low_max={self.low_max}, medium_max={self.medium_max}, high_max={self.high_max}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "low_max": self.low_max,
            "medium_max": self.medium_max,
            "high_max": self.high_max,
        }


DEFAULT_TIER_THRESHOLDS = TierThresholds()
ALTERNATE_TIER_THRESHOLDS = TierThresholds(low_max=25.0, medium_max=50.0, high_max=75.0)


# ============================================================
# OBLIGATION WINDOWS
# ============================================================


@dataclass(frozen=True)
class WindowConfig:
    """Warning / critical windows (days) for one obligation type."""

    warning_days: int = 30
    critical_days: int = 7

    def to_dict(self) -> Dict[str, Any]:
        return {
            "warning_days": self.warning_days,
            "critical_days": self.critical_days,
        }


@dataclass(frozen=True)
class ObligationWindows:
    """
    Alert windows per obligation type.

    ============================================================
    WINDOW RATIONALE
    ============================================================
    Contracts:    30-day renewal warning, 7-day critical
    Assessments:  30-day warning, 7-day critical
    Follow-ups:   14-day warning, 3-day critical

    ============================================================
    """

    contract: WindowConfig = field(default_factory=WindowConfig)
    assessment: WindowConfig = field(default_factory=WindowConfig)
    follow_up: WindowConfig = field(
        default_factory=lambda: WindowConfig(warning_days=14, critical_days=3)
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract": self.contract.to_dict(),
            "assessment": self.assessment.to_dict(),
            "follow_up": self.follow_up.to_dict(),
        }


# ============================================================
# SCORECARD WEIGHTS
# ============================================================


@dataclass(frozen=True)
class ScorecardWeights:
    """
    Category weights of the vendor scorecard.

    Performance sub-weights apply to the latest performance
    period: SLA compliance, quality, delivery, communication.
    """

    risk_management: float = 40.0
    performance: float = 40.0
    compliance: float = 20.0

    sla_weight: float = 0.4
    quality_weight: float = 0.3
    delivery_weight: float = 0.2
    communication_weight: float = 0.1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_management": self.risk_management,
            "performance": self.performance,
            "compliance": self.compliance,
            "sla_weight": self.sla_weight,
            "quality_weight": self.quality_weight,
            "delivery_weight": self.delivery_weight,
            "communication_weight": self.communication_weight,
        }


# ============================================================
# MONITORING THRESHOLDS
# ============================================================


@dataclass(frozen=True)
class MetricThreshold:
    """
    Warning / critical thresholds for one monitored metric.

    lower_is_worse=True means breaching happens at or below the
    threshold (e.g. uptime); otherwise at or above (e.g. latency).
    """

    warning: float
    critical: float
    lower_is_worse: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "warning": self.warning,
            "critical": self.critical,
            "lower_is_worse": self.lower_is_worse,
        }


@dataclass(frozen=True)
class MonitoringConfig:
    """Thresholds for continuous third-party monitoring metrics."""

    security_score: MetricThreshold = field(
        default_factory=lambda: MetricThreshold(warning=70.0, critical=50.0)
    )
    uptime_percentage: MetricThreshold = field(
        default_factory=lambda: MetricThreshold(warning=95.0, critical=90.0)
    )
    response_time_ms: MetricThreshold = field(
        default_factory=lambda: MetricThreshold(warning=1000.0, critical=2000.0, lower_is_worse=False)
    )
    compliance_score: MetricThreshold = field(
        default_factory=lambda: MetricThreshold(warning=80.0, critical=60.0)
    )

    def thresholds(self) -> Dict[str, MetricThreshold]:
        return {
            "security_score": self.security_score,
            "uptime_percentage": self.uptime_percentage,
            "response_time_ms": self.response_time_ms,
            "compliance_score": self.compliance_score,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {name: t.to_dict() for name, t in self.thresholds().items()}


# ============================================================
# ALERTING CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class AlertingConfig:
    """
    Configuration for alert dispatch.

    CRITICAL alerts are never rate limited.
    """

    min_seconds_between_alerts: float = 3600.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_seconds_between_alerts": self.min_seconds_between_alerts,
        }


# ============================================================
# MASTER CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class RiskEngineConfig:
    """Master configuration for the Vendor Risk Evaluation Engine."""

    tiers: TierThresholds = field(default_factory=TierThresholds)
    windows: ObligationWindows = field(default_factory=ObligationWindows)
    scorecard: ScorecardWeights = field(default_factory=ScorecardWeights)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    alerting: AlertingConfig = field(default_factory=AlertingConfig)

    engine_version: str = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tiers": self.tiers.to_dict(),
            "windows": self.windows.to_dict(),
            "scorecard": self.scorecard.to_dict(),
            "monitoring": self.monitoring.to_dict(),
            "alerting": self.alerting.to_dict(),
            "engine_version": self.engine_version,
        }


# ============================================================
# FACTORIES
# ============================================================


def get_default_config() -> RiskEngineConfig:
    """Return the default engine configuration (39/59/79 tier scheme)."""
    return RiskEngineConfig()


def get_alternate_tier_config() -> RiskEngineConfig:
    """Return a configuration using the 25/50/75 tier scheme."""
    return RiskEngineConfig(tiers=ALTERNATE_TIER_THRESHOLDS)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    return int(_env_float(name, float(default)))


def load_config_from_env(dotenv_path: Optional[str] = None) -> RiskEngineConfig:
    """
    Build configuration from VENDOR_RISK_* environment variables.

    A .env file is loaded first (existing variables win).

    Variables:
        VENDOR_RISK_TIER_LOW_MAX, VENDOR_RISK_TIER_MEDIUM_MAX,
        VENDOR_RISK_TIER_HIGH_MAX,
        VENDOR_RISK_CONTRACT_WARNING_DAYS, VENDOR_RISK_CONTRACT_CRITICAL_DAYS,
        VENDOR_RISK_ASSESSMENT_WARNING_DAYS, VENDOR_RISK_ASSESSMENT_CRITICAL_DAYS,
        VENDOR_RISK_FOLLOW_UP_WARNING_DAYS, VENDOR_RISK_FOLLOW_UP_CRITICAL_DAYS,
        VENDOR_RISK_ALERT_INTERVAL_SECONDS
    """
    load_dotenv(dotenv_path)

    default = RiskEngineConfig()
    tiers = TierThresholds(
        low_max=_env_float("VENDOR_RISK_TIER_LOW_MAX", default.tiers.low_max),
        medium_max=_env_float("VENDOR_RISK_TIER_MEDIUM_MAX", default.tiers.medium_max),
        high_max=_env_float("VENDOR_RISK_TIER_HIGH_MAX", default.tiers.high_max),
    )
    windows = ObligationWindows(
        contract=WindowConfig(
            warning_days=_env_int("VENDOR_RISK_CONTRACT_WARNING_DAYS", default.windows.contract.warning_days),
            critical_days=_env_int("VENDOR_RISK_CONTRACT_CRITICAL_DAYS", default.windows.contract.critical_days),
        ),
        assessment=WindowConfig(
            warning_days=_env_int("VENDOR_RISK_ASSESSMENT_WARNING_DAYS", default.windows.assessment.warning_days),
            critical_days=_env_int("VENDOR_RISK_ASSESSMENT_CRITICAL_DAYS", default.windows.assessment.critical_days),
        ),
        follow_up=WindowConfig(
            warning_days=_env_int("VENDOR_RISK_FOLLOW_UP_WARNING_DAYS", default.windows.follow_up.warning_days),
            critical_days=_env_int("VENDOR_RISK_FOLLOW_UP_CRITICAL_DAYS", default.windows.follow_up.critical_days),
        ),
    )
    alerting = AlertingConfig(
        min_seconds_between_alerts=_env_float(
            "VENDOR_RISK_ALERT_INTERVAL_SECONDS", default.alerting.min_seconds_between_alerts
        ),
    )

    config = RiskEngineConfig(tiers=tiers, windows=windows, alerting=alerting)
    logger.debug(f"Loaded vendor risk config: {config.to_dict()}")
    return config


def _window_from(data: Dict[str, Any], default: WindowConfig) -> WindowConfig:
    return WindowConfig(
        warning_days=int(data.get("warning_days", default.warning_days)),
        critical_days=int(data.get("critical_days", default.critical_days)),
    )


def _metric_from(data: Dict[str, Any], default: MetricThreshold) -> MetricThreshold:
    return MetricThreshold(
        warning=float(data.get("warning", default.warning)),
        critical=float(data.get("critical", default.critical)),
        lower_is_worse=bool(data.get("lower_is_worse", default.lower_is_worse)),
    )


def load_config_from_yaml(path: Union[str, Path]) -> RiskEngineConfig:
    """
    Load configuration from a YAML file.

    Every section is optional; missing keys keep their defaults.

        tiers:      {low_max, medium_max, high_max}
        windows:    {contract, assessment, follow_up: {warning_days, critical_days}}
        scorecard:  {risk_management, performance, compliance, sla_weight, ...}
        monitoring: {<metric>: {warning, critical, lower_is_worse}}
        alerting:   {min_seconds_between_alerts}
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    default = RiskEngineConfig()

    tiers = default.tiers
    if "tiers" in data:
        t = data["tiers"]
        tiers = TierThresholds(
            low_max=float(t.get("low_max", tiers.low_max)),
            medium_max=float(t.get("medium_max", tiers.medium_max)),
            high_max=float(t.get("high_max", tiers.high_max)),
        )

    windows = default.windows
    if "windows" in data:
        w = data["windows"]
        windows = ObligationWindows(
            contract=_window_from(w.get("contract", {}), windows.contract),
            assessment=_window_from(w.get("assessment", {}), windows.assessment),
            follow_up=_window_from(w.get("follow_up", {}), windows.follow_up),
        )

    scorecard = default.scorecard
    if "scorecard" in data:
        scorecard = ScorecardWeights(**{**scorecard.to_dict(), **data["scorecard"]})

    monitoring = default.monitoring
    if "monitoring" in data:
        m = data["monitoring"]
        monitoring = MonitoringConfig(**{
            name: _metric_from(m.get(name, {}), threshold)
            for name, threshold in monitoring.thresholds().items()
        })

    alerting = default.alerting
    if "alerting" in data:
        alerting = AlertingConfig(
            min_seconds_between_alerts=float(
                data["alerting"].get("min_seconds_between_alerts", alerting.min_seconds_between_alerts)
            ),
        )

    config = RiskEngineConfig(
        tiers=tiers,
        windows=windows,
        scorecard=scorecard,
        monitoring=monitoring,
        alerting=alerting,
    )
    logger.info(f"Loaded vendor risk config from {path}")
    return config
