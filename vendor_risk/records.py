"""
Pydantic records for vendor entities consumed by the engine.

Each record lists its required and optional fields explicitly
and knows how to turn itself into engine inputs.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .config import WindowConfig
from .trends import month_key
from .types import (
    DimensionScore,
    Obligation,
    ObligationKind,
    WorkflowStep,
)
from .completion import steps_from_checklist
from .scorecard import PerformanceMetrics


# =============================================================
# ENUMS
# =============================================================

class RiskClassificationEnum(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class VendorStatusEnum(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"


class AssessmentStatusEnum(str, Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    APPROVED = "approved"
    REJECTED = "rejected"


class IncidentSeverityEnum(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentStatusEnum(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


# =============================================================
# VENDOR
# =============================================================

class VendorRecord(BaseModel):
    """A third party as fetched from the vendor catalog."""
    id: str
    name: str
    vendor_type: str
    risk_classification: RiskClassificationEnum = RiskClassificationEnum.LOW
    status: VendorStatusEnum = VendorStatusEnum.ACTIVE
    risk_score: Optional[float] = Field(default=None, ge=0, le=100)

    certifications: List[str] = Field(default_factory=list)
    compliance_frameworks: List[str] = Field(default_factory=list)
    financial_stability_rating: Optional[str] = None
    insurance_coverage: Optional[str] = None

    contract_end_date: Optional[date] = None
    next_assessment_date: Optional[date] = None

    class Config:
        from_attributes = True

    def obligations(self, contract: WindowConfig, assessment: WindowConfig) -> List[Obligation]:
        """Contract-end and next-assessment obligations, when dated."""
        obligations = []
        if self.contract_end_date is not None:
            obligations.append(Obligation(
                name=f"{self.name} contract end",
                due_date=self.contract_end_date,
                warning_window_days=contract.warning_days,
                critical_window_days=contract.critical_days,
                kind=ObligationKind.CONTRACT_END,
                subject_id=self.id,
            ))
        if self.next_assessment_date is not None:
            obligations.append(Obligation(
                name=f"{self.name} next assessment",
                due_date=self.next_assessment_date,
                warning_window_days=assessment.warning_days,
                critical_window_days=assessment.critical_days,
                kind=ObligationKind.NEXT_ASSESSMENT,
                subject_id=self.id,
            ))
        return obligations


# =============================================================
# ASSESSMENT
# =============================================================

ASSESSMENT_DIMENSIONS = (
    "financial",
    "operational",
    "compliance",
    "security",
    "reputational",
    "strategic",
)


class AssessmentRecord(BaseModel):
    """A completed or in-flight six-dimension risk assessment."""
    id: str
    third_party_id: str
    assessment_date: date
    status: AssessmentStatusEnum = AssessmentStatusEnum.DRAFT

    financial_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    operational_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    compliance_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    security_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    reputational_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    strategic_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    overall_risk_score: Optional[float] = Field(default=None, ge=0, le=100)

    follow_up_required: bool = False
    follow_up_date: Optional[date] = None

    class Config:
        from_attributes = True

    def dimensions(self) -> List[DimensionScore]:
        return [
            DimensionScore(name, getattr(self, f"{name}_risk_score"))
            for name in ASSESSMENT_DIMENSIONS
        ]

    def follow_up(self, window: WindowConfig) -> Optional[Obligation]:
        if not self.follow_up_required or self.follow_up_date is None:
            return None
        return Obligation(
            name=f"Assessment {self.id} follow-up",
            due_date=self.follow_up_date,
            warning_window_days=window.warning_days,
            critical_window_days=window.critical_days,
            kind=ObligationKind.FOLLOW_UP,
            subject_id=self.third_party_id,
        )

    @property
    def month(self) -> str:
        return month_key(self.assessment_date)


# =============================================================
# DUE DILIGENCE
# =============================================================

DUE_DILIGENCE_REVIEWS = ("financial", "legal", "operational", "security", "compliance")


class DueDiligenceRecord(BaseModel):
    """Five-part due-diligence review of a third party."""
    id: str
    third_party_id: str
    due_diligence_date: date

    financial_review_completed: bool = False
    legal_review_completed: bool = False
    operational_review_completed: bool = False
    security_review_completed: bool = False
    compliance_review_completed: bool = False

    financial_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    legal_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    operational_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    security_risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    compliance_risk_score: Optional[float] = Field(default=None, ge=0, le=100)

    class Config:
        from_attributes = True

    def steps(self) -> List[WorkflowStep]:
        return steps_from_checklist({
            name: getattr(self, f"{name}_review_completed")
            for name in DUE_DILIGENCE_REVIEWS
        })

    def dimensions(self) -> List[DimensionScore]:
        return [
            DimensionScore(name, getattr(self, f"{name}_risk_score"))
            for name in DUE_DILIGENCE_REVIEWS
        ]


# =============================================================
# CONTRACT
# =============================================================

class ContractRecord(BaseModel):
    """A vendor contract."""
    id: str
    third_party_id: str
    contract_number: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    renewal_date: Optional[date] = None

    class Config:
        from_attributes = True

    @property
    def label(self) -> str:
        return self.contract_number or self.id

    def obligation(self, window: WindowConfig) -> Optional[Obligation]:
        """End-date obligation, or None for open-ended contracts."""
        if self.end_date is None:
            return None
        return Obligation(
            name=f"Contract {self.label}",
            due_date=self.end_date,
            warning_window_days=window.warning_days,
            critical_window_days=window.critical_days,
            kind=ObligationKind.CONTRACT_END,
            subject_id=self.id,
        )


# =============================================================
# PERFORMANCE / MONITORING / INCIDENTS
# =============================================================

class PerformanceRecord(BaseModel):
    """Vendor performance for one review period."""
    third_party_id: str
    period_end_date: date
    sla_compliance_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    quality_score: Optional[float] = Field(default=None, ge=0, le=100)
    delivery_timeliness: Optional[float] = Field(default=None, ge=0, le=100)
    communication_effectiveness: Optional[float] = Field(default=None, ge=0, le=100)

    class Config:
        from_attributes = True

    def metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            sla_compliance_percentage=self.sla_compliance_percentage,
            quality_score=self.quality_score,
            delivery_timeliness=self.delivery_timeliness,
            communication_effectiveness=self.communication_effectiveness,
        )


class MonitoringReading(BaseModel):
    """One security-monitoring observation of a third party."""
    third_party_id: str
    monitoring_date: datetime
    security_score: Optional[float] = Field(default=None, ge=0, le=100)
    uptime_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    response_time_ms: Optional[float] = Field(default=None, ge=0)
    compliance_score: Optional[float] = Field(default=None, ge=0, le=100)

    class Config:
        from_attributes = True

    def readings(self) -> dict:
        return {
            "security_score": self.security_score,
            "uptime_percentage": self.uptime_percentage,
            "response_time_ms": self.response_time_ms,
            "compliance_score": self.compliance_score,
        }


class IncidentRecord(BaseModel):
    """A third-party incident."""
    id: str
    third_party_id: str
    incident_date: date
    severity: IncidentSeverityEnum
    status: IncidentStatusEnum = IncidentStatusEnum.OPEN

    class Config:
        from_attributes = True

    @property
    def is_active(self) -> bool:
        return self.status in (IncidentStatusEnum.OPEN, IncidentStatusEnum.INVESTIGATING)
