"""
Result models for the sibling analyzers (network risk and malware indicators).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from .risk_assessment import AssessmentStatus, RiskLevel


@dataclass
class NetworkRiskResult:
    """Data-exfiltration risk derived from network and sensitive permissions."""
    has_internet: bool
    exfil_risk_score: int
    risk_level: RiskLevel
    network_capabilities: List[str] = field(default_factory=list)
    data_exfil_permissions: FrozenSet[str] = field(default_factory=frozenset)
    network_permissions: FrozenSet[str] = field(default_factory=frozenset)
    # Reported separately, never part of the score
    uses_cleartext: bool = False
    can_access_wifi: bool = False
    can_change_network: bool = False
    status: AssessmentStatus = AssessmentStatus.ANALYZED
    error: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.exfil_risk_score <= 100:
            raise ValueError(f"Exfiltration risk score must be between 0 and 100, got {self.exfil_risk_score}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hasInternet': self.has_internet,
            'networkPermissions': sorted(self.network_permissions),
            'networkPermissionCount': len(self.network_permissions),
            'dataExfilPermissions': sorted(self.data_exfil_permissions),
            'dataExfilPermissionCount': len(self.data_exfil_permissions),
            'exfilRiskScore': self.exfil_risk_score,
            'riskLevel': self.risk_level.value,
            'usesCleartext': self.uses_cleartext,
            'canAccessWifi': self.can_access_wifi,
            'canChangeNetwork': self.can_change_network,
            'networkCapabilities': list(self.network_capabilities),
            'status': self.status.value,
        }


@dataclass
class MalwareIndicatorResult:
    """Name-pattern and permission-combination threat verdict."""
    package_identifier: str
    display_name: str
    threat_score: int
    threat_level: RiskLevel
    is_safe: bool
    suspicious_name_match: bool = False
    matched_combo_count: int = 0
    indicators: List[str] = field(default_factory=list)
    suspicious_permissions: FrozenSet[str] = field(default_factory=frozenset)
    status: AssessmentStatus = AssessmentStatus.ANALYZED
    error: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.threat_score <= 100:
            raise ValueError(f"Threat score must be between 0 and 100, got {self.threat_score}")

    @property
    def suspicious_perm_count(self) -> int:
        return len(self.suspicious_permissions)

    @property
    def indicator_count(self) -> int:
        return len(self.indicators)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'packageName': self.package_identifier,
            'appName': self.display_name,
            'threatLevel': self.threat_level.value,
            'threatScore': self.threat_score,
            'suspiciousNameMatch': self.suspicious_name_match,
            'matchedComboCount': self.matched_combo_count,
            'suspiciousPermCount': self.suspicious_perm_count,
            'indicatorCount': self.indicator_count,
            'isSafe': self.is_safe,
            'indicators': list(self.indicators),
            'suspiciousPermissions': sorted(self.suspicious_permissions),
            'status': self.status.value,
        }
