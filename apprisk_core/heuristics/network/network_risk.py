"""
Network Risk Analyzer - data exfiltration risk from network and sensitive permissions.

Holding sensitive data is only an exfiltration risk when the app can also
reach the network, so the score stays at zero without INTERNET. Cleartext
traffic is reported as a side signal and never scored.
"""

from typing import FrozenSet, Optional, Sequence, Tuple

from apprisk_core.heuristics.base import BaseEvaluator
from apprisk_core.logic.models import NetworkConfig, NetworkRiskResult, RiskLevel, as_permission_set


INTERNET_PERMISSION = "android.permission.INTERNET"

DEFAULT_NETWORK_PERMISSIONS: FrozenSet[str] = frozenset({
    "android.permission.INTERNET",
    "android.permission.ACCESS_NETWORK_STATE",
    "android.permission.ACCESS_WIFI_STATE",
    "android.permission.CHANGE_WIFI_STATE",
    "android.permission.CHANGE_NETWORK_STATE",
})

DEFAULT_DATA_EXFIL_PERMISSIONS: FrozenSet[str] = frozenset({
    "android.permission.READ_CONTACTS",
    "android.permission.READ_SMS",
    "android.permission.READ_CALL_LOG",
    "android.permission.ACCESS_FINE_LOCATION",
    "android.permission.ACCESS_COARSE_LOCATION",
    "android.permission.READ_EXTERNAL_STORAGE",
    "android.permission.CAMERA",
    "android.permission.RECORD_AUDIO",
    "android.permission.READ_PHONE_STATE",
})

# Reported in this order
DEFAULT_NETWORK_CAPABILITIES: Tuple[Tuple[str, str], ...] = (
    ("android.permission.INTERNET", "Internet Access"),
    ("android.permission.ACCESS_NETWORK_STATE", "Network State Monitoring"),
    ("android.permission.ACCESS_WIFI_STATE", "WiFi State Access"),
    ("android.permission.CHANGE_WIFI_STATE", "WiFi Control"),
    ("android.permission.CHANGE_NETWORK_STATE", "Network Control"),
    ("android.permission.BLUETOOTH", "Bluetooth Access"),
    ("android.permission.BLUETOOTH_ADMIN", "Bluetooth Control"),
    ("android.permission.NFC", "NFC Access"),
)


class NetworkRiskAnalyzer(BaseEvaluator):
    """Scores data-exfiltration risk from permission co-occurrence."""

    def __init__(self, config: Optional[NetworkConfig] = None,
                 network_permissions: Optional[FrozenSet[str]] = None,
                 data_exfil_permissions: Optional[FrozenSet[str]] = None,
                 capabilities: Optional[Sequence[Tuple[str, str]]] = None):
        super().__init__()
        self.config = config or NetworkConfig()
        self.network_permissions = frozenset(
            DEFAULT_NETWORK_PERMISSIONS if network_permissions is None else network_permissions)
        self.data_exfil_permissions = frozenset(
            DEFAULT_DATA_EXFIL_PERMISSIONS if data_exfil_permissions is None else data_exfil_permissions)
        self.capabilities = tuple(DEFAULT_NETWORK_CAPABILITIES if capabilities is None else capabilities)

    @property
    def name(self) -> str:
        return "network_risk"

    @property
    def category(self) -> str:
        return "Network"

    def _level_for(self, score: int) -> RiskLevel:
        if score >= self.config.high_threshold:
            return RiskLevel.HIGH
        if score >= self.config.medium_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def analyze(self, permissions, target_sdk_version: int) -> NetworkRiskResult:
        """
        Analyze network exfiltration risk.

        Args:
            permissions: Requested permission identifiers
            target_sdk_version: Target SDK, 0 when unknown

        Returns:
            NetworkRiskResult
        """
        permissions = as_permission_set(permissions)
        has_internet = INTERNET_PERMISSION in permissions
        exfil = permissions & self.data_exfil_permissions

        score = 0
        if has_internet:
            score = min(100, self.config.points_per_exfil_permission * len(exfil))

        result = NetworkRiskResult(
            has_internet=has_internet,
            exfil_risk_score=score,
            risk_level=self._level_for(score),
            network_capabilities=[label for perm, label in self.capabilities if perm in permissions],
            data_exfil_permissions=exfil,
            network_permissions=permissions & self.network_permissions,
            uses_cleartext=target_sdk_version < self.config.cleartext_sdk_cutoff,
            can_access_wifi="android.permission.ACCESS_WIFI_STATE" in permissions,
            can_change_network="android.permission.CHANGE_NETWORK_STATE" in permissions,
        )

        self.logger.debug(f"Network risk score {score} ({len(exfil)} exfil permissions, internet={has_internet})")
        return result
