import unittest

from apprisk_core.infrastructure.shared import MalformedInputError
from apprisk_core.logic.models import (
    AppMetadata,
    AssessmentStatus,
    BatchSummary,
    RecommendedAction,
    RiskAssessment,
    RiskFactor,
    RiskLevel,
    format_file_size,
)


class AppMetadataTests(unittest.TestCase):
    def test_defaults(self):
        app = AppMetadata("com.example.app")
        self.assertEqual(app.requested_permissions, frozenset())
        self.assertIsNone(app.installer_identifier)
        self.assertEqual(app.target_sdk_version, 0)
        self.assertEqual(app.label, "com.example.app")
        self.assertEqual(app.formatted_size, "Unknown")

    def test_null_permissions_become_empty(self):
        self.assertEqual(AppMetadata("com.example.app", requested_permissions=None).requested_permissions, frozenset())

    def test_permissions_are_deduplicated(self):
        app = AppMetadata("com.example.app", requested_permissions=["a.B", "a.B", " a.C ", "", None])
        self.assertEqual(app.requested_permissions, frozenset({"a.B", "a.C"}))

    def test_string_permissions_rejected(self):
        with self.assertRaises(MalformedInputError):
            AppMetadata("com.example.app", requested_permissions="android.permission.CAMERA")

    def test_empty_package_rejected(self):
        with self.assertRaises(MalformedInputError):
            AppMetadata("  ")

    def test_non_numeric_sdk_rejected(self):
        with self.assertRaises(MalformedInputError):
            AppMetadata("com.example.app", target_sdk_version="latest")

    def test_empty_installer_is_none(self):
        self.assertFalse(AppMetadata("com.example.app", installer_identifier="").has_installer)

    def test_from_dict_bridge_keys(self):
        app = AppMetadata.from_dict({
            "packageName": "com.example.app",
            "appName": "Example",
            "permissions": ["android.permission.CAMERA"],
            "installer": "com.android.vending",
            "targetSdk": "33",
            "updateTime": None,
            "isDebuggable": None,
            "unknownKey": 1,
        })
        self.assertEqual(app.display_name, "Example")
        self.assertEqual(app.target_sdk_version, 33)
        self.assertEqual(app.last_update_timestamp, 0)
        self.assertFalse(app.is_debuggable)
        self.assertTrue(app.has_permission("android.permission.CAMERA"))

    def test_from_dict_requires_identifier(self):
        with self.assertRaises(MalformedInputError):
            AppMetadata.from_dict({"displayName": "No id"})
        with self.assertRaises(MalformedInputError):
            AppMetadata.from_dict(["not", "a", "mapping"])

    def test_to_dict_round_trip(self):
        app = AppMetadata("com.example.app", "Example", ["b.Y", "a.X"], installer_identifier="x", target_sdk_version=30)
        self.assertEqual(AppMetadata.from_dict(app.to_dict()), app)

    def test_format_file_size(self):
        self.assertEqual(format_file_size(512), "512 B")
        self.assertEqual(format_file_size(2048), "2.0 KB")
        self.assertEqual(format_file_size(5 * 1024 * 1024), "5.0 MB")
        self.assertEqual(format_file_size(None), "Unknown")


class RiskAssessmentTests(unittest.TestCase):
    def _assessment(self, **overrides):
        values = dict(
            package_identifier="com.example.app",
            risk_level=RiskLevel.MEDIUM,
            risk_score=30,
            confidence=0.8,
            action=RecommendedAction.MONITOR,
            app_category="unknown",
            is_trusted=False,
            factors=[RiskFactor("Permission", "CAMERA (unusual for unknown app)", 15)],
        )
        values.update(overrides)
        return RiskAssessment(**values)

    def test_level_action_mapping(self):
        self.assertEqual(RiskLevel.HIGH.action, RecommendedAction.REVIEW)
        self.assertEqual(RiskLevel.MEDIUM.action, RecommendedAction.MONITOR)
        self.assertEqual(RiskLevel.LOW.action, RecommendedAction.SAFE)

    def test_level_ordering(self):
        self.assertLess(RiskLevel.LOW, RiskLevel.MEDIUM)
        self.assertGreater(RiskLevel.HIGH, RiskLevel.MEDIUM)
        self.assertEqual(max([RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.LOW]), RiskLevel.HIGH)

    def test_validation(self):
        with self.assertRaises(ValueError):
            self._assessment(risk_score=101)
        with self.assertRaises(ValueError):
            self._assessment(confidence=1.5)
        with self.assertRaises(ValueError):
            self._assessment(action=RecommendedAction.SAFE)

    def test_bridge_shape(self):
        data = self._assessment().to_dict()
        self.assertEqual(data["risk"], "MEDIUM")
        self.assertEqual(data["action"], "MONITOR")
        self.assertEqual(data["riskIndicators"], ["Permission: CAMERA (unusual for unknown app) (+15)"])
        self.assertEqual(data["riskBreakdown"][0]["points"], 15)
        self.assertEqual(data["status"], "analyzed")
        self.assertIsNone(data["error"])

    def test_batch_summary(self):
        assessments = [
            self._assessment(),
            self._assessment(risk_level=RiskLevel.HIGH, action=RecommendedAction.REVIEW, risk_score=80),
            self._assessment(risk_level=RiskLevel.LOW, action=RecommendedAction.SAFE, risk_score=0,
                             confidence=0.5, status=AssessmentStatus.DEFAULTED, error="gone"),
        ]
        summary = BatchSummary.from_assessments(assessments)
        self.assertEqual((summary.total, summary.analyzed, summary.defaulted), (3, 2, 1))
        self.assertEqual(summary.high_risk_count, 1)
        self.assertEqual(summary.to_dict()["byAction"], {"SAFE": 1, "MONITOR": 1, "REVIEW": 1})


if __name__ == "__main__":
    unittest.main()
