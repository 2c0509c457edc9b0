import unittest

from apprisk_core.infrastructure.shared import ConfigurationError, ErrorHandlingService
from apprisk_core.logic.models import (
    AppMetadata,
    AssessmentStatus,
    BatchConfig,
    EngineConfig,
    RiskLevel,
)
from apprisk_core.logic.services import AnalysisService, ScoreAggregator

P = "android.permission."
NOW = 1_700_000_000_000


class FailingAggregator(ScoreAggregator):
    """Raises for selected packages."""

    def __init__(self, failures, **kwargs):
        super().__init__(**kwargs)
        self.failures = failures

    def score(self, metadata, now=None):
        error = self.failures.get(metadata.package_identifier)
        if error is not None:
            raise error
        return super().score(metadata, now=now)


def apps(count):
    return [
        AppMetadata(f"com.example.app{i}", f"App {i}", [P + "INTERNET"] * (i % 2),
                    installer_identifier="com.android.vending", target_sdk_version=33)
        for i in range(count)
    ]


class AnalysisServiceTests(unittest.TestCase):
    def setUp(self):
        self.errors = ErrorHandlingService(handlers=[])
        self.service = AnalysisService(EngineConfig(batch=BatchConfig(max_workers=3)), error_service=self.errors)

    def test_analyze_accepts_bridge_dict(self):
        result = self.service.analyze({"packageName": "com.example.app", "permissions": [P + "CAMERA"],
                                       "installer": "com.android.vending"}, now=NOW)
        self.assertEqual(result.status, AssessmentStatus.ANALYZED)
        self.assertEqual(result.risk_score, 15)

    def test_analyze_degrades_malformed_input(self):
        result = self.service.analyze({"packageName": "com.example.app", "permissions": "CAMERA"}, now=NOW)
        self.assertEqual(result.status, AssessmentStatus.DEFAULTED)
        self.assertEqual(result.package_identifier, "com.example.app")
        self.assertEqual(result.confidence, 0.5)

    def test_batch_preserves_order(self):
        batch = apps(12)
        results = self.service.analyze_all(batch, now=NOW)
        self.assertEqual([r.package_identifier for r in results], [a.package_identifier for a in batch])
        self.assertTrue(all(r.status is AssessmentStatus.ANALYZED for r in results))
        self.assertEqual(results[1].risk_score, 4)
        self.assertEqual(results[2].risk_score, 0)

    def test_batch_matches_single_analysis(self):
        batch = apps(5)
        results = self.service.analyze_all(batch, now=NOW)
        for app, result in zip(batch, results):
            self.assertEqual(result.to_dict(), self.service.analyze(app, now=NOW).to_dict())

    def test_empty_batch(self):
        self.assertEqual(self.service.analyze_all([], now=NOW), [])

    def test_failures_degrade_in_place(self):
        batch = [
            apps(1)[0],
            {"displayName": "no identifier"},
            None,
            {"packageName": "com.example.dict", "permissions": None},
        ]
        results = self.service.analyze_all(batch, now=NOW)
        self.assertEqual(len(results), 4)
        self.assertEqual([r.status for r in results], [
            AssessmentStatus.ANALYZED,
            AssessmentStatus.DEFAULTED,
            AssessmentStatus.DEFAULTED,
            AssessmentStatus.ANALYZED,
        ])
        self.assertEqual(results[1].package_identifier, "item[1]")
        self.assertEqual(results[2].risk_level, RiskLevel.LOW)
        self.assertEqual(self.errors.get_error_stats()["analysis.service_warning"], 2)

    def test_scoring_error_does_not_abort_batch(self):
        batch = apps(4)
        aggregator = FailingAggregator({"com.example.app2": RuntimeError("permission query failed")})
        service = AnalysisService(aggregator=aggregator, error_service=self.errors)
        results = service.analyze_all(batch, now=NOW)
        self.assertEqual([r.is_defaulted for r in results], [False, False, True, False])
        self.assertEqual(results[2].error, "permission query failed")
        self.assertEqual(results[2].package_identifier, "com.example.app2")

    def test_configuration_error_is_fatal(self):
        aggregator = FailingAggregator({"com.example.app1": ConfigurationError("catalog unloadable")})
        service = AnalysisService(aggregator=aggregator, error_service=self.errors)
        with self.assertRaises(ConfigurationError):
            service.analyze_all(apps(3), now=NOW)
        with self.assertRaises(ConfigurationError):
            service.analyze(apps(2)[1], now=NOW)

    def test_summarize(self):
        batch = apps(3) + [None]
        summary = self.service.summarize(self.service.analyze_all(batch, now=NOW))
        self.assertEqual(summary.total, 4)
        self.assertEqual(summary.defaulted, 1)
        self.assertEqual(summary.by_level["LOW"], 4)

    def test_sibling_entry_points(self):
        app = AppMetadata("com.example.app", "App", [P + "INTERNET", P + "READ_SMS", P + "RECEIVE_SMS"])
        network = self.service.analyze_network(app)
        self.assertEqual(network.exfil_risk_score, 20)
        malware = self.service.analyze_malware_indicators(app)
        self.assertEqual(malware.matched_combo_count, 1)

    def test_sibling_failures_degrade(self):
        network = self.service.analyze_network({"displayName": "broken"})
        self.assertEqual(network.status, AssessmentStatus.DEFAULTED)
        self.assertEqual(network.exfil_risk_score, 0)

        malware = self.service.analyze_malware_indicators({"packageName": "com.example.x", "targetSdk": "new"})
        self.assertEqual(malware.status, AssessmentStatus.DEFAULTED)
        self.assertTrue(malware.is_safe)
        self.assertEqual(malware.package_identifier, "com.example.x")


if __name__ == "__main__":
    unittest.main()
