import unittest

from apprisk_core.heuristics.behavior import RuntimeBehaviorEvaluator
from apprisk_core.heuristics.build import BuildFlagEvaluator
from apprisk_core.heuristics.platform import PlatformFreshnessEvaluator
from apprisk_core.logic.models import FreshnessConfig

P = "android.permission."
NOW = 1_700_000_000_000
TWO_YEARS_MS = 2 * 365 * 24 * 3600 * 1000


class BuildFlagEvaluatorTests(unittest.TestCase):
    def setUp(self):
        self.evaluator = BuildFlagEvaluator()

    def test_clean_build(self):
        result = self.evaluator.evaluate(False, False, is_sideloaded=True, combo_triggered=True)
        self.assertEqual(result.points, 0)
        self.assertFalse(result.force_high)

    def test_debuggable_alone_does_not_force(self):
        result = self.evaluator.evaluate(True, False)
        self.assertEqual(result.points, 30)
        self.assertEqual(result.factors[0].description, "App is debuggable (security vulnerability)")
        self.assertFalse(result.force_high)

    def test_debuggable_and_sideloaded_forces_high(self):
        self.assertTrue(self.evaluator.evaluate(True, False, is_sideloaded=True).force_high)

    def test_debuggable_and_combo_forces_high(self):
        self.assertTrue(self.evaluator.evaluate(True, False, combo_triggered=True).force_high)

    def test_test_only_never_forces(self):
        result = self.evaluator.evaluate(False, True, is_sideloaded=True)
        self.assertEqual(result.points, 25)
        self.assertFalse(result.force_high)

    def test_both_flags(self):
        result = self.evaluator.evaluate(True, True)
        self.assertEqual(result.points, 55)
        self.assertEqual([f.category for f in result.factors], ["Build", "Build"])


class PlatformFreshnessEvaluatorTests(unittest.TestCase):
    def setUp(self):
        self.evaluator = PlatformFreshnessEvaluator()

    def test_outdated_target(self):
        result = self.evaluator.evaluate(28, 0, NOW)
        self.assertEqual(result.points, 15)
        self.assertEqual(result.factors[0].description, "Targets outdated Android (SDK 28 < 29)")

    def test_current_or_unknown_target(self):
        self.assertEqual(self.evaluator.evaluate(29, 0, NOW).points, 0)
        self.assertEqual(self.evaluator.evaluate(0, 0, NOW).points, 0)

    def test_stale_update(self):
        result = self.evaluator.evaluate(33, NOW - TWO_YEARS_MS - 1, NOW)
        self.assertEqual(result.points, 10)
        self.assertEqual(result.factors[0].category, "Maintenance")
        self.assertEqual(result.factors[0].description, "Not updated in over 2 years")

    def test_staleness_boundary_is_strict(self):
        self.assertEqual(self.evaluator.evaluate(33, NOW - TWO_YEARS_MS, NOW).points, 0)

    def test_unknown_update_time_is_never_stale(self):
        self.assertFalse(self.evaluator.is_stale(0, NOW))

    def test_both_signals(self):
        result = self.evaluator.evaluate(22, NOW - 3 * TWO_YEARS_MS, NOW)
        self.assertEqual(result.points, 25)
        self.assertEqual([f.category for f in result.factors], ["Platform", "Maintenance"])

    def test_configurable_policy(self):
        evaluator = PlatformFreshnessEvaluator(FreshnessConfig(min_target_sdk=31, stale_after_ms=TWO_YEARS_MS // 2))
        self.assertTrue(evaluator.is_outdated_target(30))
        result = evaluator.evaluate(33, NOW - TWO_YEARS_MS // 2 - 1, NOW)
        self.assertEqual(result.factors[0].description, "Not updated in over 1 years")


class RuntimeBehaviorEvaluatorTests(unittest.TestCase):
    def setUp(self):
        self.evaluator = RuntimeBehaviorEvaluator()

    def test_accessibility(self):
        result = self.evaluator.evaluate({P + "BIND_ACCESSIBILITY_SERVICE"}, 0)
        self.assertEqual(result.points, 40)
        self.assertEqual(result.factors[0].description, "Uses Accessibility Service (can read screen)")

    def test_overlay(self):
        self.assertEqual(self.evaluator.evaluate({P + "SYSTEM_ALERT_WINDOW"}, 0).points, 25)

    def test_boot_needs_internet(self):
        self.assertEqual(self.evaluator.evaluate({P + "RECEIVE_BOOT_COMPLETED"}, 0).points, 0)
        self.assertEqual(self.evaluator.evaluate({P + "RECEIVE_BOOT_COMPLETED", P + "INTERNET"}, 0).points, 15)

    def test_background_services(self):
        self.assertEqual(self.evaluator.evaluate(set(), 5).points, 0)
        result = self.evaluator.evaluate(set(), 6)
        self.assertEqual(result.points, 10)
        self.assertEqual(result.factors[0].description, "Excessive background services (6)")

    def test_all_signals_in_order(self):
        permissions = {P + "BIND_ACCESSIBILITY_SERVICE", P + "SYSTEM_ALERT_WINDOW",
                       P + "RECEIVE_BOOT_COMPLETED", P + "INTERNET"}
        result = self.evaluator.evaluate(permissions, 9)
        self.assertEqual(result.points, 90)
        self.assertEqual(len(result.factors), 4)
        self.assertTrue(all(f.category == "Runtime" for f in result.factors))


if __name__ == "__main__":
    unittest.main()
