import unittest

from apprisk_core.heuristics.context import CategoryClassifier, ProvenanceEvaluator, TrustEvaluator
from apprisk_core.logic.models import AppCategory, AppMetadata, InstallSource, ProvenanceConfig, TrustConfig


class CategoryClassifierTests(unittest.TestCase):
    def setUp(self):
        self.classifier = CategoryClassifier()

    def test_camera_checked_before_messaging(self):
        self.assertEqual(self.classifier.classify("com.example.wa", "WhatsApp Camera"), AppCategory.CAMERA)

    def test_keyword_sets(self):
        cases = [
            ("org.telegram.messenger", "Telegram", AppCategory.MESSAGING),
            ("com.zhiliaoapp.musically", "TikTok", AppCategory.SOCIAL),
            ("com.skype.raider", "Skype", AppCategory.COMMUNICATION),
            ("com.ubercab", "Uber", AppCategory.LOCATION),
            ("com.example.puzzlegame", "Puzzles", AppCategory.GAME),
            ("com.example.torch", "Flashlight", AppCategory.UTILITY),
            ("com.example.notes", "Notes", AppCategory.UNKNOWN),
        ]
        for package, name, expected in cases:
            self.assertEqual(self.classifier.classify(package, name), expected, package)

    def test_first_matching_set_wins(self):
        # "video" is a camera keyword, checked before "zoom"
        self.assertEqual(self.classifier.classify("us.zoom.videomeetings", "Zoom"), AppCategory.CAMERA)

    def test_case_insensitive(self):
        self.assertEqual(self.classifier.classify("COM.EXAMPLE.QRREADER", ""), AppCategory.CAMERA)

    def test_missing_display_name(self):
        self.assertEqual(self.classifier.classify("com.example.calculator", None), AppCategory.UTILITY)

    def test_substitute_keywords(self):
        classifier = CategoryClassifier([(AppCategory.GAME, ("chess",))])
        self.assertEqual(classifier.classify("org.example.chess", "Chess"), AppCategory.GAME)
        self.assertEqual(classifier.classify("org.example.camera", "Camera"), AppCategory.UNKNOWN)


class TrustEvaluatorTests(unittest.TestCase):
    def setUp(self):
        self.trust = TrustEvaluator()

    def test_system_app(self):
        self.assertTrue(self.trust.is_trusted(AppMetadata("org.example.app", is_system_app=True)))

    def test_privileged_partition(self):
        self.assertTrue(self.trust.is_trusted(AppMetadata("org.example.app", is_privileged_partition=True)))

    def test_vendor_prefixes(self):
        for package in ("com.google.android.gm", "com.android.chrome", "com.samsung.android.app.notes",
                        "com.sec.android.app.camera", "com.miui.gallery", "com.huawei.health"):
            self.assertTrue(self.trust.is_trusted(AppMetadata(package)), package)

    def test_prefix_requires_dot_boundary(self):
        self.assertFalse(self.trust.is_trusted(AppMetadata("com.googlex.app")))
        self.assertFalse(self.trust.is_trusted(AppMetadata("org.example.app")))

    def test_configured_prefixes(self):
        trust = TrustEvaluator(TrustConfig(trusted_prefixes=("org.example.",)))
        self.assertTrue(trust.is_trusted(AppMetadata("org.example.app")))
        self.assertFalse(trust.is_trusted(AppMetadata("com.google.android.gm")))

    def test_trusted_factor(self):
        factor = self.trust.trusted_result().factors[0]
        self.assertEqual((factor.category, factor.description, factor.points),
                         ("Trusted", "System or verified publisher app", 0))


class ProvenanceEvaluatorTests(unittest.TestCase):
    def setUp(self):
        self.provenance = ProvenanceEvaluator()

    def test_classify(self):
        self.assertEqual(self.provenance.classify(None), InstallSource.SIDELOADED)
        self.assertEqual(self.provenance.classify(""), InstallSource.SIDELOADED)
        self.assertEqual(self.provenance.classify("   "), InstallSource.SIDELOADED)
        self.assertEqual(self.provenance.classify("com.android.vending"), InstallSource.STORE)
        self.assertEqual(self.provenance.classify("com.amazon.venezia"), InstallSource.THIRD_PARTY_STORE)

    def test_sideloaded_points(self):
        app = AppMetadata("org.example.app")
        plain = self.provenance.evaluate(app, has_high_risk_permission=False)
        self.assertEqual(plain.points, 20)
        self.assertEqual(plain.factors[0].description, "Sideloaded (not from Play Store)")

        risky = self.provenance.evaluate(app, has_high_risk_permission=True)
        self.assertEqual(risky.points, 30)
        self.assertEqual(risky.factors[0].description, "Sideloaded (not from Play Store) with high-risk permissions")

    def test_blank_installer_counts_as_sideloaded(self):
        app = AppMetadata("org.example.app", installer_identifier="  ")
        self.assertIsNone(app.installer_identifier)
        self.assertFalse(app.has_installer)
        self.assertEqual(self.provenance.evaluate(app, has_high_risk_permission=False).points, 20)

    def test_third_party_store(self):
        result = self.provenance.evaluate(AppMetadata("org.example.app", installer_identifier="com.amazon.venezia"), True)
        self.assertEqual(result.points, 15)
        self.assertEqual(result.factors[0].category, "Installation")

    def test_store_adds_nothing(self):
        result = self.provenance.evaluate(AppMetadata("org.example.app", installer_identifier="com.android.vending"), True)
        self.assertEqual(result.points, 0)
        self.assertEqual(result.factors, [])

    def test_configured_store(self):
        provenance = ProvenanceEvaluator(ProvenanceConfig(store_installer="com.example.store"))
        self.assertEqual(provenance.classify("com.example.store"), InstallSource.STORE)
        self.assertEqual(provenance.classify("com.android.vending"), InstallSource.THIRD_PARTY_STORE)


if __name__ == "__main__":
    unittest.main()
