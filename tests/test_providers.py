import json
import tempfile
import unittest
from pathlib import Path

import yaml

from apprisk_core.infrastructure.providers import FileMetadataProvider, InMemoryMetadataProvider, ProviderError
from apprisk_core.infrastructure.shared import MalformedInputError, MissingMetadataError
from apprisk_core.logic.models import AppMetadata


RECORDS = [
    {"packageName": "com.example.one", "appName": "One", "permissions": ["android.permission.CAMERA"],
     "installer": "com.android.vending", "targetSdk": 33},
    {"package_identifier": "com.example.two", "display_name": "Two"},
    {"displayName": "record without an identifier"},
    {"packageName": "com.example.broken", "permissions": "android.permission.CAMERA"},
]


class InMemoryMetadataProviderTests(unittest.TestCase):
    def test_lookup(self):
        provider = InMemoryMetadataProvider([AppMetadata("com.example.one"), RECORDS[1]])
        self.assertEqual(provider.list_packages(), ["com.example.one", "com.example.two"])
        self.assertEqual(provider.get_metadata("com.example.two").display_name, "Two")

    def test_unknown_package(self):
        provider = InMemoryMetadataProvider()
        with self.assertRaises(MissingMetadataError) as ctx:
            provider.get_metadata("com.example.gone")
        self.assertEqual(ctx.exception.package_identifier, "com.example.gone")

    def test_remove(self):
        provider = InMemoryMetadataProvider([AppMetadata("com.example.one")])
        provider.remove("com.example.one")
        self.assertEqual(provider.list_packages(), [])


class FileMetadataProviderTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_yaml_list(self):
        path = self.dir / "apps.yaml"
        path.write_text(yaml.safe_dump(RECORDS), encoding="utf-8")
        provider = FileMetadataProvider(path)

        self.assertEqual(provider.list_packages(), ["com.example.one", "com.example.two", "com.example.broken"])
        one = provider.get_metadata("com.example.one")
        self.assertEqual(one.target_sdk_version, 33)
        self.assertTrue(one.has_permission("android.permission.CAMERA"))

    def test_json_apps_mapping(self):
        path = self.dir / "apps.json"
        path.write_text(json.dumps({"apps": RECORDS[:2]}), encoding="utf-8")
        provider = FileMetadataProvider(path)
        self.assertEqual(provider.list_packages(), ["com.example.one", "com.example.two"])

    def test_malformed_record_fails_only_its_lookup(self):
        path = self.dir / "apps.yaml"
        path.write_text(yaml.safe_dump(RECORDS), encoding="utf-8")
        provider = FileMetadataProvider(path)
        with self.assertRaises(MalformedInputError):
            provider.get_metadata("com.example.broken")
        self.assertEqual(provider.get_metadata("com.example.two").label, "Two")

    def test_unknown_package(self):
        path = self.dir / "apps.json"
        path.write_text("[]", encoding="utf-8")
        with self.assertRaises(MissingMetadataError):
            FileMetadataProvider(path).get_metadata("com.example.one")

    def test_unreadable_files(self):
        with self.assertRaises(ProviderError):
            FileMetadataProvider(self.dir / "missing.yaml")

        path = self.dir / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ProviderError):
            FileMetadataProvider(path)

        path = self.dir / "scalar.yaml"
        path.write_text("just a string\n", encoding="utf-8")
        with self.assertRaises(ProviderError):
            FileMetadataProvider(path)


if __name__ == "__main__":
    unittest.main()
