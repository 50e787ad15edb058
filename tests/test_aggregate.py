import tempfile
import unittest
from pathlib import Path

from packcheck.core.aggregate import discover_packs, exit_code, validate_all, validate_one
from packcheck.core.profiles import default_profile

from pack_fixtures import make_pack


class TestAggregate(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.packs = Path(self._td.name)
        self.profile = default_profile()

    def tearDown(self):
        self._td.cleanup()

    def test_discover_skips_hidden_and_files(self):
        make_pack(self.packs, "Alpha")
        make_pack(self.packs, "Beta")
        (self.packs / ".git").mkdir()
        (self.packs / "notes.txt").write_text("x", encoding="utf-8")
        self.assertEqual([p.name for p in discover_packs(self.packs)], ["Alpha", "Beta"])

    def test_all_with_one_broken_pack(self):
        make_pack(self.packs, "Alpha")
        make_pack(self.packs, "Beta", verify=None)
        s = validate_all(self.packs, self.profile)
        self.assertFalse(s.overall_valid)
        self.assertGreaterEqual(s.total_errors, 1)
        self.assertEqual(exit_code(s), 1)
        self.assertEqual([r.pack_name for r in s.per_pack], ["Alpha", "Beta"])
        self.assertTrue(s.per_pack[0].valid)

    def test_all_valid(self):
        make_pack(self.packs, "Alpha")
        make_pack(self.packs, "Beta", readme=None)
        s = validate_all(self.packs, self.profile)
        self.assertTrue(s.overall_valid)
        self.assertEqual(s.total_errors, 0)
        self.assertEqual(s.total_warnings, 1)
        self.assertEqual(exit_code(s), 0)

    def test_missing_packs_dir(self):
        s = validate_all(self.packs / "nope", self.profile)
        self.assertFalse(s.overall_valid)
        self.assertEqual(s.per_pack, ())
        self.assertEqual(s.total_errors, 1)
        self.assertEqual(exit_code(s), 1)

    def test_unknown_single_pack(self):
        s = validate_one(self.packs, "Ghost", self.profile)
        self.assertFalse(s.overall_valid)
        self.assertEqual(s.total_errors, 1)
        self.assertEqual(len(s.per_pack), 1)
        self.assertEqual(exit_code(s), 1)

    def test_single_pack_valid(self):
        make_pack(self.packs, "Alpha")
        s = validate_one(self.packs, "Alpha", self.profile)
        self.assertTrue(s.overall_valid)
        self.assertEqual(exit_code(s), 0)


if __name__ == "__main__":
    unittest.main()
