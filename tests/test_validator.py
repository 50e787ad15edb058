import dataclasses
import tempfile
import unittest
from pathlib import Path

from packcheck.core.profiles import default_profile
from packcheck.core.validator import validate_pack
from packcheck.models import Pack

from pack_fixtures import make_pack, write


class TestValidatePack(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.packs = Path(self._td.name)
        self.profile = default_profile()

    def tearDown(self):
        self._td.cleanup()

    def validate(self, name="Research"):
        return validate_pack(Pack(name, self.packs / name), self.profile)

    def test_compliant_pack(self):
        make_pack(self.packs)
        r = self.validate()
        self.assertTrue(r.valid)
        self.assertEqual(r.errors, ())
        self.assertEqual(r.warnings, ())
        self.assertEqual(
            [c.name for c in r.checks],
            ["required_files", "structure", "content", "install_guide",
             "verify_guide", "readme", "compatibility"],
        )

    def test_pack_not_found_short_circuits(self):
        r = self.validate("Ghost")
        self.assertFalse(r.valid)
        self.assertEqual(len(r.errors), 1)
        self.assertIn("Pack not found", r.errors[0])
        self.assertEqual(len(r.checks), 1)
        self.assertEqual(r.warnings, ())

    def test_missing_install_guide(self):
        make_pack(self.packs, install=None)
        r = self.validate()
        self.assertFalse(r.valid)
        self.assertTrue(any("INSTALL.md" in e for e in r.errors))

    def test_missing_verify_guide(self):
        make_pack(self.packs, verify=None)
        r = self.validate()
        self.assertFalse(r.valid)
        self.assertTrue(any("VERIFY.md" in e for e in r.errors))

    def test_missing_readme_only_warns(self):
        make_pack(self.packs, readme=None)
        r = self.validate()
        self.assertTrue(r.valid)
        self.assertEqual(r.errors, ())
        self.assertTrue(any("README.md" in w for w in r.warnings))

    def test_readme_sections_never_fail(self):
        make_pack(self.packs, readme="just text\n")
        r = self.validate()
        self.assertTrue(r.valid)
        self.assertEqual(len(r.warnings), 3)

    def test_no_content_kinds(self):
        make_pack(self.packs, skill=None, agent=None)
        (self.packs / "Research" / "src" / "misc").mkdir(parents=True)
        r = self.validate()
        self.assertFalse(r.valid)
        self.assertTrue(any("src/ directory is empty" in e for e in r.errors))

    def test_missing_content_root(self):
        make_pack(self.packs, skill=None, agent=None)
        r = self.validate()
        self.assertFalse(r.valid)
        self.assertIn("src/ directory not found", r.errors)

    def test_one_kind_is_enough(self):
        make_pack(self.packs, agent=None)
        self.assertTrue(self.validate().valid)

    def test_malformed_skill_fails_pack(self):
        make_pack(self.packs, skill="---\nname: x\n---\n")
        r = self.validate()
        self.assertFalse(r.valid)
        self.assertTrue(any("description:" in e for e in r.errors))
        self.assertTrue(any("version:" in e for e in r.errors))

    def test_all_checks_run_after_failures(self):
        make_pack(self.packs, install=None, verify=None, skill="broken")
        write(self.packs / "Research" / "src" / "agents" / "Bad.md", "chmod +x x.sh")
        r = self.validate()
        self.assertFalse(r.valid)
        self.assertEqual(len(r.checks), 7)
        self.assertTrue(any("Bad.md" in w for w in r.warnings))

    def test_hardcoded_path_fails_otherwise_valid_pack(self):
        make_pack(self.packs)
        write(
            self.packs / "Research" / "src" / "skills" / "Research" / "notes.md",
            "Config lives in C:\\Users\\alice\\.claude\\settings.json\n",
        )
        r = self.validate()
        self.assertFalse(r.valid)
        self.assertEqual(r.errors, ())
        self.assertTrue(any("notes.md" in w for w in r.warnings))

    def test_compatibility_can_be_advisory(self):
        make_pack(self.packs)
        write(self.packs / "Research" / "src" / "tools" / "setup.md", "run chmod +x setup.sh")
        self.profile = dataclasses.replace(self.profile, compatibility_gates_validity=False)
        r = self.validate()
        self.assertTrue(r.valid)
        self.assertTrue(any("setup.md" in w for w in r.warnings))

    def test_installer_script_shebang(self):
        make_pack(self.packs)
        write(self.packs / "Research" / "src" / "install.ts", "console.log('hi')\n")
        r = self.validate()
        self.assertTrue(r.valid)
        self.assertTrue(any("install.ts" in w for w in r.warnings))

    def test_idempotent(self):
        make_pack(self.packs, readme=None, verify="nothing\n")
        first = self.validate()
        second = self.validate()
        self.assertEqual(first.errors, second.errors)
        self.assertEqual(first.warnings, second.warnings)
        self.assertEqual(first.valid, second.valid)


if __name__ == "__main__":
    unittest.main()
