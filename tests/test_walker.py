import tempfile
import unittest
from pathlib import Path

from packcheck.core.checkers import check_frontmatter
from packcheck.core.profiles import default_profile
from packcheck.core.walker import dispatch_content, scan_tree

from pack_fixtures import AGENT, SKILL, write


class TestDispatchContent(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.pack = Path(self._td.name)
        self.src = self.pack / "src"
        self.dispatch = {r.kind: r for r in default_profile().kind_rules}

    def tearDown(self):
        self._td.cleanup()

    def run_dispatch(self):
        return dispatch_content(self.src, self.dispatch, check_frontmatter, base=self.pack)

    def test_valid_content_has_no_findings(self):
        write(self.src / "skills" / "Research" / "SKILL.md", SKILL)
        write(self.src / "agents" / "Researcher.md", AGENT)
        self.assertEqual(self.run_dispatch(), [])

    def test_skill_dir_without_definition(self):
        (self.src / "skills" / "Empty").mkdir(parents=True)
        found = self.run_dispatch()
        self.assertEqual([f.code for f in found], ["DEFINITION_MISSING"])
        self.assertEqual(found[0].relpath, "src/skills/Empty/SKILL.md")

    def test_bad_agent_reports_relpath(self):
        write(self.src / "agents" / "Broken.md", "no frontmatter here")
        found = self.run_dispatch()
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].relpath, "src/agents/Broken.md")

    def test_unknown_dirs_and_other_files_skipped(self):
        write(self.src / "tools" / "helper.ts", "export {}")
        write(self.src / "commands" / "run.md", "not checked")
        write(self.src / "misc" / "SKILL.md", "not checked")
        write(self.src / "agents" / "notes.txt", "not an agent")
        write(self.src / "skills" / "loose.md", "files directly under skills are not skills")
        self.assertEqual(self.run_dispatch(), [])

    def test_dispatch_is_shallow(self):
        write(self.src / "agents" / "nested" / "Deep.md", "no frontmatter")
        write(self.src / "skills" / "Research" / "sub" / "SKILL.md", "no frontmatter")
        write(self.src / "skills" / "Research" / "SKILL.md", SKILL)
        self.assertEqual(self.run_dispatch(), [])

    def test_missing_content_root(self):
        self.assertEqual(self.run_dispatch(), [])


class TestScanTree(unittest.TestCase):
    def test_recurses_across_kinds(self):
        with tempfile.TemporaryDirectory() as td:
            pack = Path(td)
            write(pack / "src" / "skills" / "A" / "SKILL.md", "a")
            write(pack / "src" / "skills" / "A" / "docs" / "deep" / "notes.md", "b")
            write(pack / "src" / "other" / "x.ts", "c")
            write(pack / "src" / ".hidden" / "y.md", "d")

            files = scan_tree(pack / "src", base=pack)
            rels = [f.relpath for f in files]
            self.assertIn("src/skills/A/docs/deep/notes.md", rels)
            self.assertIn("src/other/x.ts", rels)
            self.assertIn("src/.hidden/y.md", rels)

            md_only = scan_tree(pack / "src", base=pack, suffixes=[".md"], ignore_hidden=True)
            self.assertEqual(
                [f.relpath for f in md_only],
                ["src/skills/A/SKILL.md", "src/skills/A/docs/deep/notes.md"],
            )

    def test_missing_root(self):
        with tempfile.TemporaryDirectory() as td:
            self.assertEqual(scan_tree(Path(td) / "src"), [])


if __name__ == "__main__":
    unittest.main()
