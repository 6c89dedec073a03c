import unittest

from vc_review_helper.diff.diff_collector import FileChange
from vc_review_helper.grouping.change_classifier import CLASSIFICATION_RULES, classify_changes


class TestChangeClassifier(unittest.TestCase):
    def test_classify_change_cases(self) -> None:
        cases = [
            ("src/a.ts", "+export function foo(){}", "feat"),
            ("models.py", "+class User:\n", "feat"),
            ("models.py", "-    return None\n+    return bug_free()\n", "fix"),
            ("app.py", "+raise error\n", "fix"),
            ("README.md", "+Install with pip\n", "docs"),
            ("docs/guide.md", "", "docs"),
            ("src/app.test.ts", "+expect(1).toBe(1)\n", "test"),
            ("src/app.spec.js", "", "test"),
            ("setup.cfg", "+version = 2\n", "chore"),
        ]
        for file_path, diff, expected in cases:
            with self.subTest(file=file_path, diff=diff):
                self.assertEqual(classify_changes([FileChange(file_path, diff)]), expected)

    def test_feat_requires_an_addition(self) -> None:
        # Keywords without a '+' anywhere in the diff are not a new feature.
        changes = [FileChange("lib.js", "-export function old(){}")]
        self.assertEqual(classify_changes(changes), "chore")

    def test_feat_checks_each_change_on_its_own(self) -> None:
        changes = [
            FileChange("a.py", "+x = 1"),
            FileChange("b.py", "-class Old:"),
        ]
        self.assertEqual(classify_changes(changes), "chore")

    def test_fix_keywords_are_case_sensitive(self) -> None:
        self.assertEqual(classify_changes([FileChange("a.py", "-FIX ME\n")]), "chore")
        self.assertEqual(classify_changes([FileChange("a.py", "-Bug report\n")]), "chore")

    def test_feat_wins_over_docs(self) -> None:
        changes = [
            FileChange("README.md", "+More docs\n"),
            FileChange("src/index.ts", "+export const x = 1;\n"),
        ]
        self.assertEqual(classify_changes(changes), "feat")

    def test_fix_wins_over_docs_and_test(self) -> None:
        changes = [
            FileChange("CHANGELOG.md", "+- fix crash\n"),
            FileChange("app.test.ts", "+it('works')\n"),
        ]
        self.assertEqual(classify_changes(changes), "fix")

    def test_docs_wins_over_test(self) -> None:
        changes = [
            FileChange("app.test.ts", "+it('works')\n"),
            FileChange("README", "+usage\n"),
        ]
        self.assertEqual(classify_changes(changes), "docs")

    def test_rule_order(self) -> None:
        self.assertEqual([label for label, _ in CLASSIFICATION_RULES], ["feat", "fix", "docs", "test"])


if __name__ == "__main__":
    unittest.main()
