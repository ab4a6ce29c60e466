from __future__ import annotations

import unittest

from ghgen.exceptions import ConfigurationError
from ghgen.processing.front_matter import PromptSettings, parse_prompt_settings
from ghgen.processing.text_ops import add_line_numbers, remove_front_matter, unified_diff
from ghgen.rendering.template_engine import SingleBraceTemplateEngine


class FrontMatterTests(unittest.TestCase):
    def test_remove_front_matter(self) -> None:
        text = "---\nmodel: gpt-4o\n---\nWrite a parser.\n"
        self.assertEqual(remove_front_matter(text), "Write a parser.\n")

    def test_no_front_matter_is_identity(self) -> None:
        for text in ("Plain prompt", "Intro\n---\nnot front matter\n---\n", ""):
            self.assertEqual(remove_front_matter(text), text)

    def test_empty_front_matter(self) -> None:
        self.assertEqual(remove_front_matter("---\n---\nBody"), "Body")
        self.assertEqual(parse_prompt_settings("---\n---\nBody"), PromptSettings())

    def test_settings(self) -> None:
        text = "---\nmodel: gpt-4o\nmaxTokens: 2000\ninclude:\n  - src/a.py\n  - src/b.py\n---\nBody"
        self.assertEqual(
            parse_prompt_settings(text),
            PromptSettings(model="gpt-4o", max_tokens=2000, include=("src/a.py", "src/b.py")),
        )

    def test_single_include_string(self) -> None:
        self.assertEqual(parse_prompt_settings("---\ninclude: a.txt\n---\n").include, ("a.txt",))

    def test_invalid_yaml(self) -> None:
        with self.assertRaises(ConfigurationError):
            parse_prompt_settings("---\nmodel: [unclosed\n---\nBody")

    def test_invalid_types(self) -> None:
        with self.assertRaises(ConfigurationError):
            parse_prompt_settings("---\nmaxTokens: lots\n---\n")
        with self.assertRaises(ConfigurationError):
            parse_prompt_settings("---\ninclude: {a: 1}\n---\n")
        with self.assertRaises(ConfigurationError):
            parse_prompt_settings("---\n- just\n- a list\n---\n")


class LineNumberTests(unittest.TestCase):
    def test_add_line_numbers(self) -> None:
        self.assertEqual(add_line_numbers("a\nb\n"), "1: a\n2: b\n3: ")
        self.assertEqual(add_line_numbers("only"), "1: only")


class DiffTests(unittest.TestCase):
    def test_unified_diff(self) -> None:
        diff = unified_diff("one\nthree\n", "one\ntwo\n", "p.prompt.md")
        self.assertIn("--- a/p.prompt.md", diff)
        self.assertIn("+++ b/p.prompt.md", diff)
        self.assertIn("-two\n", diff)
        self.assertIn("+three\n", diff)

    def test_no_changes(self) -> None:
        self.assertEqual(unified_diff("same\n", "same\n", "x"), "")


class TemplateEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = SingleBraceTemplateEngine()

    def test_placeholders(self) -> None:
        self.assertEqual(self.engine.render("Hi {name}!", {"name": "Ada"}), "Hi Ada!")

    def test_missing_placeholder_is_empty(self) -> None:
        self.assertEqual(self.engine.render("[{nope}]", {}), "[]")

    def test_double_braces_escape(self) -> None:
        self.assertEqual(self.engine.render("{{name}} {name}", {"name": "x"}), "{name} x")

    def test_values_are_not_reinterpreted(self) -> None:
        self.assertEqual(self.engine.render("{code}", {"code": "def f(): return {a}"}), "def f(): return {a}")

    def test_non_identifier_braces_copied(self) -> None:
        self.assertEqual(self.engine.render("{ not ident } {1x}", {}), "{ not ident } {1x}")


if __name__ == "__main__":
    unittest.main()
