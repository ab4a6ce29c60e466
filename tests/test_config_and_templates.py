from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from ghgen.core.models import FileContent
from ghgen.exceptions import ConfigurationError
from ghgen.rendering.templates import DEFAULT_TEMPLATE, PromptContext, TemplateLoader, flatten_context
from ghgen.runtime.config import ProjectSettings

from tests._helpers import write


class ProjectSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.cwd = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_default_file_is_empty(self) -> None:
        self.assertEqual(ProjectSettings.load(None, cwd=self.cwd), ProjectSettings())

    def test_reads_default_file(self) -> None:
        write(self.cwd / "ghgen.json", '{"model": "gpt-4o", "maxTokens": 1500, "template": "mine.txt"}')
        self.assertEqual(
            ProjectSettings.load(None, cwd=self.cwd),
            ProjectSettings(model="gpt-4o", max_tokens=1500, template="mine.txt"),
        )

    def test_snake_case_keys(self) -> None:
        write(self.cwd / "conf/alt.json", '{"max_tokens": 10}')
        self.assertEqual(ProjectSettings.load("conf/alt.json", cwd=self.cwd).max_tokens, 10)

    def test_missing_explicit_file(self) -> None:
        with self.assertRaises(ConfigurationError):
            ProjectSettings.load("nope.json", cwd=self.cwd)

    def test_invalid_json(self) -> None:
        write(self.cwd / "ghgen.json", "{model: }")
        with self.assertRaises(ConfigurationError):
            ProjectSettings.load(None, cwd=self.cwd)

    def test_non_object(self) -> None:
        write(self.cwd / "ghgen.json", "[1, 2]")
        with self.assertRaises(ConfigurationError):
            ProjectSettings.load(None, cwd=self.cwd)


class TemplateLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.cwd = Path(self._tmp.name)
        self.loader = TemplateLoader(cwd=self.cwd)
        self.context = PromptContext(
            prompt="Do it",
            prompt_with_line_numbers="1: Do it",
            files=(FileContent("a.py", "A = 1"), FileContent("new.py", None, "old")),
            output_format="FORMAT",
        ).as_dict()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_builtin_default(self) -> None:
        out = self.loader.load(None)(self.context)
        self.assertIn("Contents of the file a.py:\n```\nA = 1\n```", out)
        self.assertIn("File new.py does not exist yet.", out)
        self.assertTrue(out.rstrip().endswith("FORMAT"))
        self.assertIn("Do it", out)

    def test_project_default_wins_over_builtin(self) -> None:
        write(self.cwd / "ghgen/templates/default.txt", "P:{prompt_with_line_numbers}")
        self.assertEqual(self.loader.load(None)(self.context), "P:1: Do it")

    def test_explicit_path_and_named_template(self) -> None:
        write(self.cwd / "t/custom.txt", "C:{prompt}")
        write(self.cwd / "ghgen/templates/named.txt", "N:{prompt}")
        self.assertEqual(self.loader.load("t/custom.txt")(self.context), "C:Do it")
        self.assertEqual(self.loader.load("named.txt")(self.context), "N:Do it")

    def test_python_template_file(self) -> None:
        write(
            self.cwd / "tpl.py",
            """
            def render(context):
                return context["prompt"] + "|" + ",".join(f.name for f in context["files"])

            def shout(context):
                return context["prompt"].upper()
            """,
        )
        self.assertEqual(self.loader.load("tpl.py")(self.context), "Do it|a.py,new.py")
        self.assertEqual(self.loader.load("tpl.py:shout")(self.context), "DO IT")

    def test_missing_explicit_template(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.loader.load("missing.txt")
        with self.assertRaises(ConfigurationError):
            self.loader.load("no_such_module_xyz:render")

    def test_flatten_context(self) -> None:
        flat = flatten_context(PromptContext(prompt="p", prompt_with_line_numbers="1: p", multi=True).as_dict())
        self.assertEqual(flat["files"], "")
        self.assertEqual(flat["source_file"], "")
        self.assertEqual(flat["multi"], "true")
        self.assertIn("{prompt}", DEFAULT_TEMPLATE)


if __name__ == "__main__":
    unittest.main()
