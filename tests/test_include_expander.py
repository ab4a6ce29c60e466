from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from ghgen.exceptions import ConfigurationError, CyclicIncludeError, IncludeResolutionError
from ghgen.processing.include_expander import IncludeExpander, build_directive_pattern

from tests._helpers import FakeGit, write


class IncludeExpanderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.git = FakeGit(root=self.root)
        self.expander = IncludeExpander(git=self.git)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_text_without_directives_is_unchanged(self) -> None:
        for text in ("", "plain text", "exclude:foo and include: spaced", "reinclude:x"):
            self.assertEqual(self.expander.expand(text, None, self.root), text)

    def test_relative_to_origin_file(self) -> None:
        write(self.root / "prompts/parts/intro.md", "Hello from intro")
        origin = write(self.root / "prompts/main.md", "")
        out = self.expander.expand("Start\ninclude:parts/intro.md\nEnd", origin, self.root)
        self.assertEqual(out, "Start\nHello from intro\nEnd")

    def test_relative_to_base_dir_without_origin(self) -> None:
        write(self.root / "snippet.txt", "S")
        self.assertEqual(self.expander.expand("[ include:snippet.txt ]", None, self.root), "[ S ]")

    def test_namespaced_token_and_quote_terminator(self) -> None:
        write(self.root / "a.txt", "A")
        out = self.expander.expand('x ghgen:include:a.txt y "include:a.txt"', None, self.root)
        self.assertEqual(out, 'x ghgen:A y "A"')

    def test_nested_includes_chain_relative_paths(self) -> None:
        write(self.root / "lib/inner/leaf.md", "leaf")
        write(self.root / "lib/middle.md", "middle( include:inner/leaf.md )")
        out = self.expander.expand("top( include:lib/middle.md )", None, self.root)
        self.assertEqual(out, "top( middle( leaf ) )")

    def test_each_occurrence_resolves_independently(self) -> None:
        write(self.root / "one.txt", "1")
        write(self.root / "two.txt", "2")
        out = self.expander.expand("include:one.txt include:two.txt include:one.txt", None, self.root)
        self.assertEqual(out, "1 2 1")

    def test_same_file_from_sibling_branches_is_not_a_cycle(self) -> None:
        write(self.root / "shared.txt", "shared")
        write(self.root / "left.txt", "L:include:shared.txt")
        write(self.root / "right.txt", "R:include:shared.txt")
        out = self.expander.expand("include:left.txt | include:right.txt", None, self.root)
        self.assertEqual(out, "L:shared | R:shared")

    def test_output_is_a_fixed_point(self) -> None:
        write(self.root / "a.md", "alpha include:b.md")
        write(self.root / "b.md", "beta")
        once = self.expander.expand("include:a.md !", None, self.root)
        self.assertEqual(self.expander.expand(once, None, self.root), once)

    def test_root_relative_path_uses_git_root(self) -> None:
        write(self.root / "docs/style.md", "STYLE")
        origin = write(self.root / "deep/nested/prompt.md", "")
        out = self.expander.expand("include:/docs/style.md", origin, self.root)
        self.assertEqual(out, "STYLE")
        self.assertEqual(self.git.root_lookups, [origin.parent])

    def test_root_relative_without_git_root_is_configuration_error(self) -> None:
        expander = IncludeExpander(git=FakeGit(root=None))
        with self.assertRaises(ConfigurationError):
            expander.expand("include:/docs/style.md", None, self.root)

    def test_missing_file_aborts_expansion(self) -> None:
        write(self.root / "ok.txt", "ok")
        with self.assertRaises(IncludeResolutionError) as ctx:
            self.expander.expand("include:ok.txt include:missing.txt", None, self.root)
        self.assertEqual(ctx.exception.path, self.root / "missing.txt")
        self.assertIn("missing.txt", str(ctx.exception))

    def test_self_include_is_cyclic(self) -> None:
        origin = write(self.root / "loop.md", "include:loop.md")
        with self.assertRaises(CyclicIncludeError) as ctx:
            self.expander.expand(origin.read_text(), origin, self.root)
        self.assertEqual(ctx.exception.chain, (origin, origin))

    def test_transitive_cycle(self) -> None:
        write(self.root / "a.md", "include:b.md")
        write(self.root / "b.md", "include:c.md")
        write(self.root / "c.md", "include:a.md")
        with self.assertRaises(CyclicIncludeError) as ctx:
            self.expander.expand("include:a.md", None, self.root)
        names = [p.name for p in ctx.exception.chain]
        self.assertEqual(names, ["a.md", "b.md", "c.md", "a.md"])

    def test_custom_token(self) -> None:
        write(self.root / "a.txt", "A")
        expander = IncludeExpander(git=self.git, token="@embed:")
        self.assertEqual(expander.expand("x @embed:a.txt include:a.txt", None, self.root), "x A include:a.txt")


class DirectivePatternTests(unittest.TestCase):
    def test_path_stops_at_whitespace_and_quotes(self) -> None:
        rx = build_directive_pattern()
        self.assertEqual(rx.findall("include:a/b.md\t'include:c.md' \"include:d.md\""), ["a/b.md", "c.md", "d.md"])


if __name__ == "__main__":
    unittest.main()
