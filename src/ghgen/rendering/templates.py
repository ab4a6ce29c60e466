from __future__ import annotations

"""Template resolution and the prompt context handed to templates.

A template is any callable ``(context) -> str``. Two sources exist:

* text files rendered by `SingleBraceTemplateEngine` over `flatten_context`;
* Python callables referenced as ``file.py:func`` or ``package.module:func``,
  which receive the structured context untouched.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from ghgen.constants import DEFAULT_TEMPLATE_NAME, TEMPLATES_DIR
from ghgen.core.interfaces.templating import TemplateEngineProtocol
from ghgen.core.models import FileContent
from ghgen.exceptions import ConfigurationError
from ghgen.logging.helpers import get_logger
from ghgen.rendering.template_engine import SingleBraceTemplateEngine
from ghgen.utils.imports import load_object_from_ref

Template = Callable[[Mapping[str, Any]], str]

DEFAULT_TEMPLATE = """\
{source_file}{files}{prompt}

{output_format}
"""


@dataclass(frozen=True)
class PromptContext:
    """Structured values available to every template."""
    prompt: str
    prompt_with_line_numbers: str
    previous_prompt: str = ""
    previous_prompt_with_line_numbers: str = ""
    prompt_diff: str = ""
    files: Sequence[FileContent] = ()
    source_file: Optional[FileContent] = None
    multi: bool = False
    output_format: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "prompt": self.prompt,
            "prompt_with_line_numbers": self.prompt_with_line_numbers,
            "previous_prompt": self.previous_prompt,
            "previous_prompt_with_line_numbers": self.previous_prompt_with_line_numbers,
            "prompt_diff": self.prompt_diff,
            "files": list(self.files),
            "source_file": self.source_file,
            "multi": self.multi,
            "output_format": self.output_format,
        }


def _render_file(record: FileContent) -> str:
    if record.contents is None:
        return f"File {record.name} does not exist yet.\n\n"
    return f"Contents of the file {record.name}:\n```\n{record.contents}\n```\n\n"


def flatten_context(context: Mapping[str, Any]) -> Dict[str, str]:
    """Render the structured context into string variables for text templates."""
    flat = {k: v for k, v in context.items() if isinstance(v, str)}
    flat["files"] = "".join(_render_file(f) for f in context.get("files") or ())
    source = context.get("source_file")
    flat["source_file"] = _render_file(source) if source is not None else ""
    flat["multi"] = "true" if context.get("multi") else ""
    return flat


class TextTemplate:
    def __init__(self, text: str, *, engine: Optional[TemplateEngineProtocol] = None) -> None:
        self._text = text
        self._engine = engine or SingleBraceTemplateEngine()

    def __call__(self, context: Mapping[str, Any]) -> str:
        return self._engine.render(self._text, flatten_context(context))


class TemplateLoader:
    """Resolve a template reference relative to a working directory.

    Resolution order:
        1) explicit `ref`: an existing path, then `ghgen/templates/<ref>`;
           `*.py:func` and `module:func` load a Python callable;
        2) `ghgen/templates/default.txt` under the working directory;
        3) the built-in default.
    """

    def __init__(
        self,
        *,
        cwd: Path,
        engine: Optional[TemplateEngineProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._cwd = Path(cwd)
        self._engine = engine or SingleBraceTemplateEngine()
        self._log = logger or get_logger("templates")

    def load(self, ref: Optional[str]) -> Template:
        if ref:
            return self._load_explicit(ref)
        project_default = self._cwd / TEMPLATES_DIR / DEFAULT_TEMPLATE_NAME
        if project_default.is_file():
            self._log.debug("using project template %s", project_default)
            return self._text(project_default)
        return TextTemplate(DEFAULT_TEMPLATE, engine=self._engine)

    def _load_explicit(self, ref: str) -> Template:
        for candidate in (self._cwd / ref, self._cwd / TEMPLATES_DIR / ref):
            if candidate.is_file():
                if candidate.suffix == ".py":
                    return self._callable(f"{candidate}:render")
                return self._text(candidate)
        if ":" in ref:
            return self._callable(ref)
        raise ConfigurationError(f"the template {ref} was not found")

    def _text(self, path: Path) -> Template:
        return TextTemplate(path.read_text(encoding="utf-8"), engine=self._engine)

    def _callable(self, ref: str) -> Template:
        try:
            fn = load_object_from_ref(ref, base=self._cwd)
        except ImportError as exc:
            raise ConfigurationError(f"the template {ref} could not be loaded: {exc}") from exc
        if not callable(fn):
            raise ConfigurationError(f"the template {ref} is not callable")
        return fn
