"""
template_engine – Single-brace text templates for ghgen prompts.

Rules:
  • {name}      → variables.get("name", "")
  • {{ and }}   → a literal "{" / "}"
  • anything else, including "{not an identifier}", is copied verbatim

Only the template text is scanned; substituted values are inserted as-is, so
braces inside prompts or included files are never interpreted.
"""

import logging
import re
from typing import Mapping, Optional

from ghgen.core.interfaces.templating import TemplateEngineProtocol
from ghgen.logging.helpers import get_logger

_IDENT_RX = re.compile(r"[A-Za-z_]\w*")


class SingleBraceTemplateEngine(TemplateEngineProtocol):
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger("templates")

    def render(self, template: str, variables: Mapping[str, str]) -> str:
        out: list[str] = []
        missing: set[str] = set()
        i = 0
        n = len(template)

        while i < n:
            if template.startswith("{{", i):
                out.append("{")
                i += 2
                continue
            if template.startswith("}}", i):
                out.append("}")
                i += 2
                continue

            if template[i] == "{":
                j = template.find("}", i + 1)
                if j != -1 and _IDENT_RX.fullmatch(template[i + 1:j]):
                    name = template[i + 1:j]
                    if name not in variables:
                        missing.add(name)
                    out.append(str(variables.get(name, "")))
                    i = j + 1
                    continue
            out.append(template[i])
            i += 1

        if missing:
            self._log.debug("template placeholders without a value: %s", ", ".join(sorted(missing)))
        return "".join(out)
