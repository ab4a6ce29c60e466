from __future__ import annotations

"""Prompt-file settings read from YAML front matter.

Recognised keys: `model`, `maxTokens` (or `max_tokens`) and `include`
(a string or a list of paths).
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

import yaml

from ghgen.exceptions import ConfigurationError
from ghgen.processing.text_ops import split_front_matter


@dataclass(frozen=True)
class PromptSettings:
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    include: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str = "<front matter>") -> "PromptSettings":
        include = data.get("include") or ()
        if isinstance(include, str):
            include = (include,)
        elif not isinstance(include, (list, tuple)):
            raise ConfigurationError(f"{source}: 'include' must be a string or a list")

        max_tokens = data.get("maxTokens", data.get("max_tokens"))
        if max_tokens is not None and (isinstance(max_tokens, bool) or not isinstance(max_tokens, int)):
            raise ConfigurationError(f"{source}: 'maxTokens' must be an integer")

        model = data.get("model")
        return cls(
            model=str(model) if model else None,
            max_tokens=max_tokens,
            include=tuple(str(p) for p in include),
        )


def parse_prompt_settings(text: str, *, source: str = "<prompt>") -> PromptSettings:
    raw, _ = split_front_matter(text)
    if not raw.strip():
        return PromptSettings()
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"{source}: invalid front matter: {exc}") from exc
    if data is None:
        return PromptSettings()
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source}: front matter must be a mapping")
    return PromptSettings.from_mapping(data, source=source)
