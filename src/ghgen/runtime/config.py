from __future__ import annotations

"""Configuration values sourced once at the CLI boundary.

`ProviderConfig` carries the credential and endpoint into the completion
client; `ProjectSettings` holds the optional per-project defaults from
`ghgen.json`.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from ghgen.constants import CONFIG_FILE, DEFAULT_ENDPOINT, ENV_API_KEY, ENV_ENDPOINT
from ghgen.exceptions import ConfigurationError

_CHAT_COMPLETIONS_SUFFIX = '/chat/completions'


@dataclass(frozen=True)
class ProviderConfig:
    api_key: str = ''
    endpoint: str = DEFAULT_ENDPOINT
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> 'ProviderConfig':
        return cls(
            api_key=env.get(ENV_API_KEY, ''),
            endpoint=env.get(ENV_ENDPOINT) or DEFAULT_ENDPOINT,
        )

    @property
    def base_url(self) -> str:
        """SDK base URL derived from the full completions endpoint."""
        url = self.endpoint.rstrip('/')
        if url.endswith(_CHAT_COMPLETIONS_SUFFIX):
            url = url[: -len(_CHAT_COMPLETIONS_SUFFIX)]
        return url


@dataclass(frozen=True)
class ProjectSettings:
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    template: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str) -> 'ProjectSettings':
        max_tokens = data.get('maxTokens', data.get('max_tokens'))
        if max_tokens is not None and (isinstance(max_tokens, bool) or not isinstance(max_tokens, int)):
            raise ConfigurationError(f'{source}: maxTokens must be an integer')
        model = data.get('model')
        template = data.get('template')
        return cls(
            model=str(model) if model else None,
            max_tokens=max_tokens,
            template=str(template) if template else None,
        )

    @classmethod
    def load(cls, explicit: Optional[str], *, cwd: Path) -> 'ProjectSettings':
        """Read *explicit* or `ghgen.json` from *cwd*.

        A missing default file yields empty settings; a missing explicit file
        or malformed JSON is a ConfigurationError.
        """
        path = (cwd / explicit) if explicit else (cwd / CONFIG_FILE)
        if not path.is_file():
            if explicit:
                raise ConfigurationError(f'config file {path} not found')
            return cls()
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f'{path}: invalid JSON ({exc})') from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f'{path}: expected a JSON object')
        return cls.from_mapping(data, source=str(path))
