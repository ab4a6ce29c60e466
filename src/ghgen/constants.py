from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Completion defaults used when neither CLI, front matter nor config decide.
DEFAULT_MODEL: str = 'gpt-3.5-turbo'
DEFAULT_ENDPOINT: str = 'https://api.openai.com/v1/chat/completions'
TOKEN_CEILING: int = 4000

# Environment variables read once by the CLI layer.
ENV_API_KEY: str = 'OPENAI_API_KEY'
ENV_ENDPOINT: str = 'OPENAI_COMPLETIONS_ENDPOINT'

# Directive and file-marker lexemes.
INCLUDE_TOKEN: str = 'include:'
FILE_MARKER: str = 'FILE:'

# Project-local configuration.
CONFIG_FILE: str = 'ghgen.json'
TEMPLATES_DIR: str = 'ghgen/templates'
DEFAULT_TEMPLATE_NAME: str = 'default.txt'
