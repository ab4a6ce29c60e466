from __future__ import annotations

from ghgen.ai.completion_client import CompletionClient
from ghgen.cli import GhGen
from ghgen.core.models import (
    ApplyResult,
    CompletionOptions,
    CompletionResult,
    Err,
    ExtractedFile,
    FileContent,
    GenerateArgs,
    Ok,
)
from ghgen.exceptions import (
    ConfigurationError,
    CyclicIncludeError,
    GhgenError,
    IncludeResolutionError,
    MalformedResponseError,
    PathEscapeError,
    TransportError,
)
from ghgen.extraction.conventions import MarkdownFileConvention
from ghgen.extraction.extractor import ResponseExtractor
from ghgen.output.file_applier import FileApplier
from ghgen.processing.include_expander import IncludeExpander
from ghgen.runtime.config import ProviderConfig
from ghgen.runtime.generate import GenerateOrchestrator

__version__ = '0.1.0'

__all__ = [
    'GhGen',
    'CompletionClient',
    'ProviderConfig',
    'IncludeExpander',
    'ResponseExtractor',
    'MarkdownFileConvention',
    'FileApplier',
    'GenerateOrchestrator',
    'ApplyResult',
    'CompletionOptions',
    'CompletionResult',
    'Err',
    'ExtractedFile',
    'FileContent',
    'GenerateArgs',
    'Ok',
    'GhgenError',
    'ConfigurationError',
    'CyclicIncludeError',
    'IncludeResolutionError',
    'MalformedResponseError',
    'PathEscapeError',
    'TransportError',
]
