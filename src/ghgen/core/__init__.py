"""
core – data model and Protocols shared by the ghgen pipeline.
"""

from ghgen.core.models import (
    ApplyResult,
    CompletionOptions,
    CompletionResult,
    Err,
    ExtractedFile,
    FileContent,
    GenerateArgs,
    GenerateOutcome,
    Ok,
)

__all__ = [
    "ApplyResult",
    "CompletionOptions",
    "CompletionResult",
    "Err",
    "ExtractedFile",
    "FileContent",
    "GenerateArgs",
    "GenerateOutcome",
    "Ok",
]
