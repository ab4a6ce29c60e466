from __future__ import annotations

from typing import Protocol, runtime_checkable

from ghgen.core.models import CompletionOptions, CompletionResult


@runtime_checkable
class CompletionProviderProtocol(Protocol):
    """A single model provider that turns a prompt into a `CompletionResult`.

    Implementations never raise for expected failures (missing credential,
    transport errors, provider errors, truncation); those are returned as
    `Err` values.
    """

    def complete(self, prompt: str, options: CompletionOptions) -> CompletionResult:
        ...
