from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class FileContent:
    """A file's current text and, when tracked in git, its committed text."""
    name: str
    contents: Optional[str] = None
    previous_contents: Optional[str] = None

    @property
    def meaningful(self) -> bool:
        return self.contents is not None or self.previous_contents is not None


@dataclass(frozen=True)
class CompletionOptions:
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    debug: bool = False


@dataclass(frozen=True)
class Ok:
    message: str
    ok: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class Err:
    code: str
    message: str
    ok: Literal[False] = field(default=False, init=False)


CompletionResult = Union[Ok, Err]


@dataclass(frozen=True)
class ExtractedFile:
    name: str
    contents: str


@dataclass(frozen=True)
class ApplyResult:
    file: str
    generated: bool


@dataclass(frozen=True)
class GenerateArgs:
    """Plain options structure handed from the CLI to the orchestrator."""
    prompt_file: Optional[str] = None
    prompt: Optional[str] = None
    api: str = 'openai'
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    write: bool = False
    print_prompt: bool = False
    write_prompt: Optional[str] = None
    template: Optional[str] = None
    debug: bool = False
    exec_command: Optional[str] = None
    config: Optional[str] = None
    include: Sequence[str] = ()
    exclude: Sequence[str] = ()
    base_dir: Optional[str] = None
    multi: bool = False


@dataclass(frozen=True)
class GenerateOutcome:
    prompt: str
    files: Tuple[ExtractedFile, ...] = ()
    results: Tuple[ApplyResult, ...] = ()
