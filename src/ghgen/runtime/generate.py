from __future__ import annotations

"""
generate – Glue between prompt preparation, the provider and the file applier.

One `run()` is one invocation: it reads the prompt and its includes, renders
the template, performs a single completion and either prints the extracted
files or writes them under the base directory.
"""

import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from ghgen.core.interfaces.ai import CompletionProviderProtocol
from ghgen.core.interfaces.fs import GitRepositoryProtocol
from ghgen.core.interfaces.logging import LoggerFactoryProtocol
from ghgen.core.models import (
    CompletionOptions,
    Err,
    ExtractedFile,
    FileContent,
    GenerateArgs,
    GenerateOutcome,
    Ok,
)
from ghgen.discovery.file_content import FileContentLoader
from ghgen.discovery.git_repository import GitRepository
from ghgen.exceptions import ConfigurationError, TransportError
from ghgen.extraction.extractor import ResponseExtractor
from ghgen.logging.helpers import get_logger
from ghgen.output.file_applier import FileApplier
from ghgen.processing.front_matter import PromptSettings, parse_prompt_settings
from ghgen.processing.include_expander import IncludeExpander
from ghgen.processing.text_ops import add_line_numbers, remove_front_matter, unified_diff
from ghgen.rendering.templates import PromptContext, TemplateLoader
from ghgen.runtime.config import ProjectSettings
from ghgen.utils.paths import display_path, is_within_dir

_SINGLE_FILE_RX = re.compile(r"\.[A-Za-z0-9]+\.prompt\.md$")
SUPPORTED_APIS = ("openai",)
OUT_OF_TOKENS = "Ran out of tokens. Increase token size by specifying the --max-tokens argument."


class GenerateOrchestrator:
    def __init__(
        self,
        provider: CompletionProviderProtocol,
        *,
        extractor: Optional[ResponseExtractor] = None,
        applier: Optional[FileApplier] = None,
        git: Optional[GitRepositoryProtocol] = None,
        expander: Optional[IncludeExpander] = None,
        out: Optional[TextIO] = None,
        cwd: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
        logger_factory: Optional[LoggerFactoryProtocol] = None,
    ) -> None:
        """Wire the pipeline; collaborators left out get their own scoped logger."""
        scoped = logger_factory.get_logger if logger_factory is not None else get_logger
        self._provider = provider
        self._extractor = extractor or ResponseExtractor(logger=scoped("extract"))
        self._applier = applier or FileApplier(logger=scoped("apply"))
        self._git = git or GitRepository(logger=scoped("git"))
        self._expander = expander or IncludeExpander(git=self._git, logger=scoped("include"))
        self._out = out or sys.stdout
        self._cwd = Path(cwd) if cwd else Path.cwd()
        self._log = logger or scoped("generate")

    def _write(self, text: str = "") -> None:
        self._out.write(text + "\n")

    def _path(self, name: str) -> Path:
        p = Path(name)
        return p if p.is_absolute() else self._cwd / p

    # ------------------------------------------------------------------ #
    # Prompt preparation                                                  #
    # ------------------------------------------------------------------ #
    def _source_file_name(self, args: GenerateArgs) -> Optional[str]:
        """Single-file mode target: `x.py.prompt.md` → `x.py` when it exists."""
        if args.prompt_file is None or args.multi or not _SINGLE_FILE_RX.search(args.prompt_file):
            return None
        name = re.sub(r"\.prompt\.md$", "", args.prompt_file)
        return name if self._path(name).is_file() else None

    def _read_prompt(self, args: GenerateArgs) -> Tuple[str, str, PromptSettings]:
        """Return (expanded prompt, body before include expansion, settings)."""
        if args.prompt_file is not None:
            path = self._path(args.prompt_file)
            try:
                raw = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigurationError(f"cannot read prompt file {path}: {exc}") from exc
            settings = parse_prompt_settings(raw, source=str(path))
            body = remove_front_matter(raw)
            return self._expander.expand(body, path, self._cwd), body, settings
        if args.prompt:
            return self._expander.expand(args.prompt, None, self._cwd), args.prompt, PromptSettings()
        raise ConfigurationError("The prompt file must be specified. See 'ghgen --help'.")

    def _previous_prompt(self, args: GenerateArgs, body: str) -> Tuple[str, str, str]:
        """HEAD version of the prompt file and its diff, both before include expansion."""
        if args.prompt_file is None:
            return "", "", ""
        path = self._path(args.prompt_file)
        if not self._git.is_committed(path):
            return "", "", ""
        committed = self._git.show_head(path)
        if committed is None:
            return "", "", ""
        previous = remove_front_matter(committed)
        return previous, add_line_numbers(previous), unified_diff(body, previous, args.prompt_file)

    def build_prompt(self, args: GenerateArgs, project: ProjectSettings) -> Tuple[str, PromptSettings, Optional[str]]:
        """Return (evaluated prompt, prompt settings, single-file target name)."""
        prompt, body, settings = self._read_prompt(args)
        previous, previous_numbered, diff = self._previous_prompt(args, body)

        loader = FileContentLoader(self._git, logger=self._log)
        exclude = tuple(args.exclude)
        source_name = self._source_file_name(args)
        source_file: Optional[FileContent] = None
        if source_name is not None and source_name not in exclude:
            source_file = loader.load(source_name, base=self._cwd)
        files = loader.load_many([*settings.include, *args.include], base=self._cwd, exclude=exclude)

        context = PromptContext(
            prompt=prompt,
            prompt_with_line_numbers=add_line_numbers(prompt),
            previous_prompt=previous,
            previous_prompt_with_line_numbers=previous_numbered,
            prompt_diff=diff,
            files=tuple(files),
            source_file=source_file,
            multi=args.multi,
            output_format=self._extractor.convention.instructions(),
        )
        template = TemplateLoader(cwd=self._cwd, logger=self._log).load(args.template or project.template)
        return template(context.as_dict()), settings, source_name

    # ------------------------------------------------------------------ #
    # Entry point                                                         #
    # ------------------------------------------------------------------ #
    def run(self, args: GenerateArgs) -> GenerateOutcome:
        project = ProjectSettings.load(args.config, cwd=self._cwd)
        prompt, settings, source_name = self.build_prompt(args, project)

        if args.debug:
            self._log.debug("--- PROMPT ---")
            self._log.debug("%s", prompt)

        if args.print_prompt or args.write_prompt is not None:
            self._emit_prompt(args, prompt)
            return GenerateOutcome(prompt=prompt)

        if args.api not in SUPPORTED_APIS:
            raise ConfigurationError(
                f"Invalid API specified: {args.api!r}. Only 'openai' is supported currently."
            )

        options = CompletionOptions(
            model=args.model or settings.model or project.model,
            max_tokens=args.max_tokens or settings.max_tokens or project.max_tokens,
            debug=args.debug,
        )
        result = self._provider.complete(prompt, options)

        if isinstance(result, Err):
            if result.code == "missing_api_key":
                raise ConfigurationError(result.message)
            if result.code == "length":
                raise TransportError(result.code, OUT_OF_TOKENS)
            raise TransportError(result.code, result.message)
        if not isinstance(result, Ok):
            raise TypeError(f"unexpected completion result {result!r}")

        files = self._extract(result.message, args, source_name)
        if not args.write:
            self._print_files(files)
            return GenerateOutcome(prompt=prompt, files=tuple(files))

        base_dir = self._base_dir(args)
        results = self._applier.apply(base_dir, files, args.exec_command)
        generated = [r.file for r in results if r.generated]
        skipped = [r.file for r in results if not r.generated]
        if generated:
            self._write(f"Generated {', '.join(generated)}.")
        if skipped:
            self._write(f"Skipped {', '.join(skipped)}.")
        if not results:
            self._log.warning("⚠  the response contained no files")
        return GenerateOutcome(prompt=prompt, files=tuple(files), results=tuple(results))

    def _emit_prompt(self, args: GenerateArgs, prompt: str) -> None:
        if args.print_prompt:
            self._write(prompt)
        if args.write_prompt is not None:
            if not args.write_prompt:
                raise ConfigurationError("Specify a file path for the --write-prompt parameter.")
            target = self._path(args.write_prompt)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(prompt, encoding="utf-8")
            self._write(f"Wrote prompt to {args.write_prompt}")

    def _base_dir(self, args: GenerateArgs) -> Path:
        if args.base_dir:
            return self._path(args.base_dir)
        if args.prompt_file:
            return self._path(args.prompt_file).parent
        return self._cwd

    def _extract(self, message: str, args: GenerateArgs, source_name: Optional[str]) -> List[ExtractedFile]:
        files = self._extractor.extract(message)
        if files or source_name is None:
            return files
        # Single-file mode: one unnamed block is the target file, no fence at all means the whole message is.
        contents = self._extractor.extract_single(message)
        target, base = self._path(source_name), self._base_dir(args)
        name = display_path(target, base) if is_within_dir(target, base) else source_name
        return [ExtractedFile(name=name, contents=message if contents is None else contents)]

    def _print_files(self, files: List[ExtractedFile]) -> None:
        for f in files:
            header = f"FILE: {f.name}"
            self._write(header)
            self._write("-" * len(header))
            self._write(f.contents)
            self._write()
