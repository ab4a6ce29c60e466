from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, NoReturn, Optional, Sequence

from ghgen.ai.completion_client import CompletionClient
from ghgen.core.models import GenerateArgs, GenerateOutcome
from ghgen.exceptions import GhgenError
from ghgen.extraction.conventions import MarkdownFileConvention
from ghgen.extraction.extractor import ResponseExtractor
from ghgen.logging.factory import DefaultLoggerFactory
from ghgen.logging.helpers import get_logger
from ghgen.parsing.parser import _build_parser
from ghgen.runtime.config import ProviderConfig
from ghgen.runtime.generate import GenerateOrchestrator


logger = get_logger('ghgen')


def _configure_logging(enable_json: bool, level: int) -> DefaultLoggerFactory:
    """Configure process-wide logging, either JSON or plain text."""
    factory = DefaultLoggerFactory(json_logs=enable_json, level=level)
    global logger
    logger = factory.get_logger('ghgen')
    return factory


def _to_args(ns: argparse.Namespace) -> GenerateArgs:
    return GenerateArgs(
        prompt_file=ns.prompt_file,
        prompt=ns.prompt,
        api=ns.api,
        model=ns.model,
        max_tokens=ns.max_tokens,
        write=ns.write,
        print_prompt=ns.print_prompt,
        write_prompt=ns.write_prompt,
        template=ns.template,
        debug=ns.debug,
        exec_command=ns.exec_command,
        config=ns.config,
        include=tuple(ns.include or ()),
        exclude=tuple(ns.exclude or ()),
        base_dir=ns.base_dir,
        multi=ns.multi,
    )


class GhGen:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(
        argv: Sequence[str],
        *,
        env: Optional[Mapping[str, str]] = None,
        provider=None,
        out=None,
        cwd: Optional[Path] = None,
    ) -> GenerateOutcome:
        """Parse *argv*, wire the pipeline and run one generation."""
        ns = _build_parser().parse_args(list(argv))
        json_logs = ns.json_logs or os.getenv('GHGEN_JSON_LOGS') == '1'
        factory = _configure_logging(json_logs, logging.DEBUG if ns.debug else logging.INFO)

        if provider is None:
            config = ProviderConfig.from_env(os.environ if env is None else env)
            provider = CompletionClient(config, logger=factory.get_logger('ai'))

        orchestrator = GenerateOrchestrator(
            provider,
            extractor=ResponseExtractor(
                MarkdownFileConvention(marker=ns.marker), logger=factory.get_logger('extract')
            ),
            out=out,
            cwd=cwd,
            logger_factory=factory,
        )
        return orchestrator.run(_to_args(ns))


def main() -> NoReturn:
    """Entry point for the `ghgen` console script."""
    try:
        GhGen.run(sys.argv[1:])
        raise SystemExit(0)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except GhgenError as exc:
        logger.error('%s', exc)
        raise SystemExit(1)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
