from __future__ import annotations

"""
extractor – Parse a free-form model response into discrete files.

The scan is a three-state machine driven by a pluggable recognizer:

    SEEKING_MARKER ──marker──▶ SEEKING_FENCE_OPEN ──fence──▶ IN_BLOCK
          ▲                                                    │
          └──────────────────────closing fence─────────────────┘

Details the recognizer does not decide:

  • While SEEKING_FENCE_OPEN, blank lines are skipped, a new marker replaces
    the pending name and any other line drops the pending marker.
  • Fenced blocks with no marker in front are skipped as a whole, so their
    lines are never mistaken for markers.
  • A named block still open when the response ends raises
    MalformedResponseError; nothing is returned for that response.
  • Lines end at "\n" only (a trailing "\r" is dropped), so form feeds and
    Unicode separators inside a block reach the file untouched.
"""

import enum
import logging
from typing import List, Optional, Tuple

from ghgen.core.interfaces.extract import MarkerConventionProtocol
from ghgen.core.models import ExtractedFile
from ghgen.exceptions import MalformedResponseError
from ghgen.extraction.conventions import MarkdownFileConvention
from ghgen.logging.helpers import get_logger


class _State(enum.Enum):
    SEEKING_MARKER = "seeking_marker"
    SEEKING_FENCE_OPEN = "seeking_fence_open"
    IN_BLOCK = "in_block"


class ResponseExtractor:
    """Turn a completion message into `ExtractedFile` records in source order."""

    def __init__(
        self,
        convention: Optional[MarkerConventionProtocol] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._conv = convention or MarkdownFileConvention()
        self._log = logger or get_logger("extract")

    @property
    def convention(self) -> MarkerConventionProtocol:
        return self._conv

    def extract(self, message: str) -> List[ExtractedFile]:
        files, _, _ = self._scan(message)
        return files

    def extract_single(self, message: str) -> Optional[str]:
        """Body of the response's only unnamed block, for single-file mode.

        Returns None when the response has no fence at all, so the caller can
        take the whole message. Several unnamed blocks raise
        MalformedResponseError: there is no telling which one is the file.
        """
        files, blocks, still_open = self._scan(message)
        if still_open:
            raise MalformedResponseError("unterminated code block in single-file response")
        if files:
            raise MalformedResponseError("response mixes named and unnamed blocks")
        if not blocks:
            return None
        if len(blocks) > 1:
            raise MalformedResponseError(f"expected one code block, found {len(blocks)}")
        return blocks[0]

    def _scan(self, message: str) -> Tuple[List[ExtractedFile], List[str], bool]:
        files: List[ExtractedFile] = []
        unnamed: List[str] = []
        state = _State.SEEKING_MARKER
        name: Optional[str] = None
        fence = ""
        opened_at = 0
        body: List[str] = []

        # Only "\n" ends a line; form feeds and other separators belong to the content.
        for lno, line in enumerate(message.split("\n"), start=1):
            if line.endswith("\r"):
                line = line[:-1]
            if state is _State.IN_BLOCK:
                if self._conv.is_fence_close(line, fence):
                    if name is not None:
                        files.append(ExtractedFile(name=name, contents="\n".join(body)))
                    else:
                        unnamed.append("\n".join(body))
                    state, name, body = _State.SEEKING_MARKER, None, []
                else:
                    body.append(line)
                continue

            marker = self._conv.match_marker(line)
            if marker is not None:
                state, name = _State.SEEKING_FENCE_OPEN, marker
                continue

            opener = self._conv.match_fence_open(line)
            if opener is not None:
                # An unnamed block is consumed without emitting a file.
                state, fence, opened_at, body = _State.IN_BLOCK, opener, lno, []
                if name is None:
                    self._log.debug("unnamed block at line %d", lno)
                continue

            if state is _State.SEEKING_FENCE_OPEN and line.strip():
                self._log.debug("marker for %r not followed by a block (line %d)", name, lno)
                state, name = _State.SEEKING_MARKER, None

        if state is _State.IN_BLOCK:
            if name is not None:
                raise MalformedResponseError(
                    f"unterminated code block for {name!r} opened at line {opened_at}"
                )
            self._log.debug("unnamed block opened at line %d is never closed", opened_at)
            return files, unnamed, True
        return files, unnamed, False
