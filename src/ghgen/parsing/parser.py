# ghgen/parsing/parser.py
from __future__ import annotations

import argparse

from ghgen.constants import FILE_MARKER


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser for `ghgen`."""
    p = argparse.ArgumentParser(
        prog="ghgen",
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s [PROMPT_FILE] [OPTIONS]",
        description=(
            "ghgen – prompt-driven code generation\n"
            "Builds a prompt from a template, the prompt file and its includes, sends it to the\n"
            "model and extracts the files in the response."
        ),
    )

    g_in = p.add_argument_group("Prompt")
    g_ai = p.add_argument_group("Model")
    g_out = p.add_argument_group("Output")
    g_misc = p.add_argument_group("Miscellaneous")

    # -----------------------
    # Prompt
    # -----------------------
    g_in.add_argument(
        "prompt_file",
        nargs="?",
        metavar="PROMPT_FILE",
        help=(
            "Prompt file (Markdown with optional YAML front matter). A file named\n"
            "'<source>.<ext>.prompt.md' targets '<source>.<ext>' in single-file mode."
        ),
    )
    g_in.add_argument("-p", "--prompt", metavar="TEXT", dest="prompt", help="Inline prompt used when no PROMPT_FILE is given.")
    g_in.add_argument(
        "-t",
        "--template",
        metavar="REF",
        dest="template",
        help=(
            "Template: a text file path, a name under ghgen/templates/, or a Python\n"
            "callable as 'file.py:func' / 'package.module:func'."
        ),
    )
    g_in.add_argument(
        "-i",
        "--include",
        metavar="PATH",
        action="append",
        dest="include",
        default=[],
        help="Add a file to the template context. Repeatable.",
    )
    g_in.add_argument(
        "-e",
        "--exclude",
        metavar="PATH",
        action="append",
        dest="exclude",
        default=[],
        help="Drop a file that front matter or single-file mode would include. Repeatable.",
    )
    g_in.add_argument("--multi", action="store_true", dest="multi", help="Disable single-file mode.")

    # -----------------------
    # Model
    # -----------------------
    g_ai.add_argument("--api", metavar="NAME", dest="api", default="openai", help="Completion API (only 'openai').")
    g_ai.add_argument("--model", metavar="MODEL", dest="model", help="Model name.")
    g_ai.add_argument(
        "--max-tokens",
        metavar="N",
        type=int,
        dest="max_tokens",
        help="Completion token budget (default: 4000 minus the prompt length).",
    )
    g_ai.add_argument(
        "--marker",
        metavar="PREFIX",
        dest="marker",
        default=FILE_MARKER,
        help=f"Filename marker the model precedes each file with (default: {FILE_MARKER!r}).",
    )

    # -----------------------
    # Output
    # -----------------------
    g_out.add_argument("--write", action="store_true", dest="write", help="Write extracted files to disk (never overwrites).")
    g_out.add_argument("--base-dir", metavar="DIR", dest="base_dir", help="Directory files are written under.")
    g_out.add_argument("--exec", metavar="CMD", dest="exec_command", help="Shell command run once after writing.")
    g_out.add_argument("--print-prompt", action="store_true", dest="print_prompt", help="Print the prompt and stop.")
    g_out.add_argument(
        "--write-prompt",
        metavar="FILE",
        dest="write_prompt",
        nargs="?",
        const="",
        help="Save the prompt to FILE and stop.",
    )

    # -----------------------
    # Miscellaneous
    # -----------------------
    g_misc.add_argument("-c", "--config", metavar="FILE", dest="config", help="Project config (default: ./ghgen.json).")
    g_misc.add_argument("--debug", action="store_true", dest="debug", help="Log the prompt, model settings and raw response.")
    g_misc.add_argument("--json-logs", action="store_true", dest="json_logs", help="Emit logs as JSON lines.")

    return p
