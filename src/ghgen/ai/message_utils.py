from __future__ import annotations

"""
Utilities to build OpenAI-style chat messages.

The generate pipeline always sends exactly one user turn; keeping the shape
in one place lets the client and its tests agree on it.
"""

from typing import Dict, List


def build_chat_messages(*, user_prompt: str) -> List[Dict[str, str]]:
    """Compose the messages array for a single user turn."""
    return [{"role": "user", "content": user_prompt}]
