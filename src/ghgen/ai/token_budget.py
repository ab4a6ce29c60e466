from __future__ import annotations
"""
Token budget helpers.

`fallback_max_tokens` applies the default budget rule: when no explicit
budget is given, the completion may use `TOKEN_CEILING - len(prompt)`. The
prompt length is measured in characters, which is only an approximation of
its token count. `TokenBudgetEstimator` gives a tokenizer count for debug
output.
"""

from typing import Optional

from ghgen.constants import TOKEN_CEILING


def fallback_max_tokens(prompt: str, explicit: Optional[int] = None) -> int:
    """Return *explicit* when set (non-zero), else the ceiling minus the prompt length."""
    return explicit or TOKEN_CEILING - len(prompt)


class TokenBudgetEstimator:
    @staticmethod
    def _safe_len_tokens(text: str, *, model: str) -> int:
        try:
            import tiktoken
            try:
                enc = tiktoken.encoding_for_model(model)
            except KeyError:
                enc = tiktoken.get_encoding('cl100k_base')
            return len(enc.encode(text))
        except Exception:
            # Encodings are fetched on first use; offline, fall back to ~4 chars per token.
            return max(1, (len(text) + 3) // 4)

    def estimate_text_tokens(self, text: str, *, model: str) -> int:
        """Return an estimate of the token count of *text* under *model*'s encoding."""
        return self._safe_len_tokens(text, model=model)
