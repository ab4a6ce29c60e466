from __future__ import annotations
"""OpenAI completion client.

`CompletionClient.complete(...)` sends one chat completion request and turns
every outcome into a `CompletionResult`:

* `Err(missing_api_key)` before any network activity when no key is set;
* `Err(fetch_error)` when the request never produced a response;
* `Err(<provider code>)` for provider error payloads;
* `Err(<finish_reason>)` when generation stopped for anything but "stop";
* `Ok(message)` otherwise.

Nothing is raised across this boundary. There is no retry and no built-in
timeout; wrap the call if you need either.
"""

import json
import logging
from typing import Any, Callable, Mapping, Optional

import openai

from ghgen.ai.message_utils import build_chat_messages
from ghgen.ai.token_budget import TokenBudgetEstimator, fallback_max_tokens
from ghgen.constants import DEFAULT_MODEL
from ghgen.core.interfaces.ai import CompletionProviderProtocol
from ghgen.core.models import CompletionOptions, CompletionResult, Err, Ok
from ghgen.logging.helpers import get_logger
from ghgen.runtime.config import ProviderConfig

ClientFactory = Callable[[ProviderConfig], Any]


def default_client_factory(config: ProviderConfig) -> openai.OpenAI:
    """Build an SDK client bound to the configured endpoint, with retries off."""
    kwargs: dict = {
        "api_key": config.api_key,
        "base_url": config.base_url,
        "max_retries": 0,
    }
    if config.timeout is not None:
        kwargs["timeout"] = config.timeout
    return openai.OpenAI(**kwargs)


class CompletionClient(CompletionProviderProtocol):
    """OpenAI chat-completions provider returning tagged results."""

    def __init__(
        self,
        config: ProviderConfig,
        *,
        client_factory: Optional[ClientFactory] = None,
        estimator: Optional[TokenBudgetEstimator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Credential and endpoint, sourced once by the caller.
            client_factory: Builds the SDK client; replaced in tests.
            estimator: Token estimator used by the debug hook.
            logger: Receives the debug hook output.
        """
        self._config = config
        self._factory = client_factory or default_client_factory
        self._log = logger or get_logger("ai")
        self._estimator = estimator or TokenBudgetEstimator()

    def complete(self, prompt: str, options: CompletionOptions) -> CompletionResult:
        model = options.model or DEFAULT_MODEL
        max_tokens = fallback_max_tokens(prompt, options.max_tokens)

        if options.debug:
            self._log.debug("OPENAI: model=%s", model)
            self._log.debug("OPENAI: maxTokens=%d", max_tokens)
            self._log.debug(
                "OPENAI: estimated prompt tokens=%d",
                self._estimator.estimate_text_tokens(prompt, model=model),
            )
        if max_tokens <= 0:
            self._log.warning(
                "token budget is %d for a %d-character prompt; pass --max-tokens", max_tokens, len(prompt)
            )

        if not self._config.api_key:
            return Err("missing_api_key", "OPENAI_API_KEY is not set in the environment variables.")

        try:
            client = self._factory(self._config)
            rsp = client.chat.completions.create(
                model=model,
                messages=build_chat_messages(user_prompt=prompt),
                max_tokens=max_tokens,
                temperature=0,
            )
        except openai.APIStatusError as exc:
            if options.debug:
                self._log.debug("---OPENAI RESPONSE (HTTP %d)---", exc.status_code)
                self._log.debug("%s", self._error_body(exc))
            return self._status_error(exc)
        except openai.OpenAIError as exc:
            return Err("fetch_error", str(exc) or "An error occurred while fetching the completion.")

        if options.debug:
            self._log.debug("---OPENAI RESPONSE---")
            self._log.debug("%s", self._dump(rsp))

        return self._interpret(rsp)

    def _interpret(self, rsp: Any) -> CompletionResult:
        error = getattr(rsp, "error", None)
        if error:
            return self._payload_error(error)

        try:
            choice = rsp.choices[0]
            finish_reason = choice.finish_reason
            content = choice.message.content
        except (AttributeError, IndexError, TypeError) as exc:
            return Err("invalid_response", f"unexpected completion payload: {exc}")

        if finish_reason != "stop":
            reason = str(finish_reason)
            return Err(reason, reason)
        return Ok(content or "")

    @staticmethod
    def _payload_error(error: Any) -> Err:
        if isinstance(error, Mapping):
            code, message = error.get("code"), error.get("message")
        else:
            code, message = getattr(error, "code", None), getattr(error, "message", None)
        return Err(str(code or "provider_error"), str(message or error))

    @staticmethod
    def _status_error(exc: openai.APIStatusError) -> Err:
        body = exc.body
        if isinstance(body, Mapping):
            code = body.get("code") or body.get("type")
            message = body.get("message")
        else:
            code, message = None, None
        return Err(str(code or exc.status_code), str(message or exc.message))

    @staticmethod
    def _error_body(exc: openai.APIStatusError) -> str:
        body = exc.body
        if body is None:
            return exc.response.text
        if isinstance(body, (dict, list)):
            return json.dumps(body, ensure_ascii=False)
        return str(body)

    @staticmethod
    def _dump(rsp: Any) -> str:
        dump = getattr(rsp, "model_dump_json", None)
        return dump() if callable(dump) else repr(rsp)
