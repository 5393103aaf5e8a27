"""TranslationGateway: the remote language-model call behind LinguaLens.

The gateway turns a :class:`~lingualens.models.TranslationRequest` into a chat
completion against an OpenAI-compatible endpoint and parses the JSON reply:

  TranslationRequest  --> [prompt + JSON response format] --> /chat/completions
  /chat/completions   --> [json.loads + schema check]     --> TranslationResult
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field

import aiohttp
from loguru import logger

from .languages import language_label
from .models import (
    IdiomExplanation,
    IdiomExplanationRequest,
    TranslationRequest,
    TranslationResult,
)

_DEFAULT_BASE_URL = "https://api.openai.com/v1"
_DEFAULT_MODEL = "gpt-4o-mini"

TRANSLATE_SYSTEM_PROMPT = (
    "You are an expert translator that translates with the context, tone, and style "
    "of the input. Translate the text into the target language using the desired tone. "
    "Respond with a JSON object with the keys \"translation\" (the translated text), "
    "\"idioms\" (a list of the idioms exactly as they appear in your translation) and "
    "\"alternativeTranslations\" (a list of alternative phrasings for those idioms)."
)

EXPLAIN_SYSTEM_PROMPT = (
    "You are an expert in linguistics and cultural nuances. A user has provided a piece "
    "of text and identified an idiom within it. Explain the idiom, including its meaning "
    "and cultural context, and offer several alternative translations that keep its "
    "original intent but suit different audiences or contexts. Respond with a JSON object "
    "with the keys \"explanation\" and \"alternativeTranslations\"."
)


class LinguaLensError(Exception):
    """Base class for all LinguaLens errors."""


class TranslationGatewayError(LinguaLensError):
    """The translation request did not complete successfully."""


class GatewayAuthError(TranslationGatewayError):
    """Raised when the endpoint returns HTTP 401 or 403 (invalid or missing API key)."""


class GatewayRateLimitError(TranslationGatewayError):
    """Raised when the endpoint returns HTTP 429 (rate-limited)."""


class GatewayRequestError(TranslationGatewayError):
    """Raised for any other HTTP or transport failure."""


class GatewayResponseError(TranslationGatewayError):
    """Raised when the model reply is not the JSON object we asked for."""


@dataclass
class GatewayOptions:
    """Options for the remote model endpoint.

    Args:
        model: Chat model name. Falls back to ``LINGUALENS_MODEL``.
        base_url: Root of an OpenAI-compatible API. Falls back to ``LINGUALENS_BASE_URL``.
        temperature: Sampling temperature, between 0 and 2.
    """

    model: str = field(default_factory=lambda: os.environ.get("LINGUALENS_MODEL", _DEFAULT_MODEL))
    base_url: str = field(
        default_factory=lambda: os.environ.get("LINGUALENS_BASE_URL", _DEFAULT_BASE_URL)
    )
    temperature: float = field(default=0.3)

    def __post_init__(self) -> None:
        if not self.model:
            raise ValueError("model must be a non-empty string.")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}.")
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"temperature must be between 0 and 2, got {self.temperature!r}.")
        self.base_url = self.base_url.rstrip("/")

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"


class TranslationGateway:
    """Client for the contextual-translation and idiom-explanation prompts.

    Args:
        options: :class:`GatewayOptions` for the endpoint and model.
        api_key: API key for the endpoint. Falls back to the
            ``LINGUALENS_API_KEY`` environment variable when *None*.

    Raises:
        ValueError: When no API key is available.
    """

    def __init__(self, options: GatewayOptions | None = None, api_key: str | None = None) -> None:
        resolved_key = api_key or os.environ.get("LINGUALENS_API_KEY", "")
        if not resolved_key:
            raise ValueError(
                "No API key provided.  Pass api_key= or set the LINGUALENS_API_KEY "
                "environment variable."
            )

        self._api_key = resolved_key
        self._options = options or GatewayOptions()

    @property
    def options(self) -> GatewayOptions:
        return self._options

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate *request* and return the model's translation, idioms and alternatives."""
        user_message = (
            f"Text: {request.text}\n"
            f"Target Language: {language_label(request.target_language)} "
            f"({request.target_language})\n"
            f"Tone: {request.tone}"
        )
        payload = await self._complete(TRANSLATE_SYSTEM_PROMPT, user_message)
        try:
            result = TranslationResult.from_payload(payload)
        except ValueError as exc:
            raise GatewayResponseError(str(exc)) from exc

        logger.info(
            "Translated {chars} chars to {lang} with {idioms} idiom(s)",
            chars=len(request.text),
            lang=request.target_language,
            idioms=len(result.idioms),
        )
        return result

    async def explain_idiom(self, request: IdiomExplanationRequest) -> IdiomExplanation:
        """Ask the model to explain one idiom in the context of *request.text*."""
        user_message = f"Text: {request.text}\nIdiom: {request.idiom}"
        payload = await self._complete(EXPLAIN_SYSTEM_PROMPT, user_message)
        try:
            return IdiomExplanation.from_payload(payload)
        except ValueError as exc:
            raise GatewayResponseError(str(exc)) from exc

    async def _complete(self, system_prompt: str, user_message: str) -> dict:
        """POST a chat completion and return the decoded JSON content of the reply."""
        body = {
            "model": self._options.model,
            "temperature": self._options.temperature,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._options.completions_url, json=body, headers=headers
                ) as resp:
                    if resp.status in (401, 403):
                        raise GatewayAuthError(f"Authentication failed: {await resp.text()}")
                    if resp.status == 429:
                        raise GatewayRateLimitError(f"Rate limited: {await resp.text()}")
                    if resp.status >= 400:
                        raise GatewayRequestError(
                            f"Completion request failed (HTTP {resp.status}): {await resp.text()}"
                        )
                    data = await resp.json()
        except TranslationGatewayError:
            raise
        except Exception as exc:
            raise GatewayRequestError(f"Completion request failed: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
            parsed = json.loads(content)
        except (KeyError, IndexError, TypeError, json.JSONDecodeError) as exc:
            logger.warning("Could not parse model reply: {exc}", exc=exc)
            raise GatewayResponseError(f"Malformed model reply: {exc}") from exc

        if not isinstance(parsed, dict):
            raise GatewayResponseError("Model reply is not a JSON object")
        return parsed
