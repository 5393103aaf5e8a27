"""Data models for LinguaLens."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .languages import TONE_OPTIONS, find_language, find_tone

MAX_TEXT_LENGTH = 5000


@dataclass
class TranslationRequest:
    """A single translation submission.

    Args:
        text: Text to translate. Must be non-empty and at most 5000 characters.
        target_language: Language code from :data:`~lingualens.languages.SUPPORTED_LANGUAGES`.
        tone: One of "formal", "slang", or "colloquial".
    """

    text: str
    target_language: str
    tone: str = field(default="formal")

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Please enter text to translate.")
        if len(self.text) > MAX_TEXT_LENGTH:
            raise ValueError(f"Text cannot exceed {MAX_TEXT_LENGTH} characters.")
        if find_language(self.target_language) is None:
            raise ValueError(f"Unsupported target language {self.target_language!r}.")
        if find_tone(self.tone) is None:
            allowed = {option.value for option in TONE_OPTIONS}
            raise ValueError(f"tone must be one of {allowed!r}, got {self.tone!r}.")


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


@dataclass
class TranslationResult:

    translation: str
    idioms: list[str] = field(default_factory=list)
    alternative_translations: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> TranslationResult:
        """Build a result from the model's JSON object.

        Raises:
            ValueError: When ``translation`` is missing or not a string.
        """
        if not isinstance(payload, dict):
            raise ValueError("translation payload must be a JSON object")
        translation = payload.get("translation")
        if not isinstance(translation, str):
            raise ValueError("translation payload is missing 'translation'")
        alternatives = payload.get("alternativeTranslations", payload.get("alternative_translations"))
        return cls(
            translation=translation,
            idioms=_string_list(payload.get("idioms")),
            alternative_translations=_string_list(alternatives),
        )


@dataclass
class IdiomExplanationRequest:

    text: str
    idiom: str

    def __post_init__(self) -> None:
        if not self.idiom or not self.idiom.strip():
            raise ValueError("idiom must be a non-empty string.")


@dataclass
class IdiomExplanation:

    explanation: str
    alternative_translations: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> IdiomExplanation:
        if not isinstance(payload, dict):
            raise ValueError("explanation payload must be a JSON object")
        explanation = payload.get("explanation")
        if not isinstance(explanation, str):
            raise ValueError("explanation payload is missing 'explanation'")
        alternatives = payload.get("alternativeTranslations", payload.get("alternative_translations"))
        return cls(explanation=explanation, alternative_translations=_string_list(alternatives))
