"""Selectable target languages and translation tones."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Option:
    value: str
    label: str


SUPPORTED_LANGUAGES: tuple[Option, ...] = (
    Option("en", "English"),
    Option("es", "Spanish"),
    Option("fr", "French"),
    Option("de", "German"),
    Option("pl", "Polish"),
    Option("it", "Italian"),
    Option("pt", "Portuguese"),
    Option("ja", "Japanese"),
    Option("ko", "Korean"),
    Option("zh-CN", "Chinese (Simplified)"),
    Option("ru", "Russian"),
    Option("ar", "Arabic"),
)

TONE_OPTIONS: tuple[Option, ...] = (
    Option("formal", "Formal"),
    Option("slang", "Slang"),
    Option("colloquial", "Colloquial"),
)

DEFAULT_LANGUAGE = "en"
DEFAULT_TONE = "formal"


def find_language(code: str | None) -> Option | None:
    """Return the registry entry for *code*, or None when it is not supported."""
    for option in SUPPORTED_LANGUAGES:
        if option.value == code:
            return option
    return None


def find_tone(value: str | None) -> Option | None:
    for option in TONE_OPTIONS:
        if option.value == value:
            return option
    return None


def language_label(code: str | None) -> str:
    """Display label for *code*, falling back to the raw code."""
    option = find_language(code)
    if option is not None:
        return option.label
    return code or ""
