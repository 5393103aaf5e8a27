"""Spoken playback of translations.

:class:`PlaybackController` wraps an injected :class:`SpeechPlatform` and keeps a
small state machine over it::

    Idle ──play──▶ Speaking ──end / stop──▶ Idle
                     │
                     └──platform error──▶ Error ──play──▶ Speaking
                                            └──dismiss──▶ Idle

At most one utterance is active at a time. Callbacks arriving for an utterance
that has since been cancelled or replaced are ignored.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

from .languages import find_language, language_label
from .translator import LinguaLensError

# Error codes a platform reports for an utterance it was told to drop.
_CANCELLATION_CODES = frozenset({"canceled", "interrupted"})


class PlaybackUnavailableError(LinguaLensError):
    """Raised when no speech platform is available on the host."""


class SpeechErrorReason(str, enum.Enum):
    LANGUAGE_UNAVAILABLE = "language-unavailable"
    VOICE_UNAVAILABLE = "voice-unavailable"
    AUDIO_BUSY = "audio-busy"
    SYNTHESIS_FAILED = "synthesis-failed"
    SYNTHESIS_UNAVAILABLE = "synthesis-unavailable"
    TEXT_TOO_LONG = "text-too-long"
    INVALID_ARGUMENT = "invalid-argument"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str | None) -> SpeechErrorReason:
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


def describe_speech_error(
    reason: SpeechErrorReason, language: str | None = None, code: str | None = None
) -> str:
    """Human-readable message for a playback failure.

    Args:
        reason: The classified failure.
        language: Language code the utterance was spoken in, if any.
        code: Raw platform error code, quoted for unknown failures.
    """
    label = language_label(language) or "the selected language"
    if reason is SpeechErrorReason.LANGUAGE_UNAVAILABLE:
        return f"The selected language ({label}) is not available for speech on this device."
    if reason is SpeechErrorReason.VOICE_UNAVAILABLE:
        return f"No voice available for the selected language ({label}) on this device."
    if reason is SpeechErrorReason.AUDIO_BUSY:
        return "The audio output is currently busy. Please try again."
    if reason is SpeechErrorReason.SYNTHESIS_FAILED:
        return "Speech synthesis failed. Please try again."
    if reason is SpeechErrorReason.SYNTHESIS_UNAVAILABLE:
        return "Speech synthesis is currently unavailable. Please try again later."
    if reason is SpeechErrorReason.TEXT_TOO_LONG:
        return "The text is too long to be spoken by the speech synthesis engine."
    if reason is SpeechErrorReason.INVALID_ARGUMENT:
        return "An invalid argument was provided to the speech synthesis engine."
    return (
        f"Speech synthesis error ({code or reason.value}). "
        "The language may not be supported or another issue occurred."
    )


@dataclass(eq=False)
class Utterance:
    """One request to vocalize *text*. The platform calls the hooks as playback progresses."""

    text: str
    lang: str | None = None
    on_start: Callable[[], None] = field(default=lambda: None, repr=False)
    on_end: Callable[[], None] = field(default=lambda: None, repr=False)
    on_error: Callable[[str], None] = field(default=lambda code: None, repr=False)


class SpeechPlatform(ABC):
    """Host text-to-speech capability."""

    @abstractmethod
    def speak(self, utterance: Utterance) -> None:
        """Queue *utterance* for playback."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop every queued and playing utterance."""


class PlaybackStatus(str, enum.Enum):
    IDLE = "idle"
    SPEAKING = "speaking"
    ERROR = "error"


@dataclass(frozen=True)
class PlaybackState:

    status: PlaybackStatus = PlaybackStatus.IDLE
    reason: SpeechErrorReason | None = None
    message: str | None = None

    @property
    def is_speaking(self) -> bool:
        return self.status is PlaybackStatus.SPEAKING

    @property
    def is_error(self) -> bool:
        return self.status is PlaybackStatus.ERROR


_IDLE = PlaybackState()
_SPEAKING = PlaybackState(PlaybackStatus.SPEAKING)


class PlaybackController:
    """Speaks one translation at a time through *platform*.

    Args:
        platform: The host speech capability, or *None* when the host has none.
            Without a platform :meth:`play` raises :class:`PlaybackUnavailableError`.
    """

    def __init__(self, platform: SpeechPlatform | None = None) -> None:
        self._platform = platform
        self._state = _IDLE
        self._current: Utterance | None = None
        self._listeners: list[Callable[[PlaybackState], None]] = []

    @property
    def available(self) -> bool:
        return self._platform is not None

    @property
    def state(self) -> PlaybackState:
        return self._state

    def add_listener(self, callback: Callable[[PlaybackState], None]) -> None:
        """Call *callback* with the new state after every transition."""
        self._listeners.append(callback)

    def play(self, text: str, language_hint: str | None = None) -> None:
        if self._platform is None:
            raise PlaybackUnavailableError("Text-to-speech is not available on this host.")
        if not text or not text.strip():
            raise ValueError("No text to speak.")

        if self._state.is_speaking:
            self._cancel_current()

        lang = None
        if find_language(language_hint) is not None:
            lang = language_hint
        elif language_hint is None:
            logger.debug("TTS: no language hint. Using platform default voice.")
        else:
            logger.warning(
                "TTS: language info not found for code {code}. Using platform default voice.",
                code=language_hint,
            )

        utterance = Utterance(text=text, lang=lang)
        utterance.on_start = lambda: self._on_start(utterance)
        utterance.on_end = lambda: self._on_end(utterance)
        utterance.on_error = lambda code: self._on_error(utterance, code)

        self._current = utterance
        self._set_state(_SPEAKING)
        try:
            self._platform.speak(utterance)
        except Exception as exc:
            logger.error("Speech platform rejected utterance: {exc}", exc=exc)
            self._current = None
            self._set_error(SpeechErrorReason.SYNTHESIS_FAILED, lang, str(exc))

    def stop(self) -> None:
        if not self._state.is_speaking:
            return
        self._cancel_current()
        self._set_state(_IDLE)

    def dismiss(self) -> None:
        """Clear an error without retrying."""
        if self._state.is_error:
            self._set_state(_IDLE)

    def close(self) -> None:
        """Tear down: cancel anything in flight and return to Idle."""
        if self._current is not None:
            self._cancel_current()
        self._set_state(_IDLE)

    def _cancel_current(self) -> None:
        self._current = None
        if self._platform is not None:
            self._platform.cancel()

    def _on_start(self, utterance: Utterance) -> None:
        if utterance is self._current:
            logger.debug("TTS started ({chars} chars)", chars=len(utterance.text))

    def _on_end(self, utterance: Utterance) -> None:
        if utterance is not self._current:
            return
        self._current = None
        self._set_state(_IDLE)

    def _on_error(self, utterance: Utterance, code: str) -> None:
        if utterance is not self._current:
            return
        self._current = None
        if code in _CANCELLATION_CODES:
            self._set_state(_IDLE)
            return
        logger.error("Speech synthesis error: {code}", code=code)
        self._set_error(SpeechErrorReason.from_code(code), utterance.lang, code)

    def _set_error(self, reason: SpeechErrorReason, lang: str | None, code: str | None) -> None:
        message = describe_speech_error(reason, lang, code)
        self._set_state(PlaybackState(PlaybackStatus.ERROR, reason, message))

    def _set_state(self, state: PlaybackState) -> None:
        if state == self._state:
            return
        self._state = state
        for callback in list(self._listeners):
            callback(state)
