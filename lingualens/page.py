"""TranslationPage: the state behind the LinguaLens translation form."""

from __future__ import annotations

from loguru import logger

from .highlighter import Segment, highlight, render_html
from .models import IdiomExplanation, IdiomExplanationRequest, TranslationRequest, TranslationResult
from .speech import PlaybackController, PlaybackState, PlaybackUnavailableError
from .translator import TranslationGateway, TranslationGatewayError

TRANSLATION_FAILED_MESSAGE = "Failed to translate. Please try again."
EXPLANATION_FAILED_MESSAGE = "Could not explain this idiom. Please try again."
SPEECH_UNAVAILABLE_MESSAGE = "Text-to-speech is not available or there is no text to speak."


class TranslationPage:
    """Coordinates one translation form: submission, result display and playback.

    Only one translation request is in flight at a time; :attr:`can_submit` is
    False while it runs and :meth:`submit` refuses new work until it settles.

    Args:
        gateway: The remote translation client.
        playback: Controller for spoken playback. Defaults to one without a
            speech platform, which reports speech as unavailable.
    """

    def __init__(
        self,
        gateway: TranslationGateway,
        playback: PlaybackController | None = None,
    ) -> None:
        self._gateway = gateway
        self._playback = playback or PlaybackController()

        self._result: TranslationResult | None = None
        self._request: TranslationRequest | None = None
        self._error: str | None = None
        self._notice: str | None = None
        self._is_loading = False

        self._playback.add_listener(self._on_playback_state)

    @property
    def result(self) -> TranslationResult | None:
        return self._result

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def notice(self) -> str | None:
        """Latest non-fatal message, e.g. a playback failure."""
        return self._notice

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def can_submit(self) -> bool:
        return not self._is_loading

    @property
    def speech_available(self) -> bool:
        return self._playback.available

    @property
    def playback_state(self) -> PlaybackState:
        return self._playback.state

    @property
    def segments(self) -> list[Segment]:
        if self._result is None:
            return []
        return highlight(self._result.translation, self._result.idioms)

    def render_html(self) -> str:
        if self._result is None:
            return ""
        return render_html(self.segments, self._result.alternative_translations)

    async def submit(self, text: str, target_language: str, tone: str) -> TranslationResult | None:
        """Translate the form values; returns the new result, or None on failure."""
        if self._is_loading:
            logger.warning("Translation already in progress; ignoring submission.")
            return None

        self._is_loading = True
        self._error = None
        self._notice = None
        self._result = None
        self._request = None
        # Each new result starts from Idle.
        self._playback.close()

        try:
            request = TranslationRequest(text=text, target_language=target_language, tone=tone)
            result = await self._gateway.translate(request)
        except (ValueError, TranslationGatewayError) as exc:
            logger.error("Translation error: {exc}", exc=exc)
            self._error = TRANSLATION_FAILED_MESSAGE
            return None
        finally:
            self._is_loading = False

        self._request = request
        self._result = result
        return result

    def toggle_speech(self) -> None:
        """Speak the current translation, or stop if it is already being spoken."""
        if self._playback.state.is_speaking:
            self._playback.stop()
            return

        if self._result is None or not self._result.translation:
            self._notice = SPEECH_UNAVAILABLE_MESSAGE
            return

        self._notice = None
        language = self._request.target_language if self._request is not None else None
        try:
            self._playback.play(self._result.translation, language)
        except (PlaybackUnavailableError, ValueError) as exc:
            logger.warning("TTS unavailable: {exc}", exc=exc)
            self._notice = SPEECH_UNAVAILABLE_MESSAGE

    def dismiss_speech_error(self) -> None:
        """Acknowledge a playback error without retrying."""
        if self._playback.state.is_error:
            self._playback.dismiss()
            self._notice = None

    def _on_playback_state(self, state: PlaybackState) -> None:
        if state.is_error:
            self._notice = state.message

    async def explain_idiom(self, idiom: str) -> IdiomExplanation | None:
        """Ask the model to explain *idiom* within the current translation."""
        if self._result is None:
            return None
        try:
            request = IdiomExplanationRequest(text=self._result.translation, idiom=idiom)
            return await self._gateway.explain_idiom(request)
        except (ValueError, TranslationGatewayError) as exc:
            logger.error("Idiom explanation error: {exc}", exc=exc)
            self._notice = EXPLANATION_FAILED_MESSAGE
            return None

    def close(self) -> None:
        """Tear down the page; stops any speech in progress."""
        self._playback.close()
