"""lingualens — contextual translation with idiom highlighting and spoken playback."""

from .highlighter import HighlightedIdiom, PlainText, highlight, render_html
from .languages import SUPPORTED_LANGUAGES, TONE_OPTIONS, find_language, find_tone
from .models import IdiomExplanation, IdiomExplanationRequest, TranslationRequest, TranslationResult
from .page import TranslationPage
from .speech import (
    PlaybackController,
    PlaybackState,
    PlaybackStatus,
    PlaybackUnavailableError,
    SpeechErrorReason,
    SpeechPlatform,
    Utterance,
)
from .translator import (
    GatewayAuthError,
    GatewayOptions,
    GatewayRateLimitError,
    GatewayRequestError,
    GatewayResponseError,
    LinguaLensError,
    TranslationGateway,
    TranslationGatewayError,
)
from .version import __version__

__all__ = [
    "TranslationPage",
    "TranslationGateway",
    "GatewayOptions",
    "TranslationRequest",
    "TranslationResult",
    "IdiomExplanationRequest",
    "IdiomExplanation",
    "highlight",
    "render_html",
    "PlainText",
    "HighlightedIdiom",
    "PlaybackController",
    "PlaybackState",
    "PlaybackStatus",
    "SpeechErrorReason",
    "SpeechPlatform",
    "Utterance",
    "SUPPORTED_LANGUAGES",
    "TONE_OPTIONS",
    "find_language",
    "find_tone",
    "LinguaLensError",
    "TranslationGatewayError",
    "GatewayAuthError",
    "GatewayRateLimitError",
    "GatewayRequestError",
    "GatewayResponseError",
    "PlaybackUnavailableError",
    "__version__",
]
