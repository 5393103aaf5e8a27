"""Tests for TranslationPage: submission, display state and playback wiring."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from lingualens.highlighter import HighlightedIdiom, PlainText
from lingualens.models import IdiomExplanation, TranslationResult
from lingualens.page import (
    EXPLANATION_FAILED_MESSAGE,
    SPEECH_UNAVAILABLE_MESSAGE,
    TRANSLATION_FAILED_MESSAGE,
    TranslationPage,
)
from lingualens.speech import PlaybackStatus
from lingualens.translator import GatewayRequestError, GatewayResponseError


def _result(**overrides) -> TranslationResult:
    fields = {
        "translation": "Break a leg before the show",
        "idioms": ["break a leg", "never said"],
        "alternative_translations": ["Good luck"],
    }
    fields.update(overrides)
    return TranslationResult(**fields)


def _gateway(result: TranslationResult | None = None, error: Exception | None = None) -> MagicMock:
    gateway = MagicMock()
    gateway.translate = AsyncMock(return_value=result or _result(), side_effect=error)
    gateway.explain_idiom = AsyncMock(
        return_value=IdiomExplanation("Wishes good luck.", ["Good luck"])
    )
    return gateway


@pytest.fixture
def page(controller) -> TranslationPage:
    return TranslationPage(_gateway(), controller)


class TestSubmit:
    @pytest.mark.asyncio
    async def test_success_stores_result(self, page):
        result = await page.submit("Hello", "en", "formal")
        assert result is page.result
        assert page.error is None
        assert page.is_loading is False

    @pytest.mark.asyncio
    async def test_gateway_receives_validated_request(self, controller):
        gateway = _gateway()
        page = TranslationPage(gateway, controller)
        await page.submit("Hello", "fr", "slang")
        request = gateway.translate.await_args.args[0]
        assert (request.text, request.target_language, request.tone) == ("Hello", "fr", "slang")

    @pytest.mark.asyncio
    async def test_gateway_failure_sets_generic_error(self, controller):
        page = TranslationPage(_gateway(error=GatewayRequestError("boom")), controller)
        assert await page.submit("Hello", "es", "formal") is None
        assert page.error == TRANSLATION_FAILED_MESSAGE
        assert page.result is None
        assert page.is_loading is False

    @pytest.mark.asyncio
    async def test_validation_failure_never_calls_gateway(self, controller):
        gateway = _gateway()
        page = TranslationPage(gateway, controller)
        assert await page.submit("", "es", "formal") is None
        assert page.error == TRANSLATION_FAILED_MESSAGE
        gateway.translate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_submission_replaces_previous_result(self, controller):
        gateway = _gateway()
        page = TranslationPage(gateway, controller)
        await page.submit("Hello", "es", "formal")
        gateway.translate.return_value = _result(translation="Adiós", idioms=[])
        await page.submit("Bye", "es", "formal")
        assert page.result.translation == "Adiós"
        assert page.result.idioms == []

    @pytest.mark.asyncio
    async def test_failure_after_success_clears_old_result(self, controller):
        gateway = _gateway()
        page = TranslationPage(gateway, controller)
        await page.submit("Hello", "es", "formal")
        gateway.translate.side_effect = GatewayResponseError("bad")
        await page.submit("Hello", "es", "formal")
        assert page.result is None
        assert page.error == TRANSLATION_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_submit_refused_while_loading(self, controller):
        release = asyncio.Event()
        gateway = _gateway()

        async def _slow(request):
            await release.wait()
            return _result()

        gateway.translate = AsyncMock(side_effect=_slow)
        page = TranslationPage(gateway, controller)

        first = asyncio.ensure_future(page.submit("Hello", "es", "formal"))
        await asyncio.sleep(0)
        assert page.is_loading is True
        assert page.can_submit is False
        assert await page.submit("Again", "es", "formal") is None

        release.set()
        assert await first is not None
        assert page.can_submit is True
        assert gateway.translate.await_count == 1

    @pytest.mark.asyncio
    async def test_new_result_resets_playback_error(self, page, platform):
        await page.submit("Hola", "es", "formal")
        page.toggle_speech()
        platform.fail("voice-unavailable")
        assert page.playback_state.is_error

        await page.submit("Hola otra vez", "es", "formal")
        assert page.playback_state.status is PlaybackStatus.IDLE
        assert page.notice is None

    @pytest.mark.asyncio
    async def test_submit_stops_ongoing_speech(self, page, platform):
        await page.submit("Hello", "en", "formal")
        page.toggle_speech()
        await page.submit("Hello again", "en", "formal")
        assert page.playback_state.status is PlaybackStatus.IDLE
        assert ("cancel",) in platform.events


class TestDisplay:
    def test_no_result_renders_nothing(self, page):
        assert page.segments == []
        assert page.render_html() == ""

    @pytest.mark.asyncio
    async def test_segments_highlight_matching_idioms_only(self, page):
        await page.submit("Hello", "en", "formal")
        assert page.segments == [
            HighlightedIdiom("Break a leg", "break a leg"),
            PlainText(" before the show"),
        ]

    @pytest.mark.asyncio
    async def test_render_html_includes_alternatives(self, page):
        await page.submit("Hello", "en", "formal")
        html = page.render_html()
        assert 'data-idiom="break a leg"' in html
        assert "<li>Good luck</li>" in html


class TestSpeech:
    @pytest.mark.asyncio
    async def test_toggle_speaks_translation_in_target_language(self, controller, platform):
        page = TranslationPage(_gateway(), controller)
        await page.submit("Hola", "es", "formal")
        page.toggle_speech()
        assert page.playback_state.is_speaking
        assert platform.events[-1] == ("speak", "Break a leg before the show", "es")

    @pytest.mark.asyncio
    async def test_toggle_again_stops(self, page):
        await page.submit("Hola", "es", "formal")
        page.toggle_speech()
        page.toggle_speech()
        assert page.playback_state.status is PlaybackStatus.IDLE

    def test_toggle_without_result_sets_notice(self, page, platform):
        page.toggle_speech()
        assert page.notice == SPEECH_UNAVAILABLE_MESSAGE
        assert platform.events == []

    @pytest.mark.asyncio
    async def test_no_platform_reports_unavailable(self):
        page = TranslationPage(_gateway())
        assert page.speech_available is False
        await page.submit("Hola", "es", "formal")
        page.toggle_speech()
        assert page.notice == SPEECH_UNAVAILABLE_MESSAGE
        assert page.playback_state.status is PlaybackStatus.IDLE

    @pytest.mark.asyncio
    async def test_playback_error_surfaces_as_notice(self, page, platform):
        await page.submit("Hola", "es", "formal")
        page.toggle_speech()
        platform.fail("voice-unavailable")
        assert page.playback_state.is_error
        assert "No voice available" in page.notice

    @pytest.mark.asyncio
    async def test_dismiss_speech_error_clears_state_and_notice(self, page, platform):
        await page.submit("Hola", "es", "formal")
        page.toggle_speech()
        platform.fail("audio-busy")
        page.dismiss_speech_error()
        assert page.playback_state.status is PlaybackStatus.IDLE
        assert page.notice is None

    def test_dismiss_speech_error_keeps_unrelated_notice(self, page):
        page.toggle_speech()
        page.dismiss_speech_error()
        assert page.notice == SPEECH_UNAVAILABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_close_while_speaking_cancels(self, page, platform):
        await page.submit("Hola", "es", "formal")
        page.toggle_speech()
        page.close()
        assert page.playback_state.status is PlaybackStatus.IDLE
        assert platform.active == []


class TestExplainIdiom:
    @pytest.mark.asyncio
    async def test_without_result_returns_none(self, page):
        assert await page.explain_idiom("break a leg") is None

    @pytest.mark.asyncio
    async def test_explains_in_context_of_translation(self, controller):
        gateway = _gateway()
        page = TranslationPage(gateway, controller)
        await page.submit("Hola", "es", "formal")
        exp = await page.explain_idiom("break a leg")
        assert exp.explanation == "Wishes good luck."
        request = gateway.explain_idiom.await_args.args[0]
        assert request.text == "Break a leg before the show"
        assert request.idiom == "break a leg"

    @pytest.mark.asyncio
    async def test_failure_sets_notice(self, controller):
        gateway = _gateway()
        gateway.explain_idiom.side_effect = GatewayRequestError("down")
        page = TranslationPage(gateway, controller)
        await page.submit("Hola", "es", "formal")
        assert await page.explain_idiom("break a leg") is None
        assert page.notice == EXPLANATION_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_default_playback_reports_speech_unavailable():
    page = TranslationPage(_gateway())
    assert page.speech_available is False
    await page.submit("Hola", "es", "formal")
    page.toggle_speech()
    assert page.notice == SPEECH_UNAVAILABLE_MESSAGE
    assert page.playback_state.status is PlaybackStatus.IDLE
