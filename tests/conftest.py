from __future__ import annotations

import pytest

from lingualens.speech import PlaybackController, SpeechPlatform, Utterance


class FakeSpeechPlatform(SpeechPlatform):
    """Records calls and lets tests drive utterance callbacks by hand."""

    def __init__(self) -> None:
        self.events: list[tuple] = []
        self.active: list[Utterance] = []
        self.raise_on_speak: Exception | None = None

    def speak(self, utterance: Utterance) -> None:
        if self.raise_on_speak is not None:
            raise self.raise_on_speak
        self.events.append(("speak", utterance.text, utterance.lang))
        self.active.append(utterance)
        utterance.on_start()

    def cancel(self) -> None:
        self.events.append(("cancel",))
        dropped, self.active = self.active, []
        for utterance in dropped:
            utterance.on_error("canceled")

    def finish(self) -> None:
        self.active.pop(0).on_end()

    def fail(self, code: str) -> None:
        self.active.pop(0).on_error(code)


@pytest.fixture
def platform() -> FakeSpeechPlatform:
    return FakeSpeechPlatform()


@pytest.fixture
def controller(platform: FakeSpeechPlatform) -> PlaybackController:
    return PlaybackController(platform)
