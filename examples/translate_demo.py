"""
End-to-end demo: TranslationPage against a live OpenAI-compatible endpoint.

How to run:
    python examples/translate_demo.py "It's raining cats and dogs" es colloquial

Set LINGUALENS_API_KEY (and optionally LINGUALENS_BASE_URL / LINGUALENS_MODEL)
in your environment or a .env file.
"""

from __future__ import annotations

import asyncio
import sys

from dotenv import load_dotenv
from loguru import logger

from lingualens import (
    HighlightedIdiom,
    PlaybackController,
    SpeechPlatform,
    TranslationGateway,
    TranslationPage,
    Utterance,
)

load_dotenv()

logger.remove()
logger.add(sys.stderr, level="INFO", format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")


class ConsoleSpeechPlatform(SpeechPlatform):
    """Prints utterances instead of playing audio."""

    def speak(self, utterance: Utterance) -> None:
        utterance.on_start()
        print(f"\n[SPEAKING {utterance.lang or 'default'}] {utterance.text}\n", flush=True)
        utterance.on_end()

    def cancel(self) -> None:
        pass


async def main() -> None:
    if len(sys.argv) < 2:
        print('Usage: translate_demo.py "text" [language] [tone]')
        sys.exit(1)

    text = sys.argv[1]
    language = sys.argv[2] if len(sys.argv) > 2 else "es"
    tone = sys.argv[3] if len(sys.argv) > 3 else "colloquial"

    page = TranslationPage(
        TranslationGateway(),
        PlaybackController(ConsoleSpeechPlatform()),
    )

    try:
        result = await page.submit(text, language, tone)
        if result is None:
            print(f"❌  {page.error}")
            sys.exit(1)

        print("\n" + "─" * 60)
        rendered = "".join(
            f"[{seg.text}]" if isinstance(seg, HighlightedIdiom) else seg.text
            for seg in page.segments
        )
        print(f"  Translation: {rendered}")
        for alt in result.alternative_translations:
            print(f"    • {alt}")
        print("─" * 60)

        page.toggle_speech()

        for idiom in result.idioms[:1]:
            explanation = await page.explain_idiom(idiom)
            if explanation is not None:
                print(f"\n  {idiom}: {explanation.explanation}\n")
    finally:
        page.close()


if __name__ == "__main__":
    asyncio.run(main())
