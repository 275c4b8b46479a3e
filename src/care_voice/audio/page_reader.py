"""
Read-page-aloud support
Extracts readable text from an HTML fragment and speaks it in the active language
"""

import logging
import re
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from .speech_output import SpeechOutputEngine
from ..utils.exceptions import SpeechCancelledError, UnsupportedCapabilityError

logger = logging.getLogger(__name__)

ENGLISH_INTRO = "Reading page content: "
HINDI_INTRO = "पृष्ठ सामग्री पढ़ी जा रही है: "

SKIPPED_TAGS = {"nav", "button", "script", "style", "noscript", "template"}
VOID_TAGS = {"area", "base", "br", "col", "embed", "hr", "img", "input",
             "link", "meta", "source", "track", "wbr"}


def _is_hidden(attrs) -> bool:
    values = dict(attrs)
    if "hidden" in values or values.get("aria-hidden") == "true":
        return True
    style = (values.get("style") or "").replace(" ", "").lower()
    return "display:none" in style or "visibility:hidden" in style


class _ReadableTextParser(HTMLParser):
    """Collects visible text nodes, skipping navigation, buttons and hidden elements"""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.chunks: List[str] = []
        # (tag, skipped) for every open element
        self._stack: List[Tuple[str, bool]] = []

    @property
    def _skipping(self) -> bool:
        return any(skipped for _, skipped in self._stack)

    def handle_starttag(self, tag, attrs):
        if tag in VOID_TAGS:
            return
        self._stack.append((tag, tag in SKIPPED_TAGS or _is_hidden(attrs)))

    def handle_startendtag(self, tag, attrs):
        pass

    def handle_endtag(self, tag):
        # Close back to the matching open tag; implied end tags (li, p) go with it
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index][0] == tag:
                del self._stack[index:]
                return
        logger.debug(f"Ignoring unmatched end tag </{tag}>")

    def handle_data(self, data):
        if self._skipping:
            return
        text = data.strip()
        if len(text) < 2:
            return
        self.chunks.append(text)


def extract_readable_text(html: str) -> str:
    """Visible text of an HTML fragment with whitespace collapsed"""
    parser = _ReadableTextParser()
    parser.feed(html or "")
    parser.close()
    return re.sub(r"\s+", " ", " ".join(parser.chunks)).strip()


class PageReader:
    """Toggleable read-aloud of a whole page"""

    def __init__(self, speech: SpeechOutputEngine):
        self.speech = speech
        # Token of the read in progress; a newer read replaces it
        self._current_read: Optional[object] = None

    @property
    def is_reading(self) -> bool:
        return self._current_read is not None

    def intro_for(self, language_code: str) -> str:
        return ENGLISH_INTRO if language_code == "en" else HINDI_INTRO

    async def read(self, html: str) -> bool:
        """
        Speak the page content

        Returns:
            True if the page was read to the end, False if there was nothing
            to read or reading was stopped
        """
        if not self.speech.is_supported:
            raise UnsupportedCapabilityError("synthesis")

        page_text = extract_readable_text(html)
        if not page_text:
            logger.warning("No readable content found on page")
            return False

        logger.info(f"Reading page content: {page_text[:100]}...")
        intro = self.intro_for(self.speech.session.get_current().code)

        token = object()
        self._current_read = token
        try:
            await self.speech.speak(intro + page_text)
            return True
        except SpeechCancelledError:
            logger.debug("Page reading stopped")
            return False
        finally:
            if self._current_read is token:
                self._current_read = None

    async def toggle(self, html: str) -> bool:
        """Stop if currently reading, otherwise start reading"""
        if self.is_reading:
            self.stop()
            return False
        return await self.read(html)

    def stop(self):
        if self.is_reading:
            self.speech.stop()
        self._current_read = None
