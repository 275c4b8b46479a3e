"""
Speech input engine for CareVoice
One recognition session at a time, single result, auto-terminating
"""

import asyncio
import logging
from typing import Callable, Optional

from .recognition_backends import RecognitionBackend
from ..utils.exceptions import (
    NoSpeechDetectedError,
    RecognitionBusyError,
    RecognitionError,
    SpeechInputError,
    UnsupportedCapabilityError
)

logger = logging.getLogger(__name__)

TranscriptCallback = Callable[[str], None]
ErrorCallback = Callable[[str], None]

NOT_SUPPORTED = "not-supported"
NO_SPEECH = "no-speech"
ABORTED = "aborted"


class SpeechInputEngine:
    """Microphone to text, one utterance per session"""

    def __init__(self, backend: RecognitionBackend, default_language: str = "en-US"):
        self.backend = backend
        self.default_language = default_language
        self._supported: Optional[bool] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_supported(self) -> bool:
        if self._supported is None:
            try:
                self._supported = bool(self.backend.is_available())
            except Exception as e:
                logger.warning(f"Speech recognition probe failed: {e}")
                self._supported = False
        return self._supported

    @property
    def is_listening(self) -> bool:
        return self._task is not None and not self._task.done()

    def listen(self,
               on_transcript: TranscriptCallback,
               on_error: ErrorCallback,
               language: Optional[str] = None) -> bool:
        """
        Start a recognition session; must be called from the running event loop

        Returns:
            True if a session started, False if one is already active or
            recognition is unsupported
        """
        if self.is_listening:
            logger.debug("Recognition session already active, ignoring listen()")
            return False

        if not self.is_supported:
            logger.warning("Speech recognition not supported")
            on_error(NOT_SUPPORTED)
            return False

        self._task = asyncio.get_running_loop().create_task(
            self._run_session(language or self.default_language, on_transcript, on_error)
        )
        return True

    async def _capture(self, language: str) -> str:
        loop = asyncio.get_running_loop()
        logger.info(f"Listening for speech ({language})...")
        return await loop.run_in_executor(None, self.backend.recognize, language)

    async def _run_session(self, language: str, on_transcript: TranscriptCallback, on_error: ErrorCallback):
        text = None
        reason = None
        try:
            text = await self._capture(language)
        except asyncio.CancelledError:
            logger.debug("Recognition session aborted")
            return
        except NoSpeechDetectedError as e:
            logger.info(str(e))
            reason = NO_SPEECH
        except SpeechInputError as e:
            logger.warning(f"Speech recognition error: {e}")
            reason = e.reason
        except Exception as e:
            logger.error(f"Unexpected error during speech recognition: {e}")
            reason = str(e) or e.__class__.__name__

        # Back to idle before reporting so callbacks may start a new session
        if self._task is asyncio.current_task():
            self._task = None

        if reason is not None:
            on_error(reason)
        else:
            on_transcript(text)

    async def recognize(self, language: Optional[str] = None) -> str:
        """
        Awaitable single recognition

        Raises:
            RecognitionBusyError, UnsupportedCapabilityError,
            NoSpeechDetectedError, RecognitionError
        """
        if self.is_listening:
            raise RecognitionBusyError()
        if not self.is_supported:
            raise UnsupportedCapabilityError("recognition")

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._capture(language or self.default_language))
        self._task = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and not asyncio.current_task().cancelling():
                raise RecognitionError(ABORTED, "Recognition aborted")
            raise
        finally:
            if self._task is task:
                self._task = None

    def abort(self) -> None:
        """Abandon the active session; no callback fires afterwards"""
        if self.is_listening:
            self._task.cancel()
            logger.debug("Aborting recognition session")
        self._task = None
