"""
Voice navigation assistant
Listens for one spoken command and routes the application to the matching page
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from .router import Router
from .voice_routes import RouteOutcome, VoiceCommandRouter
from ..audio.speech_input import SpeechInputEngine, NO_SPEECH, NOT_SUPPORTED
from ..core.notifications import Notifier, LoggingNotifier, Severity

logger = logging.getLogger(__name__)


class RecognitionState(Enum):
    """Recognition session states."""
    IDLE = "idle"
    LISTENING = "listening"
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    ERRORED = "errored"


ERROR_MESSAGES = {
    NO_SPEECH: "No speech detected.",
    NOT_SUPPORTED: "Speech recognition not supported on this device.",
}

StateListener = Callable[[RecognitionState], None]


class VoiceNavigationAssistant:
    """One voice-to-route assistant bound to a phrase table"""

    def __init__(self,
                 name: str,
                 engine: SpeechInputEngine,
                 command_router: VoiceCommandRouter,
                 router: Router,
                 notifier: Optional[Notifier] = None,
                 language: Optional[str] = None):
        self.name = name
        self.engine = engine
        self.command_router = command_router
        self.router = router
        self.notifier = notifier or LoggingNotifier()
        self.language = language

        self.state = RecognitionState.IDLE
        self.transcript = ""
        self.error: Optional[str] = None
        self.last_outcome: Optional[RouteOutcome] = None
        self._listeners: List[StateListener] = []
        self._closed = False

    @property
    def is_listening(self) -> bool:
        return self.state is RecognitionState.LISTENING

    def on_state_change(self, listener: StateListener):
        self._listeners.append(listener)

    def _set_state(self, state: RecognitionState):
        self.state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"{self.name}: state listener failed: {e}")

    def start_listening(self) -> bool:
        """Begin one recognition session; ignored while one is active"""
        if self._closed:
            logger.warning(f"{self.name}: assistant is closed")
            return False
        if self.is_listening:
            return False

        self.error = None
        self.transcript = ""
        self.last_outcome = None
        self._set_state(RecognitionState.LISTENING)

        started = self.engine.listen(self._handle_transcript, self._handle_error, self.language)
        if not started and self.state is RecognitionState.LISTENING:
            # Engine already busy with another consumer
            self._set_state(RecognitionState.IDLE)
        return started

    def _handle_transcript(self, text: str):
        self.transcript = text
        outcome = self.command_router.route(text)
        self.last_outcome = outcome

        if outcome.matched:
            if outcome.path != self.router.get_current_path():
                self.router.navigate(outcome.path)
            else:
                logger.debug(f"{self.name}: already at {outcome.path}")
            self._set_state(RecognitionState.MATCHED)
        else:
            self.error = f'Could not recognize destination: "{text}"'
            self.notifier.notify(
                f"{self.error}. {self.command_router.help_message()}",
                Severity.WARNING
            )
            self._set_state(RecognitionState.UNMATCHED)

        self._set_state(RecognitionState.IDLE)

    def _handle_error(self, reason: str):
        self.error = ERROR_MESSAGES.get(reason, reason)
        logger.info(f"{self.name}: recognition error: {reason}")
        self._set_state(RecognitionState.ERRORED)
        self._set_state(RecognitionState.IDLE)

    def close(self):
        """Abandon any in-flight session; no callbacks fire afterwards"""
        self._closed = True
        if self.is_listening:
            self.engine.abort()
        self._set_state(RecognitionState.IDLE)
