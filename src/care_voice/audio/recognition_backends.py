"""
Speech recognition backend using Google Speech Recognition
"""

import logging
import threading
from typing import Optional, Protocol

import speech_recognition as sr

from ..utils.exceptions import NoSpeechDetectedError, RecognitionError

logger = logging.getLogger(__name__)


class RecognitionBackend(Protocol):
    """Blocking single-utterance recognizer; runs on a worker thread"""

    def is_available(self) -> bool:
        ...

    def recognize(self, language: str) -> str:
        """Capture one phrase and return the best transcript"""
        ...


class GoogleRecognitionBackend:
    """Microphone capture with Google Speech Recognition"""

    def __init__(self,
                 listen_timeout: float = 8.0,
                 phrase_time_limit: float = 10.0,
                 energy_threshold: int = 300,
                 pause_threshold: float = 0.8,
                 calibration_duration: float = 1.0,
                 device_index: Optional[int] = None):
        self.listen_timeout = listen_timeout
        self.phrase_time_limit = phrase_time_limit
        self.calibration_duration = calibration_duration
        self.device_index = device_index

        self.recognizer = sr.Recognizer()
        self.recognizer.energy_threshold = energy_threshold
        self.recognizer.dynamic_energy_threshold = True
        self.recognizer.pause_threshold = pause_threshold

        self._calibrated = False
        self._mic_lock = threading.Lock()

    def is_available(self) -> bool:
        """Check if a microphone can be opened"""
        try:
            names = sr.Microphone.list_microphone_names()
        except (AttributeError, OSError) as e:
            logger.warning(f"Microphone not available: {e}")
            return False
        if not names:
            logger.warning("No microphone devices found")
            return False
        return True

    def _calibrate(self, source):
        if self._calibrated or self.calibration_duration <= 0:
            return
        logger.info("Calibrating microphone for ambient noise...")
        self.recognizer.adjust_for_ambient_noise(source, duration=self.calibration_duration)
        self._calibrated = True
        logger.info(f"Microphone calibration completed (energy threshold: {self.recognizer.energy_threshold})")

    def recognize(self, language: str) -> str:
        with self._mic_lock:
            try:
                with sr.Microphone(device_index=self.device_index) as source:
                    self._calibrate(source)
                    logger.debug(f"Listening for speech in {language}...")
                    audio = self.recognizer.listen(
                        source,
                        timeout=self.listen_timeout,
                        phrase_time_limit=self.phrase_time_limit
                    )
            except sr.WaitTimeoutError:
                raise NoSpeechDetectedError(f"No speech detected in {self.listen_timeout} seconds")
            except (AttributeError, OSError) as e:
                raise RecognitionError("audio-capture", f"Microphone error: {e}") from e

        logger.debug("Processing speech...")
        try:
            text = self.recognizer.recognize_google(audio, language=language)
        except sr.UnknownValueError:
            raise RecognitionError("no-match", "Could not understand the speech clearly")
        except sr.RequestError as e:
            raise RecognitionError("network", f"Speech recognition service error: {e}") from e

        # recognize_google returns the best alternative only
        text = (text or "").strip()
        if not text:
            raise NoSpeechDetectedError()
        logger.info(f"Google Speech Recognition: {text}")
        return text
