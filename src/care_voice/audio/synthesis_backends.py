"""
Speech synthesis backends
Offline system voices through pyttsx3 and Google TTS played through pygame
"""

import os
import logging
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Protocol

from ..utils.exceptions import ConfigurationError

# Suppress pygame welcome message globally
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'

logger = logging.getLogger(__name__)

EndCallback = Callable[[], None]
ErrorCallback = Callable[[str], None]


def normalize_lang(tag: Optional[str]) -> str:
    """Lower-case language tag with '-' separators ('en_US' -> 'en-us')"""
    return (tag or "").strip().replace("_", "-").lower()


@dataclass(frozen=True)
class Voice:
    """An installed synthesis voice"""
    id: str
    name: str
    lang: str
    default: bool = False

    @property
    def normalized_lang(self) -> str:
        return normalize_lang(self.lang)

    @property
    def lang_prefix(self) -> str:
        return self.normalized_lang.split("-")[0]


@dataclass
class Utterance:
    """
    One text-to-speech playback request

    pitch is carried for backends that can bend it; neither pyttsx3 nor
    gTTS exposes a pitch control, so both bundled backends ignore it.
    """
    text: str
    lang: str
    rate: float = 1.0
    pitch: float = 1.0
    volume: float = 1.0
    voice: Optional[Voice] = None


class SynthesisBackend(Protocol):
    """Playback engine driven by SpeechOutputEngine"""

    def is_available(self) -> bool:
        ...

    def get_voices(self) -> List[Voice]:
        ...

    def speak(self, utterance: Utterance, on_end: EndCallback, on_error: ErrorCallback) -> None:
        """Start playback and return immediately; exactly one callback fires later"""
        ...

    def cancel(self) -> None:
        ...

    def close(self) -> None:
        ...


def _voice_language(raw_languages) -> str:
    """pyttsx3 reports languages as str or espeak-style bytes (b'\\x05en-us')"""
    if not raw_languages:
        return ""
    first = raw_languages[0]
    if isinstance(first, bytes):
        first = first.decode("utf-8", errors="ignore")
    return "".join(ch for ch in str(first) if ch.isprintable()).strip()


class Pyttsx3Backend:
    """Offline synthesis using the operating system voices"""

    BASE_RATE = 200  # pyttsx3 words per minute at rate 1.0

    def __init__(self):
        self._voices: Optional[List[Voice]] = None
        self._engine = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._generation = 0

    def _init_engine(self):
        import pyttsx3
        return pyttsx3.init()

    def is_available(self) -> bool:
        try:
            self._init_engine()
            return True
        except Exception as e:
            logger.warning(f"pyttsx3 not available: {e}")
            return False

    def get_voices(self) -> List[Voice]:
        if self._voices is None:
            try:
                engine = self._init_engine()
                raw_voices = engine.getProperty('voices') or []
            except Exception as e:
                logger.error(f"Could not list pyttsx3 voices: {e}")
                return []
            self._voices = [
                Voice(
                    id=v.id,
                    name=v.name or v.id,
                    lang=_voice_language(getattr(v, 'languages', None)),
                    default=index == 0
                )
                for index, v in enumerate(raw_voices)
            ]
            logger.info(f"Found {len(self._voices)} pyttsx3 voices")
        return list(self._voices)

    def speak(self, utterance: Utterance, on_end: EndCallback, on_error: ErrorCallback) -> None:
        self.cancel()
        with self._lock:
            self._generation += 1
            generation = self._generation
            previous = self._thread
            thread = threading.Thread(
                target=self._run,
                args=(utterance, generation, previous, on_end, on_error),
                name="care-voice-pyttsx3",
                daemon=True
            )
            self._thread = thread
        thread.start()

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _run(self, utterance: Utterance, generation: int, previous: Optional[threading.Thread],
             on_end: EndCallback, on_error: ErrorCallback):
        # pyttsx3.init() hands back one cached engine and its run loop is not
        # reentrant, so wait until the superseded utterance has left it
        if previous is not None:
            previous.join()

        try:
            engine = self._init_engine()
            with self._lock:
                if generation != self._generation:
                    return
                self._engine = engine
            engine.setProperty('rate', int(self.BASE_RATE * utterance.rate))
            engine.setProperty('volume', min(max(utterance.volume, 0.0), 1.0))
            if utterance.voice is not None:
                engine.setProperty('voice', utterance.voice.id)
            engine.say(utterance.text)
            engine.runAndWait()
        except Exception as e:
            logger.error(f"pyttsx3 playback failed: {e}")
            on_error(str(e) or e.__class__.__name__)
            return
        finally:
            with self._lock:
                if generation == self._generation:
                    self._engine = None

        if self._is_current(generation):
            on_end()
        else:
            logger.debug("pyttsx3 utterance stopped before the end")

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            engine, self._engine = self._engine, None
        if engine is not None:
            try:
                engine.stop()
                logger.debug("Stopped current pyttsx3 playback")
            except Exception as e:
                logger.warning(f"Error stopping pyttsx3 playback: {e}")

    def close(self) -> None:
        self.cancel()


class GTTSBackend:
    """Google TTS synthesis with pygame mixer playback"""

    def __init__(self, temp_dir: Optional[str] = None, tld: str = "com"):
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir()) / "care_voice"
        self.tld = tld
        self._mixer_ready = False
        self._stop_event = threading.Event()
        # Stop event of the utterance whose file is loaded in the mixer
        self._owner: Optional[threading.Event] = None
        self._lock = threading.Lock()

    def _init_mixer(self) -> bool:
        if self._mixer_ready:
            return True
        try:
            import pygame
            pygame.mixer.init(frequency=22050, size=-16, channels=2, buffer=512)
            self._mixer_ready = True
            logger.info("Audio system initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize audio system: {e}")
            self._mixer_ready = False
        return self._mixer_ready

    def is_available(self) -> bool:
        return self._init_mixer()

    def get_voices(self) -> List[Voice]:
        from gtts.lang import tts_langs

        return [
            Voice(id=code, name=f"Google {name}", lang=code, default=code == "en")
            for code, name in sorted(tts_langs().items())
        ]

    def speak(self, utterance: Utterance, on_end: EndCallback, on_error: ErrorCallback) -> None:
        self.cancel()
        stop_event = threading.Event()
        with self._lock:
            self._stop_event = stop_event

        thread = threading.Thread(
            target=self._run,
            args=(utterance, stop_event, on_end, on_error),
            name="care-voice-gtts",
            daemon=True
        )
        thread.start()

    def _run(self, utterance: Utterance, stop_event: threading.Event,
             on_end: EndCallback, on_error: ErrorCallback):
        temp_file = None
        try:
            from gtts import gTTS
            import pygame

            if not self._init_mixer():
                on_error("audio-unavailable")
                return

            lang = utterance.voice.id if utterance.voice else utterance.lang.split("-")[0]
            tts = gTTS(text=utterance.text, lang=lang, tld=self.tld, slow=utterance.rate < 0.5)

            self.temp_dir.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(suffix=".mp3", prefix="tts_", dir=self.temp_dir)
            os.close(fd)
            temp_file = Path(temp_name)
            tts.save(str(temp_file))

            # Take over the mixer unless a newer utterance already has
            with self._lock:
                if stop_event.is_set():
                    return
                pygame.mixer.music.set_volume(min(max(utterance.volume, 0.0), 1.0))
                pygame.mixer.music.load(str(temp_file))
                pygame.mixer.music.play()
                self._owner = stop_event

            # Wait for playback to complete
            while pygame.mixer.music.get_busy() and not stop_event.is_set():
                pygame.time.wait(100)

            if stop_event.is_set():
                return
        except Exception as e:
            logger.error(f"Google TTS playback failed: {e}")
            on_error(str(e) or e.__class__.__name__)
            return
        finally:
            if temp_file is not None:
                self._release(stop_event, temp_file)

        on_end()

    def _release(self, stop_event: threading.Event, temp_file: Path):
        """Unload the mixer if this utterance still owns it, then drop its file"""
        with self._lock:
            if self._owner is stop_event:
                self._owner = None
                try:
                    import pygame
                    pygame.mixer.music.unload()
                except Exception as e:
                    logger.warning(f"Failed to unload audio: {e}")
        try:
            temp_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to cleanup temp file: {e}")

    def cancel(self) -> None:
        with self._lock:
            self._stop_event.set()
            if self._mixer_ready and self._owner is not None:
                try:
                    import pygame
                    pygame.mixer.music.stop()
                except Exception as e:
                    logger.warning(f"Error stopping speech: {e}")

    def close(self) -> None:
        self.cancel()
        for file in self.temp_dir.glob("tts_*.mp3"):
            try:
                file.unlink()
            except OSError as e:
                logger.warning(f"Could not remove temp file {file}: {e}")


def create_synthesis_backend(name: str, temp_dir: Optional[str] = None):
    """Backend instance for a settings value ('pyttsx3' or 'gtts')"""
    if name == "gtts":
        return GTTSBackend(temp_dir=temp_dir)
    if name == "pyttsx3":
        return Pyttsx3Backend()
    raise ConfigurationError(f"Unknown TTS backend: {name!r}")
