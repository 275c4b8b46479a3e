"""
CareVoice Audio Package
Contains speech output (text-to-speech) and speech input (speech-to-text) engines.
"""

from .synthesis_backends import Voice, Utterance, Pyttsx3Backend, GTTSBackend, create_synthesis_backend
from .speech_output import SpeechOutputEngine
from .speech_input import SpeechInputEngine
from .recognition_backends import GoogleRecognitionBackend
from .page_reader import PageReader, extract_readable_text

__all__ = [
    'Voice',
    'Utterance',
    'Pyttsx3Backend',
    'GTTSBackend',
    'create_synthesis_backend',
    'SpeechOutputEngine',
    'SpeechInputEngine',
    'GoogleRecognitionBackend',
    'PageReader',
    'extract_readable_text'
]
