"""
Voice navigation for CareVoice
"""

from .voice_routes import (
    VoiceRoute,
    RouteOutcome,
    VoiceCommandRouter,
    match_route,
    NAVIGATION_ROUTES,
    NAVIGATION_EXAMPLES,
    FLOATING_ASSISTANT_ROUTES,
    FLOATING_ASSISTANT_EXAMPLES
)
from .router import Router, InMemoryRouter
from .assistant import VoiceNavigationAssistant, RecognitionState

__all__ = [
    "VoiceRoute",
    "RouteOutcome",
    "VoiceCommandRouter",
    "match_route",
    "NAVIGATION_ROUTES",
    "NAVIGATION_EXAMPLES",
    "FLOATING_ASSISTANT_ROUTES",
    "FLOATING_ASSISTANT_EXAMPLES",
    "Router",
    "InMemoryRouter",
    "VoiceNavigationAssistant",
    "RecognitionState"
]
