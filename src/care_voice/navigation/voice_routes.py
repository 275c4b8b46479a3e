"""
Voice route tables and the shared command matching rule
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoiceRoute:
    """Phrases that lead to one application route"""
    route_path: str
    phrases: FrozenSet[str]

    @classmethod
    def of(cls, route_path: str, *phrases: str) -> "VoiceRoute":
        return cls(route_path, frozenset(p.lower() for p in phrases))

    def matches(self, lowered_transcript: str) -> bool:
        return any(phrase in lowered_transcript for phrase in self.phrases)


@dataclass(frozen=True)
class RouteOutcome:
    """Result of matching a transcript against a route table"""
    matched: bool
    path: Optional[str] = None

    @classmethod
    def hit(cls, path: str) -> "RouteOutcome":
        return cls(True, path)

    @classmethod
    def unmatched(cls) -> "RouteOutcome":
        return cls(False, None)


def match_route(transcript: str, table: Sequence[VoiceRoute]) -> RouteOutcome:
    """
    First route (in table order) with a phrase contained in the transcript

    Matching is case-insensitive substring containment, so "lab" also
    matches "labelled".
    """
    lowered = (transcript or "").lower()
    for route in table:
        if route.matches(lowered):
            return RouteOutcome.hit(route.route_path)
    return RouteOutcome.unmatched()


# Page-level navigation helper
NAVIGATION_ROUTES: List[VoiceRoute] = [
    VoiceRoute.of("/", "dashboard", "home", "go to dashboard"),
    VoiceRoute.of("/profile", "profile", "my profile"),
    VoiceRoute.of("/prescriptions", "prescriptions", "medications"),
    VoiceRoute.of("/exercises", "exercises", "workouts"),
    VoiceRoute.of("/lab-tests", "lab tests", "lab", "labs"),
    VoiceRoute.of("/reminders", "reminders", "alerts"),
]

NAVIGATION_EXAMPLES = ["Go to Profile", "Dashboard", "Lab Tests", "Reminders"]

# Floating assistant button
FLOATING_ASSISTANT_ROUTES: List[VoiceRoute] = [
    VoiceRoute.of("/", "dashboard", "home", "main page"),
    VoiceRoute.of("/profile", "profile", "my details", "account"),
    VoiceRoute.of("/prescriptions", "prescription", "medicine", "medication", "pills"),
    VoiceRoute.of("/exercises", "exercise", "workout", "physio"),
    VoiceRoute.of("/lab-tests", "lab test", "blood test", "lab report", "labs"),
    VoiceRoute.of("/reminders", "reminder", "alarm", "alert"),
]

FLOATING_ASSISTANT_EXAMPLES = ["Open my medicines", "Show lab reports", "Set a reminder", "Go home"]


class VoiceCommandRouter:
    """Maps recognized speech to a route using one phrase table"""

    def __init__(self, table: Iterable[VoiceRoute], examples: Optional[Iterable[str]] = None):
        self.table = list(table)
        if not self.table:
            raise ValueError("Voice route table must not be empty")
        self.examples = list(examples) if examples else [r.route_path for r in self.table]

    def route(self, transcript: str) -> RouteOutcome:
        outcome = match_route(transcript, self.table)
        if outcome.matched:
            logger.info(f"Voice command {transcript!r} -> {outcome.path}")
        else:
            logger.info(f"No route for voice command {transcript!r}")
        return outcome

    def example_commands(self) -> List[str]:
        return list(self.examples)

    def help_message(self) -> str:
        quoted = ", ".join(f'"{example}"' for example in self.examples)
        return f"Try commands: {quoted} etc."
