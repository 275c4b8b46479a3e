"""
Router collaborator used by the voice navigation assistants
"""

import logging
from typing import List, Protocol

logger = logging.getLogger(__name__)


class Router(Protocol):
    """Application router"""

    def navigate(self, path: str) -> None:
        ...

    def get_current_path(self) -> str:
        ...


class InMemoryRouter:
    """Router that only records the navigation history"""

    def __init__(self, initial_path: str = "/"):
        self.history: List[str] = [initial_path]

    def navigate(self, path: str) -> None:
        logger.debug(f"Navigating to {path}")
        self.history.append(path)

    def get_current_path(self) -> str:
        return self.history[-1]
