import logging

from .constants import THEME_DARK, THEME_LIGHT
from .state import StateRepository

logger = logging.getLogger("ems.core")


class ThemeService:
    def __init__(self, repository: StateRepository = None):
        self.repository = repository or StateRepository()

    def get(self) -> str:
        return self.repository.read().theme

    def toggle(self) -> str:
        with self.repository.transaction() as state:
            state.theme = THEME_LIGHT if state.theme == THEME_DARK else THEME_DARK
            logger.info(f"Theme switched to {state.theme}")
            return state.theme
