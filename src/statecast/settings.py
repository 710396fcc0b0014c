"""Application settings store built on :class:`~statecast.store.Store`.

Shows the intended shape of a domain type: named, typed mutation methods
that each publish one message type.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from statecast.store import Store


class Theme(StrEnum):
    LIGHT = "Light"
    DARK = "Dark"


class Font(StrEnum):
    MONOSPACED = "Monospaced"
    SERIF = "Serif"


class SettingsMessage(StrEnum):
    SET_THEME = "SetTheme"
    SET_FONT = "SetFont"


class SettingsState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    font: Font = Font.SERIF
    theme: Theme = Theme.DARK


class Settings(Store[SettingsMessage, SettingsState]):
    """Theme and font preferences.

    Every setter returns the number of active subscriptions at the time of
    the change.
    """

    def __init__(self, initial: SettingsState | None = None, **kwargs: Any) -> None:
        super().__init__(initial if initial is not None else SettingsState(), **kwargs)

    @property
    def current(self) -> SettingsState:
        return self._get_latest_state()

    @property
    def updated_at(self) -> datetime:
        return self._get_latest_snapshot().updated_at

    def set_theme(self, theme: Theme) -> int:
        theme = Theme(theme)
        return self._publish(SettingsMessage.SET_THEME, lambda prev: prev.model_copy(update={"theme": theme}))

    def set_font(self, font: Font) -> int:
        font = Font(font)
        return self._publish(SettingsMessage.SET_FONT, lambda prev: prev.model_copy(update={"font": font}))

    def set_light_theme(self) -> int:
        return self.set_theme(Theme.LIGHT)

    def set_dark_theme(self) -> int:
        return self.set_theme(Theme.DARK)

    def set_monospaced_font(self) -> int:
        return self.set_font(Font.MONOSPACED)

    def set_serif_font(self) -> int:
        return self.set_font(Font.SERIF)
