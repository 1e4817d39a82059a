"""
Collaborator Contracts
=======================
Audio cues, UI text updates and banner messages emitted by the session.

The base sink classes do nothing, so a session without a front end
(tests, headless runs) simply drops every notification.
"""

from dataclasses import dataclass
from enum import Enum


class AudioCue(Enum):
    """Discrete sound events. The audio collaborator maps them to sound."""
    LAUNCH = 'launch'
    IMPACT = 'impact'
    INTERCEPT = 'intercept'
    DEFEAT = 'defeat'
    VICTORY = 'victory'


@dataclass(frozen=True)
class Banner:
    """Modal message: title, body lines and the primary action label."""
    title: str
    lines: tuple = ()
    action: str = 'Start Game'


class AudioSink:
    """Receives audio cues."""

    def play(self, cue: AudioCue) -> None:
        pass


class UISink:
    """Receives score readouts, banners and control labels."""

    def update_stats(self, score: int, hits: int, intercepts: int) -> None:
        pass

    def show_banner(self, banner: Banner) -> None:
        pass

    def hide_banner(self) -> None:
        pass

    def set_pause_label(self, label: str) -> None:
        pass
