"""Participant visibility state."""

from enum import StrEnum


class ParticipantState(StrEnum):
    """Visibility classification of a participant within one cycle."""

    LOCATED = "located"
    SAFE_ZONE = "safe_zone"
    STEALTHED = "stealthed"
    IMMUNE = "immune"
    NOT_LOCATED = "not_located"


class DisplayRole(StrEnum):
    """Relationship of a participant to the viewing account."""

    TEAMMATE = "teammate"
    TARGET = "target"
    NEUTRAL = "neutral"
