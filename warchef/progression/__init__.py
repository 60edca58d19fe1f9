"""Campaign progression."""

from warchef.progression.quests import Quest, queue_intermission

__all__ = ["Quest", "queue_intermission"]
