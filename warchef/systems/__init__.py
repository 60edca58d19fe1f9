"""
War Chef systems - per-tick logic.
"""

from warchef.systems.dialogue import DialogueSystem

__all__ = ["DialogueSystem"]
