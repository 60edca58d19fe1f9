"""
Dialogue module - articy dialogue loading and playback.

Provides:
- Export loading into typed dialogue graphs
- Instruction and Condition expression parsing
- Lowering of graphs into scripts of lines and choices
- The runtime that plays queued scripts
"""

from warchef.dialogue.graph import Articy, DialogueGraph, DialogueNode
from warchef.dialogue.expressions import ExpressionError, parse_condition, parse_instructions
from warchef.dialogue.loader import ArticyLoader, load_articy
from warchef.dialogue.events import DialogueSignal, NO_EVENT
from warchef.dialogue.script import Choice, Line, Script
from warchef.dialogue.walker import GraphWalker, VariableSource
from warchef.dialogue.runtime import Dialogue, DialogueState

__all__ = [
    "Articy",
    "DialogueGraph",
    "DialogueNode",
    "ExpressionError",
    "parse_condition",
    "parse_instructions",
    "ArticyLoader",
    "load_articy",
    "DialogueSignal",
    "NO_EVENT",
    "Choice",
    "Line",
    "Script",
    "GraphWalker",
    "VariableSource",
    "Dialogue",
    "DialogueState",
]
