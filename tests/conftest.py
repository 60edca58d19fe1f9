import os
import sys
import pytest
from unittest.mock import patch

# Ensure the packages can be imported without installing
sys.path.append(os.getcwd())

NOBODY = "0x0000000000000000"


@pytest.fixture(autouse=True)
def headless_pygame():
    """
    Keep tests from opening a window or an audio device.
    Key constants and pygame.event.Event still work.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.mixer'):
        yield


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from dialogue_engine.core.events import EventBus
    return EventBus()


def _pin(targets):
    return {"Connections": [{"Target": target} for target in targets]}


class ExportBuilder:
    """Builds articy export documents for tests, one model at a time."""

    def __init__(self):
        self.models = []
        self.packages = []
        self.variable_groups = {}

    def model(self, type_, id_, **properties):
        properties["Id"] = id_
        self.models.append({"Type": type_, "Properties": properties})
        return self

    def character(self, id_, display_name):
        return self.model("Entity", id_, DisplayName=display_name)

    def dialogue(self, name, entries, id_=None):
        return self.model(
            "Dialogue", id_ or f"dlg_{name}",
            TechnicalName=name, InputPins=[_pin(entries)], OutputPins=[],
        )

    def fragment(self, id_, text, children=(), speaker=NOBODY):
        return self.model(
            "DialogueFragment", id_,
            Speaker=speaker, Text=text, OutputPins=[_pin(children)],
        )

    def instruction(self, id_, expression, children=()):
        return self.model("Instruction", id_, Expression=expression, OutputPins=[_pin(children)])

    def condition(self, id_, expression, when_true=(), when_false=()):
        return self.model(
            "Condition", id_,
            Expression=expression, OutputPins=[_pin(when_true), _pin(when_false)],
        )

    def hub(self, id_, children=()):
        return self.model("Hub", id_, OutputPins=[_pin(children)])

    def jump(self, id_, target):
        return self.model("Jump", id_, Target=target, OutputPins=[])

    def variable(self, name, value="False", type_="Boolean", namespace="Game"):
        group = self.variable_groups.setdefault(namespace, [])
        group.append({"Variable": name, "Type": type_, "Value": value})
        return self

    def extra_package(self, models, is_default=False):
        self.packages.append({"IsDefaultPackage": is_default, "Models": models})
        return self

    def build(self):
        return {
            "Packages": [{"IsDefaultPackage": True, "Models": self.models}] + self.packages,
            "GlobalVariables": [
                {"Namespace": namespace, "Variables": variables}
                for namespace, variables in self.variable_groups.items()
            ],
        }


@pytest.fixture
def export():
    """Empty export document builder."""
    return ExportBuilder()


@pytest.fixture
def load(export):
    """Load the export built so far into an Articy bundle."""
    from warchef.dialogue.loader import ArticyLoader

    def _load():
        return ArticyLoader().load_document(export.build())
    return _load


@pytest.fixture
def game_state():
    from warchef.state.game_state import GameState
    return GameState()


@pytest.fixture
def dialogue(event_bus):
    from warchef.dialogue.runtime import Dialogue
    return Dialogue(event_bus)


@pytest.fixture
def fired(event_bus):
    """Dialogue events published on the bus, in order."""
    from warchef.dialogue.events import DialogueSignal

    received = []
    event_bus.subscribe(DialogueSignal.EVENT, lambda e: received.append(e["event"]))
    return received
