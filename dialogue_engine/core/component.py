"""
Base class for validated game-state records.

State records are pydantic models: counts declared with Field(ge=0) can
never be assigned a negative value, and a whole record can be dumped to
JSON and read back.

Usage:
    class Treasury(Component):
        gold: int = Field(default=0, ge=0)

        def spend(self, amount: int) -> None:
            self.gold = max(self.gold - amount, 0)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """State record; every assignment is validated."""

    model_config = ConfigDict(
        # Enum fields and enum-keyed dicts
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    def clone(self) -> Component:
        """Independent deep copy, e.g. to preview an outcome."""
        return self.model_copy(deep=True)
