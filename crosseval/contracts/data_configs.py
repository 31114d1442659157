from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .choices import NormMode, canonical_choice


class DatasetConfig(BaseModel):
    """What the data loader reads from each event table.

    ``variables`` are the model inputs (in this order). ``spectators`` are carried
    along for control purposes, e.g. fold assignment, and never reach the model.
    ``targets`` are only used for regression. ``weight_field`` names an optional
    per-event weight column, multiplied with the per-table weight.
    """

    name: str = "dataset"
    variables: List[str] = Field(min_length=1)
    spectators: List[str] = Field(default_factory=list)
    targets: List[str] = Field(default_factory=list)
    weight_field: Optional[str] = None
    norm_mode: NormMode = "NumEvents"

    @field_validator("norm_mode", mode="before")
    @classmethod
    def _norm_mode_any_case(cls, v):
        return canonical_choice(v, ("None", "NumEvents", "EqualNumEvents"))

    @model_validator(mode="after")
    def _names_unique(self) -> "DatasetConfig":
        names = [*self.variables, *self.spectators, *self.targets]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"Field names declared more than once: {dupes}")
        return self

    @property
    def visible_fields(self) -> List[str]:
        """Fields a split expression may reference."""
        return [*self.variables, *self.spectators]
