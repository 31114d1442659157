from __future__ import annotations

"""Booking options for the supported classifier methods.

Each config accepts its option string through :meth:`from_options`; keys are the
aliases below (``NTrees``, ``MinNodeSize``, ...) and are case-insensitive.
"""

from typing import ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .choices import BoostType, canonical_choice
from .options import model_from_option_string, to_option_string


class _MethodOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # option keys that are accepted and ignored (help / per-method verbosity)
    ignored_options: ClassVar[dict[str, Optional[str]]] = {"H": None, "Help": None}

    verbose: bool = Field(default=False, alias="V")

    @classmethod
    def from_options(cls, options: str):
        return model_from_option_string(
            cls,
            options,
            aliases={"Verbose": "V", **cls.ignored_options},
            what=f"{cls.__name__} option",
        )

    def to_option_string(self) -> str:
        return to_option_string(self)


class BDTConfig(_MethodOptions):
    """Boosted decision trees.

    ``BoostType=Grad`` builds a histogram gradient-boosting model where
    ``nCuts`` is the number of histogram bins per feature; ``BoostType=AdaBoost``
    boosts exact-split decision trees with learning rate ``AdaBoostBeta``.
    ``MinNodeSize`` is given in percent of the training sample, with or without
    the ``%`` sign (``2.5%`` and ``2.5`` alike), and stored as a fraction.
    Numbers passed directly to the model are taken as fractions.
    """

    kind: ClassVar[str] = "BDT"

    n_trees: int = Field(default=800, gt=0, alias="NTrees")
    min_node_size: float = Field(default=0.05, gt=0.0, le=0.5, alias="MinNodeSize")
    boost_type: BoostType = Field(default="AdaBoost", alias="BoostType")
    shrinkage: float = Field(default=1.0, gt=0.0, alias="Shrinkage")
    ada_boost_beta: float = Field(default=0.5, gt=0.0, alias="AdaBoostBeta")
    n_cuts: int = Field(default=20, ge=2, alias="nCuts")
    max_depth: int = Field(default=3, ge=1, alias="MaxDepth")

    @field_validator("min_node_size", mode="before")
    @classmethod
    def _percent_to_fraction(cls, v):
        if isinstance(v, str):
            return float(v.strip().rstrip("%")) / 100.0
        return v

    @field_serializer("min_node_size")
    def _fraction_to_percent(self, v: float) -> str:
        return f"{v * 100:g}%"

    @field_validator("boost_type", mode="before")
    @classmethod
    def _boost_type_any_case(cls, v):
        return canonical_choice(v, ("Grad", "AdaBoost"))


class FisherConfig(_MethodOptions):
    """Fisher linear discriminant (classification only)."""

    kind: ClassVar[str] = "Fisher"

    shrinkage: Optional[float] = Field(default=None, ge=0.0, le=1.0, alias="Shrinkage")

    @field_validator("shrinkage", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v is None or v == "" or v is False:
            return None
        return float(v)


MethodOptions = Union[BDTConfig, FisherConfig]


class MethodSpec(BaseModel):
    """One booked method: its kind, a unique title, and its parsed options."""

    kind: Literal["BDT", "Fisher"]
    name: str = Field(min_length=1)
    options: MethodOptions

    @field_validator("kind", mode="before")
    @classmethod
    def _kind_any_case(cls, v):
        return canonical_choice(v, ("BDT", "Fisher"))

    @model_validator(mode="before")
    @classmethod
    def _options_from_kind(cls, data):
        """Build ``options`` from a string or mapping using the class for ``kind``."""
        if not isinstance(data, dict):
            return data
        kind = canonical_choice(data.get("kind"), ("BDT", "Fisher"))
        options_cls = {"BDT": BDTConfig, "Fisher": FisherConfig}.get(kind)
        raw = data.get("options", "")
        if options_cls is None or isinstance(raw, BaseModel):
            return data
        if isinstance(raw, str):
            parsed = options_cls.from_options(raw)
        else:
            parsed = options_cls.model_validate(raw)
        return {**data, "kind": kind, "options": parsed}

    @model_validator(mode="after")
    def _options_match_kind(self) -> "MethodSpec":
        if type(self.options).kind != self.kind:
            raise ValueError(
                f"Options of type {type(self.options).__name__} do not belong to method kind {self.kind!r}."
            )
        return self


__all__ = ["BDTConfig", "FisherConfig", "MethodOptions", "MethodSpec"]
