from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from crosseval.core.errors import ConfigError

from .choices import AnalysisType, OutputEnsembling, SplitType, canonical_choice
from .options import model_from_option_string, to_option_string

DEFAULT_SPLIT_EXPR = "int(fabs([eventID]))%int([NumFolds])"


class CrossValidationConfig(BaseModel):
    """Cross-validation options.

    Field aliases are the option-string keys, so both spellings work::

        CrossValidationConfig(NumFolds=2, SplitExpr="int([eventID])%int([NumFolds])")
        CrossValidationConfig(num_folds=2, split_expr="...")
        CrossValidationConfig.from_option_string("!V:NumFolds=2:SplitExpr=...")

    ``split_type`` defaults to ``Deterministic`` when a split expression is given
    and to ``Random`` otherwise.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    verbose: bool = Field(default=False, alias="Verbose")
    silent: bool = Field(default=False, alias="Silent")
    model_persistence: bool = Field(default=True, alias="ModelPersistence")
    analysis_type: AnalysisType = Field(default="Classification", alias="AnalysisType")
    num_folds: int = Field(default=2, gt=0, alias="NumFolds")
    split_expr: str = Field(default="", alias="SplitExpr")

    split_type: Optional[SplitType] = Field(default=None, alias="SplitType")
    split_seed: int = Field(default=100, alias="SplitSeed")
    num_workers: int = Field(default=1, ge=1, alias="NumWorkers")
    output_ensembling: OutputEnsembling = Field(default="None", alias="OutputEnsembling")

    @field_validator("analysis_type", mode="before")
    @classmethod
    def _analysis_type_any_case(cls, v):
        return canonical_choice(v, ("Classification", "Regression"))

    @field_validator("split_type", mode="before")
    @classmethod
    def _split_type_any_case(cls, v):
        if v is None or v == "":
            return None
        return canonical_choice(v, ("Deterministic", "Random"))

    @field_validator("output_ensembling", mode="before")
    @classmethod
    def _ensembling_any_case(cls, v):
        return canonical_choice(v, ("None", "Avg"))

    @field_validator("split_expr", mode="before")
    @classmethod
    def _strip_expr(cls, v):
        return "" if v is None else str(v).strip()

    @model_validator(mode="after")
    def _resolve_split_type(self) -> "CrossValidationConfig":
        if self.split_type is None:
            self.split_type = "Deterministic" if self.split_expr else "Random"
        if self.split_type == "Deterministic" and not self.split_expr:
            raise ValueError("SplitType=Deterministic requires a non-empty SplitExpr.")
        return self

    @property
    def is_deterministic(self) -> bool:
        return self.split_type == "Deterministic"

    def split_signature(self) -> dict[str, Any]:
        """Options that must be identical between training and application."""
        return {
            "split_type": self.split_type,
            "split_expr": self.split_expr if self.is_deterministic else "",
            "num_folds": int(self.num_folds),
            "split_seed": None if self.is_deterministic else int(self.split_seed),
        }

    @classmethod
    def from_option_string(cls, options: str) -> "CrossValidationConfig":
        return model_from_option_string(
            cls,
            options,
            aliases={"V": "Verbose"},
            what="cross-validation option",
        )

    def to_option_string(self) -> str:
        return to_option_string(self)

    @classmethod
    def coerce(cls, value: Union[str, dict, "CrossValidationConfig"]) -> "CrossValidationConfig":
        """Accept an option string, a mapping or an instance; raise :class:`ConfigError` on failure."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_option_string(value)
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            raise ConfigError(f"Invalid cross-validation options: {e}") from e
