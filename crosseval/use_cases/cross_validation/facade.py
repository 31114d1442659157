from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from crosseval.components.data.loader import EventDataLoader
from crosseval.contracts.cv_configs import CrossValidationConfig
from crosseval.contracts.method_configs import MethodSpec
from crosseval.contracts.results.cross_validation import CrossValidationResult
from crosseval.core.errors import ConfigError, CrossEvalError
from crosseval.core.progress import ProgressCallback
from crosseval.io.artifacts.store import ArtifactStore

from .run import cross_evaluate

logger = logging.getLogger(__name__)


class CrossValidation:
    """Book methods on a data loader and cross-evaluate them.

        cv = CrossValidation("TMVACrossValidation", loader, "!V:NumFolds=2:SplitExpr=...")
        cv.book_method("BDT", "BDTG", "NTrees=100:BoostType=Grad:Shrinkage=0.10")
        cv.evaluate()
        for result in cv.get_results():
            print(result.get_roc_average(), result.get_roc_standard_deviation())
    """

    def __init__(
        self,
        job_name: str,
        data_loader: EventDataLoader,
        options: Union[str, dict, CrossValidationConfig] = "",
        *,
        store: Optional[ArtifactStore] = None,
        rng: Optional[int] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        self.job_name = job_name
        self.data_loader = data_loader
        self.config = CrossValidationConfig.coerce(options)
        self.store = store
        self.rng = rng
        self.progress = progress
        self._methods: List[MethodSpec] = []
        self._results: Optional[Dict[str, CrossValidationResult]] = None

    @property
    def methods(self) -> List[MethodSpec]:
        return list(self._methods)

    def book_method(self, kind: str, name: str, options: str = "") -> MethodSpec:
        if any(m.name == name for m in self._methods):
            raise ConfigError(f"Method {name!r} is already booked.")
        try:
            spec = MethodSpec(kind=kind, name=name, options=options)
        except ValidationError as e:
            raise ConfigError(f"Cannot book {kind} method {name!r}: {e}") from e
        self._methods.append(spec)
        logger.debug("booked %s method %r: %s", spec.kind, spec.name, spec.options.to_option_string())
        return spec

    def evaluate(self) -> Dict[str, CrossValidationResult]:
        events = self.data_loader.load()
        self._results = cross_evaluate(
            events,
            self.config,
            self._methods,
            job_name=self.job_name,
            store=self.store,
            rng=self.rng,
            progress=self.progress,
        )
        return self._results

    def get_results(self) -> List[CrossValidationResult]:
        if self._results is None:
            raise CrossEvalError("No results yet; call evaluate() first.")
        return list(self._results.values())

    def get_result(self, method_name: str) -> CrossValidationResult:
        if self._results is None:
            raise CrossEvalError("No results yet; call evaluate() first.")
        try:
            return self._results[method_name]
        except KeyError:
            raise KeyError(f"No result for method {method_name!r}. Booked: {list(self._results)}") from None
