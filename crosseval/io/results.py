from __future__ import annotations

"""Cross-evaluation results as JSON (one object per method)."""

import json
from pathlib import Path
from typing import Dict, Iterable, Union

from crosseval.contracts.results.cross_validation import CrossValidationResult


def write_results(results: Iterable[CrossValidationResult], file_path: Union[str, Path]) -> Path:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {r.method_name: r.model_dump(mode="json") for r in results}
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return path


def read_results(file_path: Union[str, Path]) -> Dict[str, CrossValidationResult]:
    with Path(file_path).open("r", encoding="utf-8") as f:
        payload = json.load(f)
    return {name: CrossValidationResult.model_validate(r) for name, r in payload.items()}
