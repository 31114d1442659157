from __future__ import annotations

"""Colon-separated option strings.

Booking and cross-validation options are written the way the analysis macros
write them::

    "!V:!Silent:ModelPersistence:AnalysisType=Classification:NumFolds=2"

``Flag`` sets ``True``, ``!Flag`` sets ``False``, ``Key=Value`` sets a string
value. Keys are matched case-insensitively against a config model's field
aliases; a few short aliases (``V`` for ``Verbose``) are declared per model.
"""

from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from crosseval.core.errors import ConfigError

M = TypeVar("M", bound=BaseModel)

# A value of None in an alias table means "accepted and ignored".
AliasTable = Mapping[str, Optional[str]]


def parse_option_string(options: str) -> Dict[str, Any]:
    """Split an option string into an ordered ``{key: value}`` dict."""
    out: Dict[str, Any] = {}
    for raw in (options or "").split(":"):
        token = raw.strip()
        if not token:
            continue
        if "=" in token:
            key, value = token.split("=", 1)
            key = key.strip()
            if not key or key.startswith("!"):
                raise ConfigError(f"Malformed option {token!r}.")
            out[key] = value.strip()
        elif token.startswith("!"):
            key = token[1:].strip()
            if not key:
                raise ConfigError(f"Malformed option {token!r}.")
            out[key] = False
        else:
            out[token] = True
    return out


def _alias_index(model_cls: Type[BaseModel], extra: Optional[AliasTable]) -> Dict[str, Optional[str]]:
    index: Dict[str, Optional[str]] = {}
    for name, info in model_cls.model_fields.items():
        canonical = info.alias or name
        index[name.lower()] = canonical
        index[canonical.lower()] = canonical
    for short, target in (extra or {}).items():
        index[short.lower()] = target
    return index


def options_to_model(
    model_cls: Type[M],
    options: Mapping[str, Any],
    *,
    aliases: Optional[AliasTable] = None,
    what: str = "options",
) -> M:
    """Validate a parsed option mapping into ``model_cls``; errors become :class:`ConfigError`."""
    index = _alias_index(model_cls, aliases)
    payload: Dict[str, Any] = {}
    for key, value in options.items():
        k = str(key).lower()
        if k not in index:
            known = sorted({v for v in index.values() if v is not None})
            raise ConfigError(f"Unknown {what} key {key!r}. Known: {known}")
        target = index[k]
        if target is None:
            continue
        payload[target] = value
    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        raise ConfigError(f"Invalid {what}: {e}") from e


def model_from_option_string(
    model_cls: Type[M],
    options: str,
    *,
    aliases: Optional[AliasTable] = None,
    what: str = "options",
) -> M:
    return options_to_model(model_cls, parse_option_string(options), aliases=aliases, what=what)


def to_option_string(model: BaseModel) -> str:
    """Render a config back to option-string form (aliases, ``!Flag`` for False)."""
    parts = []
    for key, value in model.model_dump(by_alias=True).items():
        if value is None:
            continue
        if isinstance(value, bool):
            parts.append(key if value else f"!{key}")
        else:
            parts.append(f"{key}={value}")
    return ":".join(parts)
