"""JSON reporter for traced evaluations."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from rulebook.operators.aggregatable import rule_label
from rulebook.rules.engine import Engine
from rulebook.rules.models import Result

_JSON_NATIVE = (str, int, float, bool, type(None))


def _jsonable(value: Any) -> Any:
    """Render *value* as JSON-native data, falling back to repr."""
    if isinstance(value, _JSON_NATIVE):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict) and all(isinstance(k, str) for k in value):
        return {k: _jsonable(v) for k, v in value.items()}
    return repr(value)


def to_dict(
    result: Result,
    *,
    engine: Optional[Engine] = None,
    show_values: bool = True,
) -> Dict[str, Any]:
    """Convert a (traced) Result to a JSON-serialisable dict."""
    rule_type = engine.rule_type(result.rule) if engine is not None else None
    data: Dict[str, Any] = {
        "rule": rule_label(result.rule),
        "type": rule_type.name if rule_type is not None else None,
        "evaluation": _jsonable(result.evaluation),
        "passed": result.passed,
    }
    if show_values:
        data["value"] = _jsonable(result.value)
    if result.clauses:
        data["clauses"] = [
            to_dict(child, engine=engine, show_values=False) for child in result.clauses
        ]
    return data


def render(
    result: Result,
    *,
    engine: Optional[Engine] = None,
    show_values: bool = True,
) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, engine=engine, show_values=show_values), indent=2)
