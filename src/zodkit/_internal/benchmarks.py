"""Performance sentinels: representative schemas and inputs with time budgets."""

from __future__ import annotations

import os
from time import perf_counter
from typing import Any, Callable, Dict, List, Tuple

from zodkit import api


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_WIDE_OBJECT_MS = _budget_from_env("ZODKIT_MAX_WIDE_OBJECT_MS", 250.0)
MAX_LONG_SLICE_MS = _budget_from_env("ZODKIT_MAX_LONG_SLICE_MS", 500.0)
MAX_DISCRIMINATED_UNION_MS = _budget_from_env("ZODKIT_MAX_DISCRIMINATED_UNION_MS", 500.0)
MAX_FAILING_RECORD_MS = _budget_from_env("ZODKIT_MAX_FAILING_RECORD_MS", 500.0)


def wide_object_case(width: int = 200) -> Tuple[Any, Dict[str, Any]]:
    """An object with ``width`` string fields and a matching input."""
    shape = {f"field_{i}": api.string().min(1) for i in range(width)}
    data = {f"field_{i}": f"value {i}" for i in range(width)}
    return api.object_(shape), data


def long_slice_case(length: int = 5000) -> Tuple[Any, List[Any]]:
    item = api.object_({"id": api.int_().non_negative(), "name": api.string(), "tags": api.slice_(api.string())})
    data = [{"id": i, "name": f"n{i}", "tags": ["a", "b"]} for i in range(length)]
    return api.slice_(item), data


def discriminated_union_case(options: int = 50, length: int = 1000) -> Tuple[Any, List[Any]]:
    schema = api.discriminated_union(
        "kind",
        [api.object_({"kind": api.literal(f"k{i}"), "value": api.float64()}) for i in range(options)],
    )
    data = [{"kind": f"k{i % options}", "value": float(i)} for i in range(length)]
    return api.slice_(schema), data


def failing_record_case(size: int = 2000) -> Tuple[Any, Dict[str, Any]]:
    """Every value fails, so the whole error path (collection and finalization) is timed."""
    schema = api.record(api.string(), api.int_().min(10))
    data = {f"k{i}": i % 10 for i in range(size)}
    return schema, data


def _time(case: Callable[[], Tuple[Any, Any]]) -> float:
    schema, data = case()
    start = perf_counter()
    schema.safe_parse(data)
    return (perf_counter() - start) * 1000.0


def benchmark_wide_object() -> float:
    return _time(wide_object_case)


def benchmark_long_slice() -> float:
    return _time(long_slice_case)


def benchmark_discriminated_union() -> float:
    return _time(discriminated_union_case)


def benchmark_failing_record() -> float:
    return _time(failing_record_case)
