from __future__ import annotations

import csv
import json
from pathlib import Path

from .errors import ConfigurationError, ValidationError
from .registry import ProcessRegistry


def load_workload(path: str | Path) -> ProcessRegistry:
    """
    Load a workload from a JSON or CSV file into a process registry.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ConfigurationError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> ProcessRegistry:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError(f"Invalid JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise ValidationError("JSON workload must be a list of process objects")

    registry = ProcessRegistry()
    for entry in raw:
        _add_from_mapping(registry, entry)

    return registry


def _load_csv(path: Path) -> ProcessRegistry:
    registry = ProcessRegistry()
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            rows = list(csv.DictReader(f))
        except (csv.Error, UnicodeDecodeError) as exc:
            raise ValidationError(f"Invalid CSV workload {path}: {exc}") from exc

    for row in rows:
        _add_from_mapping(registry, row)
    return registry


def _number(value):
    # CSV cells arrive as text; JSON numbers are left for the registry to validate.
    if isinstance(value, str):
        return int(value.strip())
    return value


def _add_from_mapping(registry: ProcessRegistry, mapping) -> None:
    try:
        arrival_time = _number(mapping["arrival_time"])
        burst_time = _number(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _number(priority_val) if priority_val not in (None, "") else 1
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid process entry: {mapping!r}") from exc

    pid = mapping.get("pid")
    registry.add(
        pid=None if pid is None else str(pid),
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
