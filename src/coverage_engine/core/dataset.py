"""Dataset loading utilities.

Two sources are accepted for each dataset: the raw CSV export, which is
cleaned on the fly, or the cleaned JSON snapshot written by the
``clean-accounts`` / ``clean-outbound`` commands.  Any failure to read or
parse a file is raised as a single :class:`DatasetError`; there is no partial
result.
"""
from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, TypeVar

from loguru import logger

from ..config import Settings, get_settings
from . import cleaning
from .models import Account, EngagementEvent

T = TypeVar("T")


class DatasetError(RuntimeError):
    """Raised when a dataset cannot be read or parsed."""


@dataclass(frozen=True)
class Datasets:
    accounts: tuple[Account, ...]
    events: tuple[EngagementEvent, ...]


def _read_csv_rows(path: Path) -> List[Dict[str, str]]:
    """Return CSV rows as stripped string dicts, skipping blank lines."""

    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            return []
        rows: List[Dict[str, str]] = []
        for raw in reader:
            if not any((v or "").strip() for v in raw.values() if isinstance(v, str)):
                continue
            rows.append(
                {
                    (k or "").strip(): (v or "").strip() if isinstance(v, str) else ""
                    for k, v in raw.items()
                    if k is not None
                }
            )
        return rows


def _read_json_rows(path: Path) -> List[Dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise DatasetError(f"{path}: expected a JSON array of records")
    for idx, row in enumerate(data):
        if not isinstance(row, dict):
            raise DatasetError(f"{path}: record {idx} is not an object")
    return data


def read_rows(path: str | Path) -> List[Dict[str, Any]]:
    """Read raw rows from a ``.csv`` or ``.json`` file."""

    p = Path(path)
    try:
        if p.suffix.lower() == ".csv":
            return _read_csv_rows(p)
        return _read_json_rows(p)
    except DatasetError:
        raise
    except (OSError, UnicodeDecodeError, ValueError, csv.Error) as exc:
        raise DatasetError(f"Failed to read dataset {p}: {exc}") from exc


def _convert(p: Path, rows: Sequence[Dict[str, Any]], convert: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Rebuild records from cleaned JSON rows; a bad field fails the whole load."""

    out: List[T] = []
    for idx, row in enumerate(rows):
        try:
            out.append(convert(row))
        except (AttributeError, TypeError, ValueError) as exc:
            raise DatasetError(f"{p}: record {idx}: {exc}") from exc
    return out


def load_accounts(path: str | Path) -> List[Account]:
    p = Path(path)
    rows = read_rows(p)
    if p.suffix.lower() == ".csv":
        accounts = cleaning.clean_accounts(rows)
    else:
        accounts = _convert(p, rows, cleaning.account_from_record)
    logger.info(f"Loaded {len(accounts)} accounts from {p}")
    return accounts


def load_engagements(path: str | Path, accounts: Sequence[Account]) -> List[EngagementEvent]:
    """Load the outbound log; raw CSV rows are enriched against ``accounts``."""

    p = Path(path)
    rows = read_rows(p)
    if p.suffix.lower() == ".csv":
        events = cleaning.clean_outbound(rows, accounts)
    else:
        events = _convert(p, rows, cleaning.event_from_record)
    logger.info(f"Loaded {len(events)} outbound events from {p}")
    return events


def load_datasets(
    accounts_path: str | Path | None = None,
    outbound_path: str | Path | None = None,
    settings: Settings | None = None,
) -> Datasets:
    """Load both datasets, defaulting to the configured locations."""

    settings = settings or get_settings()
    acc_path = Path(accounts_path) if accounts_path else settings.resolved_accounts_path()
    out_path = Path(outbound_path) if outbound_path else settings.resolved_outbound_path()
    accounts = load_accounts(acc_path)
    events = load_engagements(out_path, accounts)
    return Datasets(accounts=tuple(accounts), events=tuple(events))


def write_records(path: str | Path, records: Sequence[Dict[str, Any]]) -> None:
    """Write cleaned records as an indented JSON array."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(list(records), indent=2), encoding="utf-8")
