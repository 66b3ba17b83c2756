from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# Named counters (in-process snapshot)
_NAMED = Counter()

_PROM_DOCUMENTS = PromCounter(
    "docmapper_documents_mapped_total",
    "Documents processed by the mapper",
    ["mode", "outcome"],
)

_PROM_SKIPPED = PromCounter(
    "docmapper_fragments_skipped_total",
    "Resource fragments dropped while building the graph",
    ["reason"],
)

_PROM_VALIDATION = PromCounter(
    "docmapper_validation_failures_total",
    "Field validation failures reported for mapped entities",
    ["type"],
)


def reset_metrics() -> None:
    """
    Test helper: clears in-process counters to avoid cross-test leakage.
    Prometheus counters are cumulative and are not reset.
    """
    _NAMED.clear()


def inc_document(mode: str, outcome: str, *, enabled: bool = True) -> None:
    if not enabled:
        return
    _NAMED[f"documents_{mode}_{outcome}"] += 1
    _PROM_DOCUMENTS.labels(mode=mode, outcome=outcome).inc()


def inc_skipped(reason: str, *, enabled: bool = True) -> None:
    if not enabled:
        return
    _NAMED[f"skipped_{reason}"] += 1
    _PROM_SKIPPED.labels(reason=reason).inc()


def inc_validation_failures(type_name: str, value: int = 1, *, enabled: bool = True) -> None:
    if not enabled or value <= 0:
        return
    _NAMED[f"validation_failures_{type_name}"] += int(value)
    _PROM_VALIDATION.labels(type=type_name).inc(value)


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
