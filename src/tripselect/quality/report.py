"""
Offline data quality report utilities.

Goal: provide a deterministic, network-free view of "is our static data complete and sane?"
Used by:
- CLI debugging (`tripselect quality-report`)
- API status endpoint (`GET /api/quality`)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any

from tripselect.catalog.loader import load_destinations, load_transfers
from tripselect.config.settings import Settings
from tripselect.domain.models import Destination, TransferInfo
from tripselect.travel.regions import flight_region_for


@dataclass(frozen=True)
class Issue:
    severity: str  # "info" | "warning" | "error"
    code: str
    message: str
    count: int = 1
    sample: list[str] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "count": int(self.count),
            "sample": list(self.sample or []),
        }


def _issue_if(ids: list[str], *, severity: str, code: str, message: str) -> list[Issue]:
    if not ids:
        return []
    return [Issue(severity=severity, code=code, message=message, count=len(ids), sample=ids[:8])]


def catalog_issues(destinations: list[Destination]) -> list[Issue]:
    issues: list[Issue] = []

    counts = Counter(d.id for d in destinations)
    dup = sorted(i for i, n in counts.items() if n > 1)
    issues += _issue_if(dup, severity="error", code="CATALOG_DUPLICATE_ID", message="Duplicate destination ids in catalog.")

    issues += _issue_if(
        [d.id for d in destinations if not d.best_months],
        severity="warning",
        code="CATALOG_NO_BEST_MONTHS",
        message="Some destinations have no `best_months` (seasonal fit will never exceed 0.3).",
    )
    issues += _issue_if(
        [d.id for d in destinations if not d.vibes],
        severity="warning",
        code="CATALOG_NO_VIBES",
        message="Some destinations have no `vibes` (vibe match scores 0.0 whenever vibes are requested).",
    )
    issues += _issue_if(
        [f"{d.id}:{d.airport_code}" for d in destinations if flight_region_for(d.airport_code) is None],
        severity="info",
        code="CATALOG_AIRPORT_UNMAPPED",
        message="Some destination airports have no flight region; the catalog region is used instead.",
    )
    return issues


def transfer_issues(transfers: dict[str, TransferInfo], destinations: list[Destination]) -> list[Issue]:
    known = {d.id for d in destinations}
    issues = _issue_if(
        sorted(k for k in transfers if k not in known),
        severity="warning",
        code="TRANSFER_UNKNOWN_DESTINATION",
        message="Some transfer entries reference destination ids missing from the catalog.",
    )
    issues += _issue_if(
        sorted(f"{k}:{t.hub_airport_code}" for k, t in transfers.items() if flight_region_for(t.hub_airport_code) is None),
        severity="warning",
        code="TRANSFER_HUB_UNMAPPED",
        message="Some transfer hub airports have no flight region.",
    )
    return issues


def build_quality_report(settings: Settings) -> dict[str, Any]:
    try:
        destinations = load_destinations(settings.catalog.path)
    except Exception as e:
        destinations = []
        issues = [Issue(severity="error", code="CATALOG_LOAD_FAILED", message=str(e))]
    else:
        issues = catalog_issues(destinations)

    try:
        transfers = load_transfers(settings.catalog.transfers_path)
    except Exception as e:
        transfers = {}
        issues.append(Issue(severity="error", code="TRANSFERS_LOAD_FAILED", message=str(e)))
    else:
        issues += transfer_issues(transfers, destinations)

    severity_rank = {"error": 3, "warning": 2, "info": 1}
    worst = "info"
    for i in issues:
        if severity_rank.get(i.severity, 0) > severity_rank.get(worst, 0):
            worst = i.severity

    return {
        "overall": {"severity": worst, "issue_count": len(issues)},
        "paths": {
            "catalog_path": settings.catalog.path,
            "transfers_path": settings.catalog.transfers_path,
        },
        "catalog": {
            "destination_count": len(destinations),
            "transfer_count": len(transfers),
            "region_counts": dict(sorted(Counter(d.region for d in destinations).items())),
        },
        "issues": [i.as_dict() for i in issues],
    }
