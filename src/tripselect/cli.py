"""
TripSelect CLI entrypoint.

This CLI is intended for quick local demos and debugging without the HTTP API.
It delegates all selection logic to `tripselect.recommender.engine.build_selection`.
"""

from __future__ import annotations

import argparse
import json
import random
from pathlib import Path
from typing import Any

from tripselect.catalog.loader import get_catalog, get_destination_by_id, search_destinations
from tripselect.config.settings import Settings, get_settings
from tripselect.core.logging import configure_logging
from tripselect.core.time import parse_travel_date
from tripselect.domain.models import (
    BudgetRange,
    HomeBase,
    SelectionRequest,
    TravelerProfile,
)
from tripselect.preferences.contract import (
    NullPreferenceModel,
    RevealedPreferenceModel,
    VibeAffinityModel,
    VibeAffinitySnapshot,
)
from tripselect.quality.report import build_quality_report
from tripselect.recommender.engine import build_selection
from tripselect.scoring.explain import one_line_summary
from tripselect.travel.estimator import estimate_travel_time, format_travel_time_short, travel_time_category


def _load_preferences(
    path: str | None, settings: Settings
) -> tuple[RevealedPreferenceModel, VibeAffinitySnapshot | None]:
    """Read a vibe-affinity snapshot JSON file (`{"vibe_scores": {...}, "total_swipes": N}`)."""
    if not path:
        return NullPreferenceModel(), None
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    snapshot = VibeAffinitySnapshot.model_validate(payload)
    return VibeAffinityModel(min_signals=settings.preferences.min_signals), snapshot


def _cmd_select(args: argparse.Namespace) -> int:
    """Handle the `select` subcommand."""
    settings = get_settings()
    model, snapshot = _load_preferences(args.preferences, settings)

    profile = TravelerProfile(
        home_base=HomeBase(airport_code=args.home_airport),
        budget=BudgetRange(min=args.budget_min, max=args.budget_max, flexibility=args.flexibility),
        surprise_tolerance=int(args.tolerance),
    )
    request = SelectionRequest(
        profile=profile,
        departure_date=parse_travel_date(args.departure),
        return_date=parse_travel_date(args.return_date) if args.return_date else None,
        vibes=args.vibe or [],
        region=args.region,
        count=args.count,
        exclude_destinations=args.exclude or [],
        origin_airport=args.origin,
        revealed_preferences=snapshot,
    )

    rng = random.Random(args.seed) if args.seed is not None else None
    result = build_selection(request, preference_model=model, rng=rng, settings=settings)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Generated at: {result.generated_at.isoformat()}")
    print(f"Weight profile: {result.meta.get('weight_profile')}  diversity={result.diversity_score:.3f}")
    if not result.items:
        print("No destinations matched.")
        return 0
    for i, item in enumerate(result.items, start=1):
        dest = item.destination
        print(f"{i:>2}. {dest.city}, {dest.country} [{dest.region}]  {one_line_summary(item)}")
        if dest.highlights:
            print(f"    - {'; '.join(dest.highlights[:2])}")
    return 0


def _cmd_travel_time(args: argparse.Namespace) -> int:
    settings = get_settings()
    dest = get_destination_by_id(args.destination, settings)
    if dest is None:
        print(f"Unknown destination id: {args.destination}")
        return 2

    estimate = estimate_travel_time(args.origin, dest, settings=settings)
    if args.json:
        payload = estimate.model_dump(mode="json") if estimate else None
        print(json.dumps({"origin": args.origin, "destination": dest.id, "estimate": payload}, indent=2))
        return 0
    if estimate is None:
        print(f"No estimate: unknown origin airport '{args.origin}'.")
        return 0

    print(f"{args.origin.upper()} -> {dest.city} ({dest.airport_code})")
    print(f"  {estimate.summary}  [{format_travel_time_short(estimate)}, {travel_time_category(estimate)}]")
    if estimate.note:
        print(f"  note: {estimate.note}")
    return 0


def _cmd_catalog(args: argparse.Namespace) -> int:
    settings = get_settings()
    destinations = search_destinations(args.query, settings) if args.query else get_catalog(settings)
    if args.region:
        destinations = [d for d in destinations if d.region == args.region]

    if args.json:
        print(json.dumps([d.model_dump(mode="json") for d in destinations], ensure_ascii=False, indent=2))
        return 0
    for d in destinations:
        print(f"{d.id:<20} {d.city}, {d.country} [{d.region}] {d.airport_code}  vibes={','.join(d.vibes)}")
    print(f"{len(destinations)} destination(s)")
    return 0


def _cmd_quality_report(_: argparse.Namespace) -> int:
    settings = get_settings()
    report = build_quality_report(settings)
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("tripselect.api.app:app", host=args.host, port=int(args.port), reload=bool(args.reload))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the TripSelect CLI."""
    parser = argparse.ArgumentParser(prog="tripselect")
    parser.add_argument("--log-level", type=str, default=None, help="Override the configured log level.")
    sub = parser.add_subparsers(dest="command", required=True)

    sel = sub.add_parser("select", help="Select a diverse set of destinations for a trip.")
    sel.add_argument("--departure", required=True, help="ISO date (e.g. 2026-05-10)")
    sel.add_argument("--return", dest="return_date", default=None, help="ISO date")
    sel.add_argument("--origin", type=str, default=None, help="Origin airport code (overrides --home-airport)")
    sel.add_argument("--home-airport", type=str, default=None)
    sel.add_argument("--vibe", action="append", default=[], help="Repeatable, e.g. --vibe beach --vibe food")
    sel.add_argument(
        "--region",
        type=str,
        default=None,
        choices=["europe", "asia", "americas", "africa", "oceania", "middle_east", "caribbean"],
    )
    sel.add_argument("--count", type=int, default=None)
    sel.add_argument("--budget-min", type=float, default=None)
    sel.add_argument("--budget-max", type=float, default=None)
    sel.add_argument("--flexibility", default="flexible", choices=["strict", "flexible", "splurge_ok"])
    sel.add_argument("--tolerance", type=int, default=3, choices=[1, 2, 3, 4, 5], help="Surprise tolerance")
    sel.add_argument("--exclude", action="append", default=[], help="City name to exclude (repeatable)")
    sel.add_argument("--preferences", type=str, default=None, help="Path to a vibe-affinity snapshot JSON")
    sel.add_argument("--seed", type=int, default=None, help="Seed for discovery shuffling")
    sel.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    sel.set_defaults(func=_cmd_select)

    tt = sub.add_parser("travel-time", help="Estimate travel time from an airport to a destination.")
    tt.add_argument("--origin", required=True, help="Origin airport code (e.g. JFK)")
    tt.add_argument("--destination", required=True, help="Destination id (e.g. santorini)")
    tt.add_argument("--json", action="store_true")
    tt.set_defaults(func=_cmd_travel_time)

    cat = sub.add_parser("catalog", help="List or search the destination catalog.")
    cat.add_argument("--query", type=str, default=None)
    cat.add_argument("--region", type=str, default=None)
    cat.add_argument("--json", action="store_true")
    cat.set_defaults(func=_cmd_catalog)

    q = sub.add_parser("quality-report", help="Offline data quality report (catalog + transfers).")
    q.set_defaults(func=_cmd_quality_report)

    srv = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--reload", action="store_true")
    srv.set_defaults(func=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m tripselect.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
