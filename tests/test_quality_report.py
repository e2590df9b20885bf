import json

from tripselect.config.settings import get_settings
from tripselect.quality.report import build_quality_report, catalog_issues, transfer_issues
from tripselect.domain.models import TransferInfo
from tripselect.features.vibe_match import score_vibe_match


def _codes(issues):
    return {i.code for i in issues}


def test_packaged_data_is_clean():
    report = build_quality_report(get_settings())

    assert report["overall"] == {"severity": "info", "issue_count": 0}
    assert report["catalog"]["destination_count"] > 0
    assert report["catalog"]["transfer_count"] > 0


def test_catalog_issues_flag_duplicates_and_missing_fields(make_destination):
    destinations = [
        make_destination("a"),
        make_destination("a"),
        make_destination("b", best_months=()),
        make_destination("c", vibes=()),
        make_destination("d", airport_code="QQQ"),
    ]

    issues = catalog_issues(destinations)

    assert _codes(issues) >= {
        "CATALOG_DUPLICATE_ID",
        "CATALOG_NO_BEST_MONTHS",
        "CATALOG_NO_VIBES",
        "CATALOG_AIRPORT_UNMAPPED",
    }
    dup = next(i for i in issues if i.code == "CATALOG_DUPLICATE_ID")
    assert dup.as_dict()["sample"] == ["a"]


def test_no_vibes_message_matches_vibe_scoring(make_destination):
    bare = make_destination("bare", vibes=())

    issue = next(i for i in catalog_issues([bare]) if i.code == "CATALOG_NO_VIBES")

    assert score_vibe_match(bare, ["beach"]) == 0.0
    assert "0.0" in issue.message
    assert "neutral" not in issue.message


def test_transfer_issues_flag_unknown_destinations(make_destination):
    transfers = {
        "ghost": TransferInfo(hub_airport_code="ATH", hub_city="Athens", ground_transfer_minutes=30, transfer_type="ferry"),
        "a": TransferInfo(hub_airport_code="QQQ", hub_city="Nowhere", ground_transfer_minutes=30, transfer_type="drive"),
    }

    issues = transfer_issues(transfers, [make_destination("a")])

    assert _codes(issues) == {"TRANSFER_UNKNOWN_DESTINATION", "TRANSFER_HUB_UNMAPPED"}


def test_unreadable_catalog_is_reported_not_raised(tmp_path):
    broken = tmp_path / "destinations.json"
    broken.write_text(json.dumps([{"id": "x"}]), encoding="utf-8")
    catalog = get_settings().catalog.model_copy(update={"path": str(broken)})
    settings = get_settings().model_copy(update={"catalog": catalog})

    report = build_quality_report(settings)

    assert report["overall"]["severity"] == "error"
    assert report["issues"][0]["code"] == "CATALOG_LOAD_FAILED"
