import json

from tripselect.cli import main


def test_cli_select_json_output(capsys):
    code = main(["select", "--departure", "2026-05-10", "--origin", "JFK", "--vibe", "beach", "--count", "5", "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data["items"]) == 5
    assert data["meta"]["weight_profile"] == "fresh_with_origin"


def test_cli_select_with_preferences_snapshot_is_seeded(tmp_path, capsys):
    snapshot = tmp_path / "prefs.json"
    snapshot.write_text(json.dumps({"vibe_scores": {"food": 6, "city": 2}, "total_swipes": 30}), encoding="utf-8")
    argv = ["select", "--departure", "2026-10-01", "--preferences", str(snapshot), "--seed", "5", "--json"]

    assert main(argv) == 0
    first = json.loads(capsys.readouterr().out)
    assert main(argv) == 0
    second = json.loads(capsys.readouterr().out)

    assert first["meta"]["weight_profile"] == "learned_no_origin"
    assert first["meta"]["discovery_positions"] == [2, 5]
    assert [i["destination"]["id"] for i in first["items"]] == [i["destination"]["id"] for i in second["items"]]


def test_cli_select_text_output(capsys):
    assert main(["select", "--departure", "2026-05-10", "--count", "2", "--tolerance", "5"]) == 0
    out = capsys.readouterr().out
    assert "Weight profile: fresh_no_origin" in out
    assert " 1. " in out and " 2. " in out


def test_cli_travel_time(capsys):
    assert main(["travel-time", "--origin", "JFK", "--destination", "santorini"]) == 0
    out = capsys.readouterr().out
    assert "connecting flight" in out

    assert main(["travel-time", "--origin", "ZZZ", "--destination", "santorini", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["estimate"] is None

    assert main(["travel-time", "--origin", "JFK", "--destination", "atlantis"]) == 2


def test_cli_catalog_and_quality_report(capsys):
    assert main(["catalog", "--region", "caribbean", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows and all(r["region"] == "caribbean" for r in rows)

    assert main(["quality-report"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert "issues" in report
