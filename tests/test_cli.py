import json

import pytest

import datenight.cli as cli
from datenight.domain.models import ScoredVenue, SearchResponse


def _response(*names, **meta):
    items = [
        ScoredVenue(id=f"v{i}", name=name, rating=4.5, review_count=100, lat=33.68, lng=-117.82, source="stub")
        for i, name in enumerate(names)
    ]
    return SearchResponse(items=items, provider_stats={"stub": len(items)}, meta=dict(meta))


def test_parser_requires_a_subcommand():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_parser_collects_repeated_excludes():
    args = cli.build_parser().parse_args(
        ["restaurants", "--lat", "33.6", "--lng", "-117.8", "--radius", "5", "--cuisine", "thai", "--exclude", "a", "--exclude", "b"]
    )
    assert args.exclude == ["a", "b"]
    assert args.func is cli._cmd_restaurants


def test_providers_json(monkeypatch, capsys, settings_with_keys):
    monkeypatch.setattr(cli, "get_settings", lambda: settings_with_keys)

    assert cli.main(["providers", "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["restaurants"]["google"]["status"] == "active"
    assert data["restaurants"]["mock"]["status"] == "disabled"


def test_restaurants_prints_ranked_lines(monkeypatch, capsys):
    seen = {}

    async def fake_search(request, providers=None, settings=None):
        seen["request"] = request
        return _response("Harbor Bistro", "Sakura Sushi", providerErrors={"foursquare": "timeout"})

    monkeypatch.setattr(cli, "search_restaurants", fake_search)

    code = cli.main(
        ["restaurants", "--lat", "33.6", "--lng", "-117.8", "--radius", "5", "--cuisine", "thai", "--seed", "7"]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert seen["request"].cuisine == "thai"
    assert seen["request"].seed == 7
    assert "Restaurants: 2 results" in out
    assert " 1. Harbor Bistro" in out
    assert "! foursquare: timeout" in out


def test_activities_json_output(monkeypatch, capsys):
    async def fake_search(request, providers=None, settings=None):
        return _response("Rooftop Jazz Lounge", fallbackKeywords=["cocktail lounge"])

    monkeypatch.setattr(cli, "search_activities", fake_search)

    code = cli.main(["activities", "--lat", "33.6", "--lng", "-117.8", "--radius", "5", "--keyword", "speakeasy", "--json"])

    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["items"][0]["name"] == "Rooftop Jazz Lounge"
    assert data["meta"]["fallbackKeywords"] == ["cocktail lounge"]


def test_plan_prints_narrative(monkeypatch, capsys):
    async def fake_restaurants(request, providers=None, settings=None):
        return _response("Harbor Bistro")

    async def fake_activities(request, providers=None, settings=None):
        return _response("Laguna Playhouse")

    monkeypatch.setattr(cli, "search_restaurants", fake_restaurants)
    monkeypatch.setattr(cli, "search_activities", fake_activities)

    code = cli.main(
        [
            "plan", "--lat", "33.6", "--lng", "-117.8", "--radius", "5",
            "--cuisine", "thai", "--keyword", "theater", "--show-time", "19:30",
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "Dinner:   Harbor Bistro" in out
    assert "Activity: Laguna Playhouse" in out
    assert "show starts at 7:30 PM" in out


def test_invalid_request_exits_with_code_2(capsys):
    code = cli.main(["restaurants", "--lat", "33.6", "--lng", "-117.8", "--radius", "0", "--cuisine", "thai"])

    assert code == 2
    assert capsys.readouterr().err.startswith("error: ")
