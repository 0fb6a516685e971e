"""Tests for the command-line interface."""

import json
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from thriftx.error_handling import GenerationError
from thriftx.main import create_argument_parser, format_listing, main, time_ago
from thriftx.models import Listing


NOW = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([
        {"id": "1", "title": "Vintage Denim Jacket", "points": 45, "createdAt": "2024-01-15T10:30:00Z",
         "category": "Outerwear", "tags": ["denim"]},
        {"id": "2", "title": "Elegant Black Dress", "points": 60, "createdAt": "2024-01-14T14:20:00Z",
         "category": "Dresses"},
        {"id": "3", "title": "Cozy Winter Sweater", "points": 35, "createdAt": "2024-01-13T09:15:00Z",
         "category": "Knitwear"},
        {"id": "4", "title": "Casual Summer Top", "points": 25, "createdAt": "2024-01-11T08:30:00Z",
         "isSwapAvailable": False},
    ]))
    return str(path)


@pytest.mark.parametrize("delta,expected", [
    (timedelta(minutes=20), "Just now"),
    (timedelta(hours=5), "5h ago"),
    (timedelta(hours=23, minutes=59), "23h ago"),
    (timedelta(days=3, hours=2), "3d ago"),
])
def test_time_ago(delta, expected):
    assert time_ago(NOW - delta, NOW) == expected


def test_format_listing_flags_unavailable():
    listing = Listing(id="4", title="Casual Summer Top", is_available=False, created_at=NOW)

    text = format_listing(listing, NOW)

    assert "Casual Summer Top [unavailable]" in text
    assert "Just now" in text


def test_parser_defaults():
    args = create_argument_parser().parse_args(["browse"])

    assert args.search == ""
    assert args.category == "All"
    assert args.min_points is None
    assert args.sort == "newest"
    assert args.include_unavailable is False


def test_parser_rejects_unknown_sort():
    with pytest.raises(SystemExit):
        create_argument_parser().parse_args(["browse", "--sort", "cheapest"])


def test_browse_prints_sorted_results(catalog, capsys):
    exit_code = main(["browse", "--file", catalog, "--sort", "points-low", "--max-points", "50"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "2 items found (1 filter active)" in out
    assert out.index("Cozy Winter Sweater") < out.index("Vintage Denim Jacket")
    assert "Elegant Black Dress" not in out
    assert "Casual Summer Top" not in out


def test_browse_include_unavailable(catalog, capsys):
    exit_code = main(["browse", "--file", catalog, "--include-unavailable", "--min-points", "abc"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "4 items found" in out
    assert "filter" not in out.splitlines()[2]
    assert "Casual Summer Top [unavailable]" in out


def test_browse_no_results(catalog, capsys):
    assert main(["browse", "--file", catalog, "--search", "tuxedo"]) == 0

    out = capsys.readouterr().out
    assert "0 items found (1 filter active)" in out
    assert "No items found" in out


def test_browse_bad_file_exits_with_error(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    assert main(["browse", "--file", str(path)]) == 1
    assert "Error" in capsys.readouterr().err


def test_generate_prints_text(capsys):
    with patch("thriftx.main.TextGenerationService.generate", new=AsyncMock(return_value="A cozy sweater.")):
        exit_code = main(["generate", "Warm wool sweater", "--mode", "recommend"])

    assert exit_code == 0
    assert "A cozy sweater." in capsys.readouterr().out


def test_generate_failure_exits_with_error(capsys):
    with patch("thriftx.main.TextGenerationService.generate",
               new=AsyncMock(side_effect=GenerationError("AI API key not configured"))):
        exit_code = main(["generate", "Warm wool sweater"])

    assert exit_code == 1
    assert "AI API key not configured" in capsys.readouterr().err


def test_keyboard_interrupt_exits_130(catalog):
    with patch("thriftx.main.run_browse", side_effect=KeyboardInterrupt):
        assert main(["browse", "--file", catalog]) == 130


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as run:
        assert main(["serve", "--port", "9000"]) == 0

    run.assert_called_once_with("thriftx.api.main:app", host="0.0.0.0", port=9000, reload=False)
