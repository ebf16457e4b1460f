from __future__ import annotations

import json

import pytest
from PIL import Image

from quotewall_app import cli
from quotewall_core import imagegen


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("APPDATA", str(tmp_path))
    monkeypatch.setattr(cli, "configure_logging", lambda **_kw: None)
    return tmp_path


def _run(capsys, argv: list[str]) -> tuple[int, dict | list]:
    rc = cli.main(argv)
    out = capsys.readouterr().out
    return rc, (json.loads(out) if out.strip() else {})


def test_compose_churchill_square(capsys, tmp_path) -> None:
    out = tmp_path / "churchill.png"
    rc, payload = _run(
        capsys,
        [
            "compose",
            "--text",
            "Success is not final, failure is not fatal.",
            "--author",
            "Winston Churchill",
            "--size",
            "square",
            "--color",
            "blue",
            "--font-size",
            "24",
            "--weight",
            "medium",
            "--align",
            "center",
            "--out",
            str(out),
        ],
    )
    assert rc == 0
    assert payload["success"] is True
    assert payload["size"] == {"name": "square", "width": 1080, "height": 1080}
    with Image.open(out) as img:
        assert img.size == (1080, 1080)


def test_compose_custom_size_and_background_file(capsys, tmp_path) -> None:
    bg = tmp_path / "bg.png"
    Image.new("RGB", (64, 64), (255, 0, 0)).save(bg)
    out = tmp_path / "wall.jpg"
    rc, payload = _run(
        capsys,
        ["compose", "--quote-id", "q-006", "--width", "800", "--height", "600", "--background", str(bg), "--out", str(out)],
    )
    assert rc == 0
    assert payload["background"] == "image"
    with Image.open(out) as img:
        assert img.size == (800, 600)


def test_compose_zero_width_fails(capsys, tmp_path) -> None:
    rc = cli.main(["compose", "--text", "Hi", "--width", "0", "--height", "600", "--out", str(tmp_path / "x.png")])
    assert rc == 1
    assert "positive" in capsys.readouterr().err


def test_compose_unknown_quote_fails(capsys, tmp_path) -> None:
    rc = cli.main(["compose", "--quote-id", "missing", "--out", str(tmp_path / "x.png")])
    assert rc == 1
    assert "not found" in capsys.readouterr().err


def test_ai_background_without_key_reports_error(capsys, tmp_path) -> None:
    rc = cli.main(["compose", "--quote-id", "q-001", "--ai-background", "--out", str(tmp_path / "x.png")])
    assert rc == 1
    assert "API key" in capsys.readouterr().err


def test_ai_background_uses_provider(capsys, tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(
        imagegen.OpenAIImageProvider,
        "generate_background",
        lambda self, quote: Image.new("RGB", (32, 32), (0, 255, 0)),
    )
    out = tmp_path / "ai.png"
    rc, payload = _run(capsys, ["compose", "--quote-id", "q-001", "--size", "square", "--ai-background", "--out", str(out)])
    assert rc == 0
    assert payload["background"] == "image"


def test_api_key_lifecycle(capsys) -> None:
    assert _run(capsys, ["api-key", "status"])[1] == {"configured": False}
    assert _run(capsys, ["api-key", "set", "sk-abc"])[1]["configured"] is True
    assert _run(capsys, ["api-key", "status"])[1] == {"configured": True}
    assert _run(capsys, ["api-key", "delete"])[1]["configured"] is False
    assert _run(capsys, ["api-key", "status"])[1] == {"configured": False}


def test_quotes_and_sizes_listing(capsys) -> None:
    rc, payload = _run(capsys, ["quotes", "list", "--category", "nature"])
    assert rc == 0
    assert payload["error"] is None
    assert payload["quotes"]
    assert all(any("nature" in c.lower() for c in q["categories"]) for q in payload["quotes"])

    rc, sizes = _run(capsys, ["sizes"])
    assert rc == 0
    assert [s["name"] for s in sizes] == ["iphone_portrait", "iphone_landscape", "ipad_portrait", "square"]

    rc, top = _run(capsys, ["quotes", "categories", "--top", "2"])
    assert rc == 0
    assert len(top) == 2


def test_quotes_list_rejects_negative_limit(capsys) -> None:
    rc = cli.main(["quotes", "list", "--limit", "-1"])
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "--limit" in captured.err

    rc, payload = _run(capsys, ["quotes", "list", "--limit", "0"])
    assert rc == 0
    assert payload["quotes"] == []
