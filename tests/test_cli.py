import json

import httpx

from seatscape.cli import main


def test_json_output(capsys):
    assert main(["del", "dxb", "2025-08-10T18:30", "--json", "--step", "10"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["side"] in ("A (left)", "F (right)")
    assert out["sampleMinutes"] == 10
    assert out["sunset"] is not None
    assert "samples" not in out
    assert isinstance(out["passBys"], list)


def test_text_output(capsys):
    assert main(["DEL", "DXB", "2025-08-10T18:30", "--prefer", "avoid"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Pick ")
    assert "Delhi" in out


def test_bad_input_exit_code(capsys):
    assert main(["D1L", "DXB", "2025-08-10T18:30"]) == 2
    assert "error:" in capsys.readouterr().err


def test_unknown_airport_exit_code(capsys, monkeypatch):
    monkeypatch.delenv("AVIATIONSTACK_API_KEY", raising=False)
    monkeypatch.setattr("seatscape.cli.load_dotenv", lambda: False)
    assert main(["ZZZ", "DXB", "2025-08-10T18:30"]) == 2


def test_png_output(tmp_path, capsys):
    target = tmp_path / "profile.png"
    assert main(["DEL", "DXB", "2025-08-10T18:30", "--png", str(target)]) == 0
    assert target.exists()


def test_airport_service_failure_exit_code(capsys, monkeypatch):
    def offline(*args, **kwargs):
        raise httpx.ConnectError("network down")

    monkeypatch.setenv("AVIATIONSTACK_API_KEY", "secret")
    monkeypatch.setattr("seatscape.cli.load_dotenv", lambda: False)
    monkeypatch.setattr("seatscape.airports.httpx.get", offline)
    assert main(["ZZZ", "DXB", "2025-08-10T18:30"]) == 1
    assert "network down" in capsys.readouterr().err
