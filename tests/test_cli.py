import json

import pytest

from studyai.core.errors import ServiceUnavailableError
from studyai.modules.study import cli

from conftest import FakeGateway


@pytest.fixture
def notes(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("Photosynthesis converts light to energy.", encoding="utf-8")
    return path


def _use_gateway(monkeypatch, gateway):
    monkeypatch.setattr(cli, "ModelGateway", lambda *args, **kwargs: gateway)


def test_flashcards_command_prints_validated_cards(monkeypatch, capsys, notes):
    _use_gateway(monkeypatch, FakeGateway('ok: [{"front":"Q","back":"A","x":1}]'))

    assert cli.main(["flashcards", "--file", str(notes)]) == 0

    assert json.loads(capsys.readouterr().out) == [{"front": "Q", "back": "A"}]


def test_explain_command(monkeypatch, capsys, notes):
    gateway = FakeGateway("Light becomes sugar.")
    _use_gateway(monkeypatch, gateway)

    cli.main(["explain", "--file", str(notes), "--concept", "light"])

    assert json.loads(capsys.readouterr().out) == {"explanation": "Light becomes sugar."}
    assert "Concept to explain: light" in gateway.calls[0][1]


def test_errors_exit_with_kind(monkeypatch, capsys, notes):
    _use_gateway(monkeypatch, FakeGateway(error=ServiceUnavailableError("no key")))

    with pytest.raises(SystemExit) as exc:
        cli.main(["summary", "--file", str(notes)])

    assert exc.value.code == 1
    assert "service_unavailable: no key" in capsys.readouterr().err


def test_unreadable_pdf_exits_cleanly(monkeypatch, capsys, tmp_path):
    gateway = FakeGateway("unused")
    _use_gateway(monkeypatch, gateway)
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf at all")

    with pytest.raises(SystemExit) as exc:
        cli.main(["summary", "--file", str(broken)])

    assert exc.value.code == 1
    assert "Could not read" in capsys.readouterr().err
    assert gateway.calls == []


def test_missing_file_exits_cleanly(monkeypatch, capsys, tmp_path):
    _use_gateway(monkeypatch, FakeGateway("unused"))

    with pytest.raises(SystemExit) as exc:
        cli.main(["summary", "--file", str(tmp_path / "nowhere.txt")])

    assert exc.value.code == 1
    assert "Could not read" in capsys.readouterr().err


def test_blank_summary_is_a_format_error(monkeypatch, capsys, notes):
    _use_gateway(monkeypatch, FakeGateway("  \n "))

    with pytest.raises(SystemExit) as exc:
        cli.main(["summary", "--file", str(notes)])

    assert exc.value.code == 1
    assert "generation_format:" in capsys.readouterr().err
