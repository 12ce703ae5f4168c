import sys
from pathlib import Path

import pytest
from sqlmodel import Session, select
from typer.testing import CliRunner

sys.path.append(str(Path(__file__).resolve().parents[1]))
from cardex_web import cli, database, models

HEADER = "uuid,manaValue,manaCost,name,rarity,setCode,subtypes,text,type,artist\n"

runner = CliRunner()


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("CARDEX_DATABASE_URL", url)
    database.dispose_engine()
    yield url
    database.dispose_engine()


def test_import_cards_prints_summary(tmp_path, db_url):
    path = tmp_path / "cards.csv"
    path.write_text(
        HEADER
        + "u1,1,{R},Shock,common,M19,,Deal 2 damage,Instant,Jason Rainville\n"
        + "u2,1,{R},Lightning Strike,common,M19,,Deal 3 damage,Instant,Jason Rainville\n",
        encoding="utf-8",
    )

    result = runner.invoke(cli.app, ["import-cards", "--file", str(path)])

    assert result.exit_code == 0, result.output
    assert "Processed 2 cards in" in result.output
    assert "Imported: 2, Skipped: 0, Artists created: 1" in result.output
    with Session(database.create_db_engine(db_url)) as session:
        assert len(session.exec(select(models.Card)).all()) == 2


def test_import_cards_honours_limit(tmp_path, db_url):
    path = tmp_path / "cards.csv"
    path.write_text(HEADER + "".join(f"u{i},,,Card {i},,S,,,,\n" for i in range(5)), encoding="utf-8")

    result = runner.invoke(cli.app, ["import-cards", "--file", str(path), "-l", "3"])

    assert result.exit_code == 0, result.output
    assert "Processed 3 cards" in result.output


def test_import_cards_zero_limit_imports_everything(tmp_path, db_url):
    path = tmp_path / "cards.csv"
    path.write_text(HEADER + "".join(f"u{i},,,Card {i},,S,,,,\n" for i in range(5)), encoding="utf-8")

    result = runner.invoke(cli.app, ["import-cards", "--file", str(path), "--limit", "0"])

    assert result.exit_code == 0, result.output
    assert "Processed 5 cards" in result.output


def test_import_cards_missing_file_fails(tmp_path, db_url):
    result = runner.invoke(cli.app, ["import-cards", "--file", str(tmp_path / "nope.csv")])
    assert result.exit_code == 1
    assert "Cannot open" in result.output


def test_import_cards_bad_header_fails(tmp_path, db_url):
    path = tmp_path / "cards.csv"
    path.write_text("uuid,name\nu1,Shock\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["import-cards", "--file", str(path)])
    assert result.exit_code == 1
    assert "missing required column" in result.output


def test_serve_runs_uvicorn(monkeypatch, db_url):
    calls = {}

    def fake_run(app, host, port):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr("uvicorn.run", fake_run)
    result = runner.invoke(cli.app, ["serve", "--port", "9001"])

    assert result.exit_code == 0, result.output
    assert calls == {"app": "server:app", "host": "0.0.0.0", "port": 9001}
