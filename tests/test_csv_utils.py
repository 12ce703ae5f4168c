import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))
from cardex import csv_utils

HEADER = "uuid,manaValue,manaCost,name,rarity,setCode,subtypes,text,type,artist\n"


def test_escape_and_unescape_text():
    assert csv_utils.escape_text("Flying\r\nTrample\nHaste") == "Flying\\nTrample\\nHaste"
    assert csv_utils.unescape_text("Flying\\nHaste") == "Flying\nHaste"
    assert csv_utils.unescape_text("Already\nreal") == "Already\nreal"
    assert csv_utils.escape_text(None) is None
    assert csv_utils.unescape_text(None) is None


def test_normalize_name_casefolds_non_ascii():
    assert csv_utils.normalize_name(" Æther Vial ") == "æther vial"
    assert csv_utils.normalize_name("Éric Deschamps") == "éric deschamps"
    assert csv_utils.normalize_name(None) == ""


def test_blank_to_none():
    assert csv_utils.blank_to_none("  ") is None
    assert csv_utils.blank_to_none(None) is None
    assert csv_utils.blank_to_none(" rare ") == "rare"


@pytest.mark.parametrize(
    "raw, expected",
    [("3", 3.0), ("0.5", 0.5), ("", None), (None, None), ("X", None)],
)
def test_parse_mana_value(raw, expected):
    assert csv_utils.parse_mana_value(raw) == expected


def test_iter_card_rows_reads_header_with_bom(tmp_path):
    path = tmp_path / "cards.csv"
    path.write_text(
        "\ufeff" + HEADER + 'u1,2,{1}{G},Grizzly Bears,common,LEA,Bear,"",Creature,Jeff A. Menges\n',
        encoding="utf-8",
    )
    rows = list(csv_utils.iter_card_rows(path))
    assert len(rows) == 1
    assert rows[0]["uuid"] == "u1"
    assert rows[0]["artist"] == "Jeff A. Menges"


def test_iter_card_rows_keeps_multiline_quoted_text(tmp_path):
    path = tmp_path / "cards.csv"
    path.write_text(HEADER + 'u1,1,{W},Angel,rare,LEA,,"First\nSecond",Creature,Someone\n', encoding="utf-8")
    (row,) = csv_utils.iter_card_rows(path)
    assert row["text"] == "First\nSecond"


def test_iter_card_rows_rejects_missing_columns(tmp_path):
    path = tmp_path / "cards.csv"
    path.write_text("uuid,name\nu1,Bear\n", encoding="utf-8")
    with pytest.raises(csv_utils.CsvFormatError) as excinfo:
        list(csv_utils.iter_card_rows(path))
    assert "setCode" in str(excinfo.value)


def test_count_rows_excludes_header(tmp_path):
    path = tmp_path / "cards.csv"
    path.write_text(HEADER + "a,,,A,,S,,,,\nb,,,B,,S,,,,\n", encoding="utf-8")
    assert csv_utils.count_rows(path) == 2
