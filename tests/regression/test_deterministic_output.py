import random
from pathlib import Path

import pytest

from zip_extremes.cli import parse_args, run_command

HEADER = "ZipCode,PlaceName,State,County,Lat,Long\n"

ROWS = [
    "10023,New York,NY,New York,40.78,-74.00",
    "10005,New York,NY,New York,40.70,-74.00",
    "14201,Buffalo,NY,Erie,42.90,-78.88",
    "12901,Plattsburgh,NY,Clinton,44.70,-73.45",
    "90001,Los Angeles,CA,Los Angeles,34.05,-118.25",
    "96161,Truckee,CA,Nevada,39.33,-120.18",
    "92154,San Diego,CA,San Diego,32.55,-117.05",
    "00501,Holtsville,NY,Suffolk,40.81,-73.05",
    "00601,Adjuntas,PR,Adjuntas,18.18,-66.75",
    "00602,Aguada,PR,Aguada,18.18,-67.18",
]


def _run_once(tmp_path: Path, name: str, rows: list[str], capsys) -> str:
    source = tmp_path / f"{name}.csv"
    source.write_text(HEADER + "".join(f"{row}\n" for row in rows), encoding="utf-8")
    capsys.readouterr()
    assert run_command(parse_args([str(source), "--config-dir", "config", "--run-id", name])) == 0
    out = capsys.readouterr().out
    # The first line names the source file.
    return out.split("\n", 1)[1]


@pytest.mark.regression
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_table_is_byte_stable_for_shuffled_rows(tmp_path: Path, capsys, seed: int):
    shuffled = list(ROWS)
    random.Random(seed).shuffle(shuffled)

    first = _run_once(tmp_path, "ordered", ROWS, capsys)
    second = _run_once(tmp_path, f"shuffled-{seed}", shuffled, capsys)

    assert first == second
    assert "PR      00602          00601          00601          00601" in first
    assert "NY      14201          00501          12901          10005" in first
