from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from product_inventory.cli.main import EXIT_INVALID, EXIT_OK, EXIT_REJECTED, EXIT_STORAGE, main


def _run(db: Path, *args: str) -> int:
    return main(["--db", str(db), *args])


def _add(db: Path, pid: str, name: str, price: str, qty: str, *extra: str) -> int:
    return _run(db, "add", pid, "--name", name, "--price", price, "--quantity", qty, *extra)


def _json_ids(out: str) -> List[str]:
    return [p["product_id"] for p in json.loads(out.strip().splitlines()[-1])]


def test_add_list_value_flow(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "Product.db"
    assert _add(db, "P1", "Widget", "9.99", "3", "--category", "Tools", "--supplier", "Acme", "--status", "Active") == EXIT_OK
    assert _add(db, "P2", "Gadget", "19.99", "0", "--category", "Tools") == EXIT_OK
    capsys.readouterr()

    assert _run(db, "--json", "list") == EXIT_OK
    listed = json.loads(capsys.readouterr().out)
    assert [p["product_name"] for p in listed] == ["Gadget", "Widget"]
    assert listed[1] == {
        "product_id": "P1",
        "product_name": "Widget",
        "category": "Tools",
        "unit_price": "9.99",
        "quantity": 3,
        "supplier": "Acme",
        "status": "Active",
    }

    assert _run(db, "value") == EXIT_OK
    assert capsys.readouterr().out.strip() == "29.97"

    assert _run(db, "--json", "low-stock", "--threshold", "0") == EXIT_OK
    assert _json_ids(capsys.readouterr().out) == ["P2"]

    assert _run(db, "--json", "category", "tools") == EXIT_OK
    assert _json_ids(capsys.readouterr().out) == ["P2", "P1"]


def test_plain_list_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "Product.db"
    _add(db, "P1", "Widget", "9.5", "3")
    capsys.readouterr()

    assert _run(db, "list") == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["ProductID", "ProductName", "Category", "UnitPrice", "Quantity", "Supplier", "Status"]
    assert lines[1].split() == ["P1", "Widget", "9.50", "3"]
    assert lines[-1] == "(1 product(s))"


def test_rejections_map_to_exit_codes(tmp_path: Path) -> None:
    db = tmp_path / "Product.db"
    assert _add(db, "P1", "Widget", "1", "1") == EXIT_OK

    assert _add(db, "P1", "Again", "1", "1") == EXIT_REJECTED
    assert _add(db, "P2", "Bad", "-1", "1") == EXIT_INVALID
    assert _add(db, "P2", "Bad", "1", "x") == EXIT_INVALID
    assert _run(db, "update", "P9", "--name", "Ghost", "--price", "1", "--quantity", "1") == EXIT_REJECTED
    assert _run(db, "delete", "P9", "--yes") == EXIT_REJECTED


def test_update_and_delete(tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    db = tmp_path / "Product.db"
    _add(db, "P1", "Widget", "1", "1", "--status", "Active")
    assert _run(db, "update", "P1", "--name", "Widget", "--price", "2", "--quantity", "4") == EXIT_OK
    capsys.readouterr()

    _run(db, "--json", "list")
    (row,) = json.loads(capsys.readouterr().out)
    assert row["quantity"] == 4
    assert row["status"] == ""

    monkeypatch.setattr("builtins.input", lambda _prompt: "n")
    assert _run(db, "delete", "P1") == EXIT_OK
    _run(db, "--json", "list")
    assert len(json.loads(capsys.readouterr().out)) == 1

    monkeypatch.setattr("builtins.input", lambda _prompt: "y")
    assert _run(db, "delete", "P1") == EXIT_OK
    capsys.readouterr()
    _run(db, "--json", "list")
    assert json.loads(capsys.readouterr().out) == []


def test_init_reports_path_and_storage_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "nested" / "Product.db"
    assert _run(db, "init") == EXIT_OK
    assert capsys.readouterr().out.strip() == str(db)
    assert db.is_file()

    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    assert _run(blocker / "Product.db", "list") == EXIT_STORAGE


def test_out_of_range_values_exit_invalid(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "Product.db"
    assert _add(db, "Q1", "Bulk", "1", "99999999999999999999") == EXIT_INVALID
    assert _add(db, "H1", "Huge", "1e400", "0") == EXIT_INVALID
    capsys.readouterr()

    assert _run(db, "value") == EXIT_OK
    assert capsys.readouterr().out.strip() == "0.00"


def test_log_lines_stay_off_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "Product.db"
    _add(db, "P1", "Widget", "1", "1")
    capsys.readouterr()

    assert _run(db, "--json", "list") == EXIT_OK
    out = capsys.readouterr().out
    assert "Inventory DB path" not in out
    assert len(json.loads(out)) == 1
