"""Tests for document and item commands."""

import json
from decimal import Decimal

import pytest

from grocify.cli.error_handling import hint_for
from grocify.cli.main import cli
from grocify.domain.codec import ItemCodec
from grocify.domain.errors import DecodeError, MissingDestinationError, ShapeError, ValidationError


def run(cli_runner, session_path, *args, **kwargs):
    return cli_runner.invoke(cli, ["--session-path", str(session_path), *args], **kwargs)


def read_items(path):
    return ItemCodec().decode(path.read_bytes())


def manifest(session_path):
    return json.loads(session_path.read_text())


@pytest.fixture
def opened(cli_runner, session_path, list_file):
    """Open the sample list in a fresh session."""
    result = run(cli_runner, session_path, "open", str(list_file))
    assert result.exit_code == 0
    return list_file


def test_help_does_not_touch_session(cli_runner, session_path):
    result = run(cli_runner, session_path, "--help")
    assert result.exit_code == 0
    assert "open" in result.output
    assert not session_path.exists()


def test_open_records_file_in_manifest(cli_runner, session_path, opened):
    assert manifest(session_path) == [str(opened.resolve())]


def test_open_output(cli_runner, session_path, list_file):
    result = run(cli_runner, session_path, "open", str(list_file))
    assert result.exit_code == 0
    assert "Opened 'groceries' (3 items)" in result.output


def test_open_malformed_fails(cli_runner, session_path, fixtures_dir):
    result = run(cli_runner, session_path, "open", str(fixtures_dir / "malformed.json"))
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "not a grocery list" in result.output
    assert manifest(session_path) == []


def test_open_wrong_shape_fails(cli_runner, session_path, fixtures_dir):
    result = run(cli_runner, session_path, "open", str(fixtures_dir / "not_an_array.json"))
    assert result.exit_code == 1
    assert "array" in result.output


def test_list_restores_previous_session(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "list")
    assert result.exit_code == 0
    assert "groceries" in result.output
    assert "Untitled" not in result.output


def test_list_empty_session_shows_untitled(cli_runner, session_path):
    result = run(cli_runner, session_path, "list")
    assert result.exit_code == 0
    assert "Untitled" in result.output
    assert "(not saved)" in result.output


def test_session_path_from_env(cli_runner, session_path, list_file, monkeypatch):
    monkeypatch.setenv("GROCIFY_SESSION_PATH", str(session_path))
    result = cli_runner.invoke(cli, ["open", str(list_file)])
    assert result.exit_code == 0
    assert manifest(session_path) == [str(list_file.resolve())]


def test_show(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "show", "groceries")
    assert result.exit_code == 0
    assert "Milk" in result.output
    assert "1.50" in result.output
    assert "Bananas" in result.output


def test_show_by_position(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "show", "1")
    assert result.exit_code == 0
    assert "Rye bread" in result.output


def test_show_unknown_list(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "show", "hardware")
    assert result.exit_code == 1
    assert "not open" in result.output


def test_new_creates_file(cli_runner, session_path, tmp_path):
    target = tmp_path / "weekend.json"
    result = run(cli_runner, session_path, "new", str(target))
    assert result.exit_code == 0
    assert "Created list 'weekend'" in result.output
    assert read_items(target) == []
    assert manifest(session_path) == [str(target.resolve())]


def test_new_existing_file_cancelled(cli_runner, session_path, list_file):
    result = run(cli_runner, session_path, "new", str(list_file), input="n\n")
    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert len(read_items(list_file)) == 3


def test_close(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "close", "groceries")
    assert result.exit_code == 0
    assert "Closed 'groceries'" in result.output
    assert manifest(session_path) == []
    assert opened.exists()


def test_save_untitled_asks_for_destination(cli_runner, session_path):
    result = run(cli_runner, session_path, "save", "Untitled")
    assert result.exit_code == 1
    assert "save-as" in result.output
    assert "grocify save-as LIST PATH" in result.output


def test_save_as_renames(cli_runner, session_path, opened, tmp_path):
    target = tmp_path / "copy.json"
    result = run(cli_runner, session_path, "save-as", "groceries", str(target))
    assert result.exit_code == 0
    assert "Saved 'copy'" in result.output
    assert len(read_items(target)) == 3
    assert manifest(session_path) == [str(target.resolve())]


def test_item_add(cli_runner, session_path, opened):
    result = run(
        cli_runner, session_path, "item", "add", "groceries", "Eggs", "--amount", "12", "--price", "3.20"
    )
    assert result.exit_code == 0
    assert "Added 'Eggs'" in result.output

    items = read_items(opened)
    assert items[-1].name == "Eggs"
    assert items[-1].amount == 12
    assert str(items[-1].unit_price) == "3.20"


def test_item_add_invalid_amount(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "item", "add", "groceries", "Eggs", "--amount", "a dozen")
    assert result.exit_code == 1
    assert "amount" in result.output.lower()
    assert len(read_items(opened)) == 3


def test_item_add_to_unsaved_list_fails(cli_runner, session_path):
    result = run(cli_runner, session_path, "item", "add", "Untitled", "Eggs")
    assert result.exit_code == 1
    assert "save-as" in result.output


def test_item_edit_price(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "item", "edit", "groceries", "2", "price", "2.50")
    assert result.exit_code == 0
    assert read_items(opened)[1].unit_price == Decimal("2.50")


def test_item_edit_clear_everything_removes_row(cli_runner, session_path, opened):
    # "Bananas" has no amount or price, so clearing the name empties the row
    result = run(cli_runner, session_path, "item", "edit", "groceries", "3", "name", "")
    assert result.exit_code == 0
    assert "removed" in result.output
    assert [i.name for i in read_items(opened)] == ["Milk", "Rye bread"]


def test_item_edit_bad_row(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "item", "edit", "groceries", "9", "name", "x")
    assert result.exit_code == 1
    assert "out of range" in result.output


def test_item_remove(cli_runner, session_path, opened):
    result = run(cli_runner, session_path, "item", "remove", "groceries", "1")
    assert result.exit_code == 0
    assert "Removed 'Milk'" in result.output
    assert [i.name for i in read_items(opened)] == ["Rye bread", "Bananas"]


def test_full_workflow(cli_runner, session_path, tmp_path):
    """new -> add -> edit -> list -> close."""
    target = tmp_path / "party.json"
    assert run(cli_runner, session_path, "new", str(target)).exit_code == 0
    assert run(cli_runner, session_path, "item", "add", "party", "Chips", "--amount", "3").exit_code == 0
    assert run(cli_runner, session_path, "item", "add", "party", "Soda", "--price", "1.99").exit_code == 0
    assert run(cli_runner, session_path, "item", "edit", "party", "1", "amount", "4").exit_code == 0

    result = run(cli_runner, session_path, "list")
    assert "party" in result.output
    assert "2 items" in result.output

    items = read_items(target)
    assert [(i.name, i.amount) for i in items] == [("Chips", 4), ("Soda", None)]

    assert run(cli_runner, session_path, "close", "party").exit_code == 0
    assert manifest(session_path) == []


@pytest.mark.parametrize(
    "error,expected",
    [
        (MissingDestinationError("no file"), "save-as"),
        (DecodeError("bad json"), "not a grocery list"),
        (ShapeError("not an array"), "JSON array"),
        (ValidationError("bad amount"), None),
    ],
)
def test_error_hints(error, expected):
    hint = hint_for(error)
    if expected is None:
        assert hint is None
    else:
        assert expected in hint
