from mazequest.validation import MOVE, NEW_GAME, validate


def test_new_game_all_optional():
    ok, data = validate({}, NEW_GAME)
    assert ok and data == {}


def test_new_game_nulls_treated_as_absent():
    ok, data = validate({"rows": None, "cols": 11, "seed": None, "variant": None}, NEW_GAME)
    assert ok
    assert data == {"cols": 11}


def test_payload_must_be_object():
    ok, err = validate(["up"], MOVE)
    assert not ok and err["field"] == "__root__" and err["code"] == "type"


def test_bool_is_not_int():
    ok, err = validate({"rows": False}, NEW_GAME)
    assert not ok and err == {"field": "rows", "error": "expected int", "code": "type"}


def test_int_bounds():
    ok, err = validate({"seed": -5}, NEW_GAME)
    assert not ok and err["code"] == "min_value"
    ok, err = validate({"cols": 1000}, NEW_GAME)
    assert not ok and err["code"] == "max_value"


def test_string_checks():
    ok, data = validate({"dir": "  up "}, MOVE)
    assert ok and data == {"dir": "up"}
    ok, err = validate({"dir": "   "}, MOVE)
    assert not ok and err["code"] == "empty"
    ok, err = validate({"dir": "x" * 17}, MOVE)
    assert not ok and err["code"] == "max_len"
    ok, err = validate({"dir": 3}, MOVE)
    assert not ok and err["code"] == "type"


def test_bad_schema_reported():
    ok, err = validate({"a": 1}, {"a": ("float", True)})
    assert not ok and err["field"] == "__schema__"
    ok, err = validate({"a": 1}, {"a": "int"})
    assert not ok and err["code"] == "schema"
