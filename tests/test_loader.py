import pytest

from quadpath.loader import FieldParseError, load_field, parse_field
from quadpath.models import FieldValidationError, Rect


def test_parse_empty_field():
    field = parse_field("32\n0\n")
    assert field.size == 32
    assert field.obstacles == ()


def test_parse_obstacles_any_whitespace():
    field = parse_field("16 2\n7 6 3 3\n0\t0 1.5 2\n")
    assert field.obstacles == (Rect(7, 6, 3, 3), Rect(0, 0, 1.5, 2))


def test_load_field_from_file(tmp_path):
    path = tmp_path / "field.txt"
    path.write_text("32\n1\n0 15 32 2\n")
    field = load_field(path)
    assert field.obstacles == (Rect(0, 15, 32, 2),)


@pytest.mark.parametrize(
    "text,match",
    [
        ("", "empty"),
        ("   \n", "empty"),
        ("16", "Not enough values"),
        ("16 x", "Invalid number"),
        ("16 1.5 0 0 1 1", "non-negative integer"),
        ("16 -1", "non-negative integer"),
        ("16 inf", "non-negative integer"),
        ("16 nan", "non-negative integer"),
        ("16 2 0 0 1 1", "need 10 values"),
        ("16 0 1", "need 2 values"),
    ],
)
def test_parse_errors(text, match):
    with pytest.raises(FieldParseError, match=match):
        parse_field(text)


@pytest.mark.parametrize(
    "text",
    [
        "0 0",
        "-4 0",
        "16 1 0 0 -1 2",
        "16 1 0 0 2 0",
        "16 1 10 10 8 2",
        "inf 0",
        "nan 0",
        "16 1 nan 0 1 1",
        "16 1 0 0 inf 1",
    ],
)
def test_validation_errors(text):
    with pytest.raises(FieldValidationError):
        parse_field(text)


def test_missing_file(tmp_path):
    with pytest.raises(FieldParseError, match="File not found"):
        load_field(tmp_path / "nope.txt")


def test_non_finite_size_is_rejected_before_planning():
    with pytest.raises(FieldValidationError, match="finite"):
        parse_field("inf 0")


def test_non_finite_obstacle_reports_the_rectangle():
    with pytest.raises(FieldValidationError, match="finite"):
        parse_field("16 1 nan 0 1 1")
