import pytest

from adoc_reflow.collector import collect_list_item, marker_depth, parse_list_head


@pytest.mark.parametrize(
    ("marker", "depth"),
    [
        ("*", 1),
        ("***", 3),
        ("------", 6),
        ("++", 2),
        ("1.", 1),
        ("10.", 1),
        ("b.", 1),
        ("•", 1),
        ("", 0),
        ("*-", 0),
        ("B.", 0),
    ],
)
def test_marker_depth(marker, depth):
    assert marker_depth(marker) == depth


def test_parse_list_head_strips_checklist_token():
    item = parse_list_head("* [x]   Ship the release")

    assert item.marker == "*"
    assert item.checklist == "[x]"
    assert item.first_fragment == "Ship the release"


@pytest.mark.parametrize("token", ["[ ]", "[x]", "[X]", "[-]"])
def test_parse_list_head_accepts_every_checklist_state(token):
    assert parse_list_head(f"- {token} task").checklist == token


def test_parse_list_head_definition_item():
    item = parse_list_head("  CPU :: The processor")

    assert item.definition is True
    assert item.indent == "  "
    assert item.marker == "CPU"
    assert item.first_fragment == "The processor"


def test_parse_list_head_rejects_prose():
    assert parse_list_head("M. Glushkov said") is None


def test_simple_item_absorbs_continuation_text():
    lines = ["* one", "continued text", "", "next paragraph"]

    item, next_index = collect_list_item(lines, 0)

    assert item.lines == ["* one", "continued text"]
    assert item.complex is False
    assert next_index == 2


def test_nested_marker_makes_item_complex():
    lines = ["* Parent", "** Child", "*** Grandchild", "* Sibling"]

    item, next_index = collect_list_item(lines, 0)

    assert item.lines == ["* Parent", "** Child", "*** Grandchild"]
    assert item.complex is True
    assert next_index == 3


def test_deeper_indent_makes_item_complex():
    item, next_index = collect_list_item(["- a", "  - b"], 0)

    assert item.complex is True
    assert next_index == 2


def test_sibling_stops_without_being_consumed():
    item, next_index = collect_list_item(["1. one", "2. two"], 0)

    assert item.lines == ["1. one"]
    assert next_index == 1


def test_shallower_marker_stops_nested_item():
    lines = ["intro", "** child", "* parent"]

    item, next_index = collect_list_item(lines, 1)

    assert item.lines == ["** child"]
    assert next_index == 2


def test_continuation_marker_ends_complex_item():
    lines = ["* Item", "+", "Attached paragraph", "more"]

    item, next_index = collect_list_item(lines, 0)

    assert item.lines == ["* Item", "+"]
    assert item.complex is True
    assert next_index == 2


def test_indented_code_makes_item_complex():
    lines = ["* Item", "    code()", "tail text"]

    item, next_index = collect_list_item(lines, 0)

    assert item.lines == lines
    assert item.complex is True
    assert next_index == 3


@pytest.mark.parametrize(
    "boundary",
    ["----", "|===", "////", "--", "'''", "<<<", "[source]", ".Title", "// comment", "== Heading"],
)
def test_structural_lines_end_item(boundary):
    item, next_index = collect_list_item(["* a", boundary, "b"], 0)

    assert item.lines == ["* a"]
    assert next_index == 1


def test_definition_sibling_ends_definition_item():
    lines = ["Term:: def", "more", "Other:: x"]

    item, next_index = collect_list_item(lines, 0)

    assert item.lines == ["Term:: def", "more"]
    assert item.complex is False
    assert next_index == 2


def test_list_under_definition_is_nested():
    item, next_index = collect_list_item(["Term:: def", "* item"], 0)

    assert item.complex is True
    assert next_index == 2


def test_uppercase_initial_is_body_text():
    item, next_index = collect_list_item(["* Work by V.", "M. Glushkov"], 0)

    assert item.lines == ["* Work by V.", "M. Glushkov"]
    assert item.complex is False
    assert next_index == 2


def test_non_item_line_is_returned_alone():
    item, next_index = collect_list_item(["plain", "text"], 0)

    assert item.lines == ["plain"]
    assert next_index == 1
