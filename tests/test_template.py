"""Tests for template escapes and prop expansion."""

from vestaboard.template import expand_props, render_template


def test_prop_substitution():
    assert render_template("HELLO {{name}}", {"name": "WORLD"}) == "HELLO WORLD"


def test_missing_prop_is_empty():
    assert render_template("HELLO {{name}}", {}) == "HELLO "
    assert render_template("HELLO {{name}}") == "HELLO "


def test_code_escapes():
    assert render_template("{63}{66}") == "🟥🟩"
    assert render_template("{1}") == "A"
    # holes in the table render as blanks
    assert render_template("{43}") == " "
    # not a byte, left alone
    assert render_template("{300}") == "{300}"


def test_other_braces_pass_through():
    assert render_template("{name} {{}} {{a-b}}") == "{name} {{}} {{a-b}}"


def test_expand_props():
    assert expand_props(None) is None
    assert expand_props({"flag": "{63} OK"}) == {"flag": "🟥 OK"}


def test_prop_values_are_not_rescanned():
    assert render_template("{{x}}", {"x": "{63}"}) == "{63}"
    expanded = expand_props({"x": "{63}"})
    assert render_template("{{x}}", expanded) == "🟥"
