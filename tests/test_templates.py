# tests/test_templates.py
import pytest

from lambdas.common.templates import build_assistant_partial, load_template, render_template


def test_render_replaces_only_the_placeholder():
    template = "Intro line\n<Task>\n{{TASK}}\n</Task>\nOutro $1 \\n line"
    rendered = render_template(template, "{{TASK}}", "Summarize articles")
    assert rendered == "Intro line\n<Task>\nSummarize articles\n</Task>\nOutro $1 \\n line"


def test_render_replaces_first_occurrence_only():
    assert render_template("{{TASK}} and {{TASK}}", "{{TASK}}", "A") == "A and {{TASK}}"


def test_render_inserts_value_verbatim():
    # replacement-pattern lookalikes and backslashes are not interpreted
    value = r"use $& and \1 and {{TASK}}"
    assert render_template("[{{TASK}}]", "{{TASK}}", value) == f"[{value}]"


def test_render_without_placeholder_is_unchanged():
    assert render_template("no token", "{{TASK}}", "x") == "no token"


@pytest.mark.parametrize("name, placeholder", [
    ("metaprompt.txt", "{{TASK}}"),
    ("distill_task.txt", "{{ORIGINAL_PROMPT}}"),
])
def test_shipped_templates_contain_their_placeholder_once(name, placeholder):
    template = load_template(name)
    assert template.count(placeholder) == 1


def test_assistant_partial_without_variables():
    assert build_assistant_partial([]) == "<Instructions Structure>"


def test_assistant_partial_with_variables():
    partial = build_assistant_partial(["topic", "length"])
    assert partial == "<Inputs>{TOPIC}\n{LENGTH}\n</Inputs>\n<Instructions Structure>"
