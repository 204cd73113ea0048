"""Tests for the compiler and the renderers it produces."""

import asyncio
from dataclasses import dataclass

import pytest

from braces.compiler import Compiler, Renderer
from braces.compiler.text import reduce
from braces.errors import TemplateCompileError


@pytest.fixture
def compiler():
    return Compiler()


def render(text, data=None):
    return Compiler().render(text, data)


# =============================================================================
# Rendering
# =============================================================================


def test_plain_text_renders_normalized():
    text = "<div>\n    <p>It's a \\ test</p>\n    <!-- gone -->\n</div>\n"
    assert render(text, {"anything": 1}) == reduce(text)
    assert render(text) == "<div><p>It's a \\ test</p></div>"


def test_interpolation_expression():
    assert render("{{= 1+1 }}", {}) == "2"


def test_interpolation_of_fields():
    assert render("Hello {{= name }}!", {"name": "Ann"}) == "Hello Ann!"


def test_interpolation_of_none_is_empty():
    assert render("[{{= missing }}]", {}) == "[]"


def test_interpolation_with_quotes_in_expression():
    data = {"d": {"key": "v"}}
    assert render("{{= d['key'] + \"!\" }}", data) == "v!"


def test_conditional_chain():
    text = "{{? a==1 }}X{{?? a==2 }}Y{{?? }}Z{{? }}"
    assert render(text, {"a": 1}) == "X"
    assert render(text, {"a": 2}) == "Y"
    assert render(text, {"a": 9}) == "Z"


def test_nested_conditionals():
    text = "{{? a }}A{{? b }}B{{? }}{{?? }}-{{? }}"
    assert render(text, {"a": True, "b": True}) == "AB"
    assert render(text, {"a": True, "b": False}) == "A"
    assert render(text, {"a": False}) == "-"


def test_empty_conditional_branches():
    assert render("{{? a }}{{?? }}{{? }}ok", {"a": 1}) == "ok"


def test_iteration_with_index():
    text = "{{~ items:it:i }}{{= i }}-{{= it }};{{~ }}"
    assert render(text, {"items": ["a", "b"]}) == "0-a;1-b;"


def test_iteration_over_missing_items():
    text = "{{~ items:it:i }}{{= i }}-{{= it }};{{~ }}"
    assert render(text, {}) == ""
    assert render(text, {"items": None}) == ""
    assert render(text, {"items": []}) == ""


def test_iteration_without_index():
    assert render("{{~ xs:x }}<{{= x }}>{{~ }}", {"xs": [1, 2, 3]}) == "<1><2><3>"


def test_nested_iteration_over_records():
    text = (
        "{{~ groups:g }}{{= g.name }}:"
        "{{~ g.members:m:j }}{{? j }},{{? }}{{= m.name }}{{~ }};{{~ }}"
    )
    data = {
        "groups": [
            {"name": "a", "members": [{"name": "x"}, {"name": "y"}]},
            {"name": "b", "members": []},
        ]
    }
    assert render(text, data) == "a:x,y;b:;"


def test_evaluation_assigns_hoisted_names():
    text = "{{ total=price*qty; }}{{= total }}"
    assert render(text, {"price": 2, "qty": 5}) == "10"


def test_evaluation_produces_no_output():
    assert render("a{{ x = 5 }}b", {}) == "ab"


def test_evaluation_with_dict_literal():
    text = "{{ d = {'k': [1, {'n': 2}]} }}{{= d['k'][1]['n'] }}"
    assert render(text, {}) == "2"


def test_member_access_on_nested_data():
    renderer = Compiler().compile("{{= user.name }}")
    assert renderer({"user": {"name": "Ann"}}) == "Ann"
    assert renderer.variables == ["user"]


def test_missing_member_reads_as_none():
    assert render("[{{= user.nickname }}]", {"user": {"name": "Ann"}}) == "[]"


def test_unguarded_nested_access_fails_at_render():
    renderer = Compiler().compile("{{= user.name }}")
    with pytest.raises(AttributeError):
        renderer({})


def test_text_quotes_and_backslashes_survive():
    assert render("it's {{= 'ok' }} \\o/", {}) == "it's ok \\o/"


def test_blocks_resolve_in_any_order():
    text = "<h1>{{> title }}</h1>{{< title }}{{= name }}{{< }}"
    assert render(text, {"name": "Home"}) == "<h1>Home</h1>"


def test_builtins_are_available():
    assert render("{{= len(xs) }}/{{= max(xs) }}", {"xs": [3, 9, 4]}) == "3/9"


def test_data_fields_named_like_builtins_win():
    assert render("{{= id }}", {"id": 5}) == "5"
    assert render("{{= type }}:{{= max }}", {"type": "post", "max": 10}) == "post:10"
    assert render("{{= format }}", {"format": None}) == ""


def test_builtin_field_does_not_leak_between_renders():
    renderer = Compiler().compile("{{= len(xs) }}")
    assert renderer({"xs": [1, 2]}) == "2"
    assert renderer({"xs": [1, 2], "len": lambda xs: "custom"}) == "custom"
    assert renderer({"xs": []}) == "0"


def test_interpolated_tuple_is_one_value():
    assert render("{{= a, b }}", {"a": 1, "b": 2}) == "(1, 2)"


def test_data_object_with_attributes():
    @dataclass
    class Page:
        title: str
        tags: list

    text = "{{= title }}:{{~ tags:t }}{{= t }}{{~ }}"
    assert render(text, Page(title="T", tags=["x", "y"])) == "T:xy"


# =============================================================================
# Compilation
# =============================================================================


def test_compile_returns_renderer(compiler):
    renderer = compiler.compile("{{= a }}")
    assert isinstance(renderer, Renderer)
    assert "def render_template(__data, __str):" in renderer.source
    assert "a = __data.get('a')" in renderer.source


def test_compiling_twice_gives_equivalent_renderers(compiler):
    text = "{{~ xs:x:i }}{{= i * x }},{{~ }}"
    first, second = compiler.compile(text), compiler.compile(text)
    assert first is not second
    data = {"xs": [1, 2, 3]}
    assert first(data) == second(data) == "0,2,6,"


def test_renderer_is_reusable(compiler):
    renderer = compiler.compile("{{= n * 2 }}")
    assert [renderer({"n": n}) for n in range(3)] == ["0", "2", "4"]


def test_defaults_merge_under_data():
    defaults = {"site": "example.org", "name": "guest"}
    renderer = Compiler(defaults).compile("{{= name }}@{{= site }}")
    assert renderer() == "guest@example.org"
    assert renderer({"name": "ann"}) == "ann@example.org"


def test_defaults_are_read_at_render_time():
    defaults = {}
    renderer = Compiler(defaults).compile("{{= greeting }}")
    defaults["greeting"] = "hi"
    assert renderer({}) == "hi"


def test_render_async():
    renderer = Compiler().compile("{{= 6 * 7 }}")
    assert asyncio.run(renderer.render_async({})) == "42"


def test_generate_reports_variables(compiler):
    generated = compiler.generate("{{ total = price * qty }}{{= total }}")
    assert generated.variables == ["total", "price", "qty"]
    assert generated.problems == []


# =============================================================================
# Errors
# =============================================================================


def test_unclosed_conditional_reports_source(compiler):
    with pytest.raises(TemplateCompileError) as excinfo:
        compiler.compile("{{? a }}X")
    assert "unclosed if block" in str(excinfo.value)
    assert "def render_template" in excinfo.value.source


def test_extra_closer_is_an_error(compiler):
    with pytest.raises(TemplateCompileError) as excinfo:
        compiler.compile("X{{~ }}")
    assert "without an open block" in str(excinfo.value)


def test_mismatched_closer_is_an_error(compiler):
    with pytest.raises(TemplateCompileError):
        compiler.compile("{{? a }}{{~ xs:x }}{{? }}{{~ }}")


def test_invalid_expression_reports_source(compiler):
    with pytest.raises(TemplateCompileError) as excinfo:
        compiler.compile("{{= 1 + }}")
    assert "Invalid template code" in str(excinfo.value)
    assert "__str((1 +))" in excinfo.value.source


def test_else_after_else_is_an_error(compiler):
    with pytest.raises(TemplateCompileError):
        compiler.compile("{{? a }}{{?? }}{{?? b }}{{? }}")
