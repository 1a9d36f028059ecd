"""Tests for TemplateRenderer (core/rendering.py).

The :class:`TemplateStore` dependency is an in-memory fake — no package
data and no filesystem access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from archer_pack.core.rendering import TemplateRenderer
from archer_pack.exceptions import (
    TemplateExecutionError,
    TemplateNotFoundError,
    TemplateParseError,
)


@dataclass(frozen=True)
class _Inner:
    name: str


@dataclass(frozen=True)
class _Params:
    app: _Inner
    count: int


def _renderer(make_store: Any, **templates: str) -> TemplateRenderer:
    return TemplateRenderer(make_store({f"{k}.yml": v for k, v in templates.items()}))


class TestRender:
    def test_dotted_lookup_on_dataclass(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="app={{ app.name }} count={{ count }}")
        assert renderer.render("main.yml", _Params(_Inner("web"), 2)) == "app=web count=2"

    def test_mapping_params(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="{{ env.name }}")
        assert renderer.render("main.yml", {"env": {"name": "test"}}) == "test"

    def test_trailing_newline_preserved(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="x: {{ count }}\n")
        assert renderer.render("main.yml", {"count": 1}) == "x: 1\n"

    def test_no_html_escaping(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="{{ v }}")
        assert renderer.render("main.yml", {"v": "<a & b>"}) == "<a & b>"

    def test_deterministic(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="{% for k in m | dictsort %}{{ k[0] }}{% endfor %}")
        params = {"m": {"b": 1, "a": 2, "c": 3}}
        outputs = {renderer.render("main.yml", params) for _ in range(5)}
        assert outputs == {"abc"}

    def test_two_templates_are_independent(self, make_store: Any) -> None:
        renderer = _renderer(make_store, one="1:{{ count }}", two="2:{{ count }}")
        assert renderer.render("one.yml", {"count": 7}) == "1:7"
        assert renderer.render("two.yml", {"count": 7}) == "2:7"


class TestRenderErrors:
    def test_missing_template(self, make_store: Any) -> None:
        renderer = _renderer(make_store)
        with pytest.raises(TemplateNotFoundError):
            renderer.render("absent.yml", {})

    def test_parse_error(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="{% for x in %}")
        with pytest.raises(TemplateParseError, match="main.yml"):
            renderer.render("main.yml", {})

    def test_missing_top_level_field(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="{{ missing }}")
        with pytest.raises(TemplateExecutionError, match="missing"):
            renderer.render("main.yml", {})

    def test_missing_nested_field(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="{{ app.port }}")
        with pytest.raises(TemplateExecutionError, match="main.yml"):
            renderer.render("main.yml", _Params(_Inner("web"), 1))

    def test_missing_field_inside_condition(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="{% if app.prod %}p{% endif %}")
        with pytest.raises(TemplateExecutionError):
            renderer.render("main.yml", _Params(_Inner("web"), 1))

    def test_unsupported_params_type(self, make_store: Any) -> None:
        renderer = _renderer(make_store, main="x")
        with pytest.raises(TemplateExecutionError):
            renderer.render("main.yml", 42)
