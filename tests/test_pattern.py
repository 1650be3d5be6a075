"""Tests for waypoint.routing.pattern: template compilation and parameter positions."""

import re

import pytest

from waypoint.config import RouterOptions
from waypoint.errors import DuplicateParamError, InvalidPathError, InvalidPrefixError
from waypoint.routing.pattern import (
    SEGMENT,
    CompiledPattern,
    compile_pattern,
    extract_params,
    parse_template,
    split_segments,
)


class TestParseTemplate:
    def test_root(self) -> None:
        segments = parse_template("/")
        assert len(segments) == 1
        assert segments[0].value == ""
        assert segments[0].is_param is False

    def test_literals(self) -> None:
        segments = parse_template("/api/v2/users")
        assert [s.value for s in segments] == ["api", "v2", "users"]
        assert not any(s.is_param for s in segments)

    def test_param(self) -> None:
        segments = parse_template("/users/:id")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"

    def test_trailing_slash_kept(self) -> None:
        segments = parse_template("/l1/")
        assert [s.value for s in segments] == ["l1", ""]


class TestSplitSegments:
    def test_drops_leading_empty(self) -> None:
        assert split_segments("/a/b") == ["a", "b"]

    def test_empty_prefix(self) -> None:
        assert split_segments("") == []


class TestCompilePattern:
    def test_literal_source(self) -> None:
        pattern = compile_pattern("/users", RouterOptions())
        assert pattern.source == "^/users"
        assert pattern.template == "/users"

    def test_param_source(self) -> None:
        pattern = compile_pattern("/users/:id", RouterOptions())
        assert pattern.source == f"^/users/{SEGMENT}"

    def test_root_matches_everything_without_end(self) -> None:
        pattern = compile_pattern("/", RouterOptions())
        assert pattern.match("/")
        assert pattern.match("/anything/at/all")

    def test_prefix_style_match(self) -> None:
        pattern = compile_pattern("/users", RouterOptions())
        assert pattern.match("/users")
        assert pattern.match("/users/42")
        assert not pattern.match("/posts")

    def test_end_anchors(self) -> None:
        pattern = compile_pattern("/users", RouterOptions(end=True))
        assert pattern.match("/users")
        assert not pattern.match("/users/")
        assert not pattern.match("/users/42")

    def test_case_insensitive_by_default(self) -> None:
        pattern = compile_pattern("/Users", RouterOptions())
        assert pattern.match("/users")
        assert pattern.match("/USERS")

    def test_case_sensitive(self) -> None:
        pattern = compile_pattern("/Users", RouterOptions(case=True))
        assert pattern.match("/Users")
        assert not pattern.match("/users")

    def test_prefix_prepended(self) -> None:
        pattern = compile_pattern("/mypath", RouterOptions(prefix="/myprefix"))
        assert pattern.template == "/myprefix/mypath"
        assert pattern.match("/myprefix/mypath")
        assert not pattern.match("/mypath")

    def test_full_options(self) -> None:
        options = RouterOptions(prefix="/myprefix", end=True, case=True)
        pattern = compile_pattern("/myPath", options)
        assert pattern.match("/myprefix/myPath")
        assert not pattern.match("/myprefix/mypath")
        assert not pattern.match("/myprefix/myPath/")

    def test_param_segment_grammar(self) -> None:
        pattern = compile_pattern("/files/:name", RouterOptions(end=True))
        assert pattern.match("/files/report-2024_v1.final:draft")
        assert not pattern.match("/files/")
        assert not pattern.match("/files/a b")

    def test_literal_dot_is_not_a_wildcard(self) -> None:
        pattern = compile_pattern("/index.html", RouterOptions(end=True))
        assert pattern.match("/index.html")
        assert not pattern.match("/indexxhtml")

    def test_same_template_compiles_equal(self) -> None:
        a = compile_pattern("/users/:id", RouterOptions())
        b = compile_pattern("/users/:id", RouterOptions())
        assert a == b
        assert hash(a) == hash(b)

    def test_different_param_names_compile_equal(self) -> None:
        a = compile_pattern("/users/:id", RouterOptions())
        b = compile_pattern("/users/:name", RouterOptions())
        assert a == b

    def test_prefix_and_path_split_compile_equal(self) -> None:
        a = compile_pattern("/a/b", RouterOptions())
        b = compile_pattern("/b", RouterOptions(prefix="/a"))
        assert a == b

    def test_case_flag_distinguishes(self) -> None:
        a = compile_pattern("/users", RouterOptions(case=True))
        b = compile_pattern("/users", RouterOptions(case=False))
        assert a != b

    def test_native_pattern_passes_through(self) -> None:
        regex = re.compile(r"^/items/(?P<sku>\d+)$")
        pattern = compile_pattern(regex, RouterOptions(prefix="/ignored"))
        assert isinstance(pattern, CompiledPattern)
        assert pattern.regex is regex
        assert pattern.is_native
        assert pattern.case is True
        assert pattern.match("/items/12")

    def test_native_ignorecase_flag(self) -> None:
        pattern = compile_pattern(re.compile("^/a", re.IGNORECASE), RouterOptions())
        assert pattern.case is False


class TestCompileValidation:
    @pytest.mark.parametrize("template", ["", "users", "/users//x", "//", "/a b", "/a?b", "/:"])
    def test_invalid_paths(self, template: str) -> None:
        with pytest.raises(InvalidPathError) as exc_info:
            compile_pattern(template, RouterOptions())
        assert exc_info.value.value == template

    def test_non_string_path(self) -> None:
        with pytest.raises(InvalidPathError, match="must be a string"):
            compile_pattern(42, RouterOptions())  # type: ignore[arg-type]

    @pytest.mark.parametrize("prefix", ["api", "/api/", "/", "/a//b"])
    def test_invalid_prefixes(self, prefix: str) -> None:
        with pytest.raises(InvalidPrefixError):
            compile_pattern("/users", RouterOptions(prefix=prefix))

    def test_non_string_prefix(self) -> None:
        with pytest.raises(InvalidPrefixError):
            compile_pattern("/users", RouterOptions(prefix=None))  # type: ignore[arg-type]

    def test_empty_prefix_is_valid(self) -> None:
        assert compile_pattern("/", RouterOptions(prefix="")).source == "^/"

    def test_path_checked_before_prefix(self) -> None:
        with pytest.raises(InvalidPathError):
            compile_pattern("bad", RouterOptions(prefix="bad"))


class TestExtractParams:
    def test_no_params(self) -> None:
        assert extract_params("/users", RouterOptions()) == {}

    def test_single_param(self) -> None:
        assert extract_params("/user/:a", RouterOptions()) == {"a": 1}

    def test_multiple_params_in_order(self) -> None:
        params = extract_params("/users/:user/posts/:post", RouterOptions())
        assert params == {"user": 1, "post": 3}
        assert list(params) == ["user", "post"]

    def test_offset_by_prefix(self) -> None:
        params = extract_params("/l2/:a", RouterOptions(prefix="/l1"))
        assert params == {"a": 2}

    def test_offset_by_nested_prefix(self) -> None:
        params = extract_params("/:id", RouterOptions(prefix="/api/v1/users"))
        assert params == {"id": 3}

    def test_param_in_prefix(self) -> None:
        params = extract_params("/posts/:post", RouterOptions(prefix="/users/:user"))
        assert params == {"user": 1, "post": 3}

    def test_duplicate_param(self) -> None:
        with pytest.raises(DuplicateParamError) as exc_info:
            extract_params("/a/:id/b/:id", RouterOptions())
        assert exc_info.value.name == "id"
        assert "'id'" in str(exc_info.value)

    def test_duplicate_across_prefix(self) -> None:
        with pytest.raises(DuplicateParamError):
            extract_params("/:id", RouterOptions(prefix="/users/:id"))

    def test_native_pattern_has_no_positions(self) -> None:
        assert extract_params(re.compile(r"^/x/(?P<y>\w+)"), RouterOptions()) == {}
