"""Tests for the adapter toggle engine and properties file model."""

from pathlib import PurePosixPath

import pytest

from acautils.adapters.toggle import (
    REASON_NON_BINARY,
    REASON_NOT_FOUND,
    PropertiesFile,
    ToggleError,
    properties_path,
    toggle,
    validate_env_name,
)
from acautils.findings.models import ChangeRecord, Skip


class TestPropertiesFile:
    def test_render_is_lossless(self):
        content = "a=1\r\n# comment\n\n  b : 0  \nnot a pair\n"
        assert PropertiesFile.parse(content).render() == content

    def test_comments_not_indexed(self):
        props = PropertiesFile.parse("#a=0\n;b=1\nc=0")
        assert props.index() == {"c": 2}

    def test_last_occurrence_wins(self):
        props = PropertiesFile.parse("x=0\ny=1\nx=1\n")
        assert props.index()["x"] == 2


class TestToggle:
    def test_flips_requested_keys(self, sample_properties):
        result = toggle(sample_properties, ["billing.adapter", "search.adapter"], "env/dev/parameters.properties")
        assert result.changed is True
        assert result.content == "billing.adapter=1\nsearch.adapter=0\n# note\n"
        assert result.changes == [
            ChangeRecord("billing.adapter", "0", "1", "env/dev/parameters.properties"),
            ChangeRecord("search.adapter", "1", "0", "env/dev/parameters.properties"),
        ]
        assert result.skipped == []

    def test_missing_key_is_skipped(self, sample_properties):
        result = toggle(sample_properties, ["missing.adapter"])
        assert result.changed is False
        assert result.changes == []
        assert result.skipped == [Skip("missing.adapter", REASON_NOT_FOUND)]
        assert result.content == sample_properties

    def test_partial_success(self, sample_properties):
        result = toggle(sample_properties, ["missing.adapter", "search.adapter"])
        assert [c.adapter for c in result.changes] == ["search.adapter"]
        assert [s.key for s in result.skipped] == ["missing.adapter"]

    def test_non_binary_value_left_untouched(self):
        content = "a.adapter=yes\nb.adapter=0\n"
        result = toggle(content, ["a.adapter", "b.adapter"])
        assert result.skipped == [Skip("a.adapter", REASON_NON_BINARY, "yes")]
        assert result.content == "a.adapter=yes\nb.adapter=1\n"

    @pytest.mark.parametrize("value", ['"0"', "01", "2", "true", "0 # off"])
    def test_only_bare_zero_and_one_flip(self, value):
        result = toggle(f"flag={value}\n", ["flag"])
        assert result.changed is False
        assert result.skipped[0].reason == REASON_NON_BINARY

    def test_commented_key_not_found(self):
        result = toggle("#a.adapter=0\n", ["a.adapter"])
        assert result.skipped == [Skip("a.adapter", REASON_NOT_FOUND)]

    def test_toggle_twice_restores(self, sample_properties):
        once = toggle(sample_properties, ["billing.adapter"])
        twice = toggle(once.content, ["billing.adapter"])
        assert twice.content == sample_properties
        assert twice.changes[0].old_value == "1"
        assert twice.changes[0].new_value == "0"

    def test_separator_normalised(self):
        result = toggle("# header\n  flag :  1  \nother = 0\n", ["flag"])
        assert result.content == "# header\nflag=0\nother = 0\n"
        assert result.changes[0].old_value == "1"

    def test_line_count_and_untouched_lines_preserved(self):
        lines = ["# top", "", "a=0", "b: 1", "free text", "c=1", ""]
        result = toggle("\n".join(lines), ["b"])
        out = result.content.split("\n")
        assert len(out) == len(lines)
        for i, (before, after) in enumerate(zip(lines, out)):
            if i == 3:
                assert after == "b=0"
            else:
                assert after == before

    def test_crlf_passthrough(self):
        result = toggle("a=0\r\nb=1\r\nc=x\r\n", ["a"])
        assert result.content == "a=1\nb=1\r\nc=x\r\n"

    def test_duplicate_key_last_wins(self):
        result = toggle("x=0\nx=1\n", ["x"])
        assert result.content == "x=0\nx=0\n"
        assert result.changes == [ChangeRecord("x", "1", "0")]

    def test_duplicate_requests_flip_once(self, sample_properties):
        result = toggle(sample_properties, ["billing.adapter", "billing.adapter"])
        assert len(result.changes) == 1
        assert result.content.startswith("billing.adapter=1\n")

    def test_no_trailing_newline_kept(self):
        assert toggle("a=1", ["a"]).content == "a=0"

    def test_empty_request(self, sample_properties):
        result = toggle(sample_properties, [])
        assert result.changed is False
        assert result.skipped == []


class TestEnvironmentPaths:
    def test_properties_path(self):
        assert properties_path("env/{env}/parameters.properties", "dev") == PurePosixPath(
            "env/dev/parameters.properties"
        )

    @pytest.mark.parametrize("env", ["", "  ", "..", "../prod", "dev/../../x", "a/b", "a\\b"])
    def test_invalid_env(self, env):
        with pytest.raises(ToggleError):
            validate_env_name(env)

    def test_env_trimmed(self):
        assert validate_env_name(" qa ") == "qa"

    @pytest.mark.parametrize("template", ["/etc/{env}.properties", "../{env}/parameters.properties"])
    def test_template_must_stay_inside_checkout(self, template):
        with pytest.raises(ToggleError):
            properties_path(template, "dev")

    @pytest.mark.parametrize(
        "template", ["env/{env}/{name}.properties", "{0}/{env}.properties", "env/{env"]
    )
    def test_unknown_placeholders_rejected(self, template):
        with pytest.raises(ToggleError, match="invalid properties path template"):
            properties_path(template, "dev")
