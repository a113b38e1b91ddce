"""
test_parser.py - 설정 → AppleScript 변환 테스트
"""

import pytest

from tplrun.core.parser import STEP_RENDERERS, parse, quote
from tplrun.domain.errors import ConfigError


class TestQuote:

    def test_plain(self):
        assert quote("hello") == '"hello"'

    def test_escapes_quotes_and_backslashes(self):
        assert quote('say "hi" \\ bye') == '"say \\"hi\\" \\\\ bye"'

    def test_non_string(self):
        assert quote(42) == '"42"'


class TestParse:

    def test_empty_config(self):
        assert parse({}) == ""

    def test_no_steps(self):
        assert parse({"application": "iTerm"}) == ""

    def test_sample_config(self, sample_config: dict):
        script = parse(sample_config)

        assert script.splitlines() == [
            'tell application "iTerm" to activate',
            'tell application "iTerm"',
            '    do script "npm start"',
            "end tell",
            "delay 2",
            'open location "http://localhost:3000"',
        ]

    def test_default_application(self):
        script = parse({"steps": [{"run": "ls"}]})

        assert 'tell application "Terminal"' in script

    @pytest.mark.parametrize(
        ("step", "expected"),
        [
            ({"keystroke": "abc"}, 'tell application "System Events" to keystroke "abc"'),
            ({"say": "Done"}, 'say "Done"'),
            ({"notify": "Ready"}, 'display notification "Ready" with title "tplrun"'),
            ({"delay": 0.5}, "delay 0.5"),
        ],
    )
    def test_step_kinds(self, step, expected):
        assert parse({"steps": [step]}) == expected

    def test_every_kind_has_renderer(self):
        assert set(STEP_RENDERERS) == {
            "activate", "open", "run", "keystroke", "delay", "say", "notify",
        }

    def test_is_pure(self, sample_config: dict):
        assert parse(sample_config) == parse(sample_config)


class TestParseErrors:

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError) as exc_info:
            parse(["run"])  # type: ignore[arg-type]

        assert exc_info.value.code == "INVALID_CONFIG"

    def test_steps_not_a_list(self):
        with pytest.raises(ConfigError) as exc_info:
            parse({"steps": {"run": "ls"}})

        assert exc_info.value.context["type"] == "dict"

    def test_unknown_kind(self):
        with pytest.raises(ConfigError) as exc_info:
            parse({"steps": [{"say": "ok"}, {"explode": True}]})

        assert exc_info.value.context["step"] == 1
        assert exc_info.value.context["kind"] == "explode"

    @pytest.mark.parametrize("step", [{"run": "a", "say": "b"}, "run ls", {}])
    def test_malformed_step(self, step):
        with pytest.raises(ConfigError) as exc_info:
            parse({"steps": [step]})

        assert "exactly one key" in exc_info.value.message

    @pytest.mark.parametrize("value", [-1, "soon", True])
    def test_bad_delay(self, value):
        with pytest.raises(ConfigError) as exc_info:
            parse({"steps": [{"delay": value}]})

        assert exc_info.value.context["kind"] == "delay"
