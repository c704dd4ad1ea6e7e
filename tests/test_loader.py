"""
Test Rule Files Module
=====================

Unit tests for rule file loading, saving and template helpers.
"""

import json
import logging
import pytest
import yaml
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import Config
from core.exceptions import InvalidConfiguration
from rules.defaults import DEFAULT_RULES, DEFAULT_REPLIES
from rules.engine import MatcherConfig, ResponseMatcher
from rules.loader import (
    build_matcher,
    check_placeholders,
    default_matcher_config,
    default_rule_data,
    load_matcher_config,
    load_or_create,
    save_matcher_config,
)
from rules.templates import interpolate, placeholders


RULE_YAML = """
rules:
  - name: weather
    matcher: "weather in (\\\\w+)"
    replies:
      - "Is it nice in $1?"
  - name: hello
    matcher: "hello"
    replies:
      - "Hi!"
defaultReplies:
  - "Go on."
"""


class TestTemplates:
    """Tests for template helpers."""

    def test_interpolate(self):
        """Test placeholder interpolation."""
        assert interpolate("Why do you feel $1?", ("sad",)) == "Why do you feel sad?"

    def test_interpolate_skips_none(self):
        """Test that None groups are skipped."""
        assert interpolate("$1 and $2", (None, "b")) == "$1 and b"

    def test_interpolate_first_occurrence_only(self):
        """Test that only the first occurrence is replaced."""
        assert interpolate("$1 $1", ("x",)) == "x $1"

    def test_interpolate_no_groups(self):
        """Test interpolation without groups."""
        assert interpolate("Plain $1", ()) == "Plain $1"

    def test_placeholders(self):
        """Test placeholder extraction."""
        assert placeholders("$2 then $1 then $2") == [1, 2]
        assert placeholders("no placeholders") == []


class TestLoadMatcherConfig:
    """Tests for reading rule files."""

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML rule file."""
        path = tmp_path / "rules.yaml"
        path.write_text(RULE_YAML, encoding="utf-8")

        config = load_matcher_config(path)

        assert [rule.name for rule in config.rules] == ["weather", "hello"]
        assert config.default_replies == ("Go on.",)

        matcher = ResponseMatcher(config)
        assert matcher.resolve("How is the WEATHER in Paris") == "Is it nice in Paris?"
        assert matcher.resolve("purple") == "Go on."

    def test_load_json(self, tmp_path):
        """Test loading a JSON rule file."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({
            "rules": [{"matcher": "I feel (.*)", "replies": ["Why $1?"]}],
            "default_replies": ["Hmm."],
        }), encoding="utf-8")

        config = load_matcher_config(path)

        assert config.rules[0].pattern == "I feel (.*)"
        assert config.default_replies == ("Hmm.",)

    def test_missing_file(self, tmp_path):
        """Test missing file."""
        with pytest.raises(InvalidConfiguration) as exc_info:
            load_matcher_config(tmp_path / "missing.yaml")
        assert "path" in exc_info.value.details

    @pytest.mark.parametrize("filename", ["rules.yaml", "rules.json"])
    def test_non_utf8_file(self, tmp_path, filename):
        """Test that undecodable bytes are reported as a configuration error."""
        path = tmp_path / filename
        path.write_bytes(b"rules:\n  - matcher: \xff\xfe\n")

        with pytest.raises(InvalidConfiguration) as exc_info:
            load_matcher_config(path)
        assert exc_info.value.details["path"] == str(path)

    def test_malformed_yaml(self, tmp_path):
        """Test malformed yaml."""
        path = tmp_path / "rules.yaml"
        path.write_text("rules: [unclosed", encoding="utf-8")
        with pytest.raises(InvalidConfiguration):
            load_matcher_config(path)

    def test_malformed_json(self, tmp_path):
        """Test malformed json."""
        path = tmp_path / "rules.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidConfiguration):
            load_matcher_config(path)

    def test_invalid_rule_reports_path(self, tmp_path):
        """Test invalid rule reports path."""
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  - matcher: '(oops'\n    replies: ['x']\n", encoding="utf-8")
        with pytest.raises(InvalidConfiguration) as exc_info:
            load_matcher_config(path)
        assert exc_info.value.details["path"] == str(path)

    def test_empty_file_loads_but_matcher_rejects(self, tmp_path):
        """Test empty file loads but matcher rejects."""
        path = tmp_path / "rules.yaml"
        path.write_text("", encoding="utf-8")
        config = load_matcher_config(path)
        with pytest.raises(InvalidConfiguration):
            ResponseMatcher(config)

    def test_dangling_placeholder_warns(self, tmp_path, caplog):
        """Test dangling placeholder warns."""
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n  - name: hi\n    matcher: 'hello'\n    replies: ['Hi $1']\n"
            "defaultReplies: ['Ok']\n",
            encoding="utf-8"
        )
        with caplog.at_level(logging.WARNING, logger="eliza_chat"):
            load_matcher_config(path)
        assert "placeholder" in caplog.text


class TestSaveMatcherConfig:
    """Tests for writing rule files."""

    @pytest.mark.parametrize("name", ["rules.yaml", "rules.json"])
    def test_save_then_load_keeps_order(self, tmp_path, name):
        """Test save then load keeps order."""
        path = tmp_path / "nested" / name
        save_matcher_config(default_matcher_config(), path)

        loaded = load_matcher_config(path)

        assert [rule.name for rule in loaded.rules] == [r["name"] for r in DEFAULT_RULES]
        assert [rule.pattern for rule in loaded.rules] == [r["matcher"] for r in DEFAULT_RULES]
        assert loaded.default_replies == tuple(DEFAULT_REPLIES)

    def test_yaml_layout(self, tmp_path):
        """Test saved YAML layout."""
        path = tmp_path / "rules.yaml"
        save_matcher_config(default_matcher_config(), path)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert list(data.keys()) == ["rules", "defaultReplies"]


class TestDefaults:
    """Tests for the built-in rule table."""

    def test_default_rule_data_is_a_copy(self):
        """Test default rule data is a copy."""
        data = default_rule_data()
        data["rules"][0]["replies"].append("extra")
        assert "extra" not in DEFAULT_RULES[0]["replies"]

    def test_builtin_placeholders_are_backed_by_groups(self):
        """Test built-in placeholders are backed by groups."""
        assert check_placeholders(default_matcher_config()) == 0

    def test_load_or_create_writes_file(self, tmp_path):
        """Test load or create writes file."""
        path = tmp_path / "rules.yaml"
        config = load_or_create(path)
        assert path.exists()
        assert len(config.rules) == len(DEFAULT_RULES)

    def test_load_or_create_reads_existing(self, tmp_path):
        """Test load or create reads existing."""
        path = tmp_path / "rules.yaml"
        path.write_text(RULE_YAML, encoding="utf-8")
        config = load_or_create(path)
        assert len(config.rules) == 2


class TestBuildMatcher:
    """Tests for building a matcher from application config."""

    def test_builtin_table(self):
        """Test built-in table when no rules file is set."""
        matcher = build_matcher(Config())
        assert len(matcher.rules) == len(DEFAULT_RULES)

    def test_rules_file(self, tmp_path):
        """Test matcher built from a rules file."""
        path = tmp_path / "rules.yaml"
        path.write_text(RULE_YAML, encoding="utf-8")
        config = Config()
        config.responder.rules_file = str(path)

        matcher = build_matcher(config)

        assert matcher.resolve("hello") == "Hi!"

    def test_missing_rules_file(self, tmp_path):
        """Test missing rules file."""
        config = Config()
        config.responder.rules_file = str(tmp_path / "missing.yaml")
        with pytest.raises(InvalidConfiguration):
            build_matcher(config)

    def test_create_rules_file(self, tmp_path):
        """Test that a missing rules file is created."""
        config = Config()
        config.responder.rules_file = str(tmp_path / "rules.yaml")
        config.responder.create_rules_file = True

        build_matcher(config)

        assert (tmp_path / "rules.yaml").exists()

    def test_seed_is_reproducible(self):
        """Test seed is reproducible."""
        config = Config()
        config.responder.random_seed = 42
        texts = ["hello", "I am sad", "purple elephants", "thanks"] * 5

        first, second = build_matcher(config), build_matcher(config)

        assert [first.resolve(t) for t in texts] == [second.resolve(t) for t in texts]


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
