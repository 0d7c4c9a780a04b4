"""Tests for the exclusion engine and default ignore rules."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from filelist.excludes import ExclusionRuleSet, escape_path
from filelist.types import GlobRule, LiteralRule, PredicateRule, RegexRule


def test_escape_path_matches_either_separator():
    rx = re.compile(escape_path("one/exclude"))
    assert rx.search("one/exclude/file.txt")
    assert rx.search("one\\exclude\\file.txt")
    assert not rx.search("one-exclude/file.txt")


def test_escape_path_escapes_regex_chars():
    rx = re.compile(escape_path("a+b (1).txt"))
    assert rx.search("dir/a+b (1).txt")
    assert not rx.search("dir/aab 1.txt")


def test_empty_rule_set_matches_nothing():
    rules = ExclusionRuleSet.empty()
    assert not rules.should_exclude("")
    assert not rules.should_exclude("anything/at/all")


@pytest.mark.parametrize(
    "path",
    [".git/config", "src/.svn/entries", "CVS", "lib/CVS/Root", "x.bak", "notes.txt~", ".git"],
)
def test_default_patterns_exclude(path: str):
    assert ExclusionRuleSet().should_exclude(path)


@pytest.mark.parametrize(
    "path", [".github/workflows/ci.yml", ".gitignore", "backup.txt", "src/CVSfile", "a.bak.txt"]
)
def test_default_patterns_keep(path: str):
    assert not ExclusionRuleSet().should_exclude(path)


def test_default_core_predicate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "core").write_text("dump")
    (tmp_path / "lib" / "core").mkdir(parents=True)
    (tmp_path / "corefile").write_text("not a core dump")

    rules = ExclusionRuleSet()
    assert rules.should_exclude("core")
    assert not rules.should_exclude("lib/core")
    assert not rules.should_exclude("corefile")
    # Missing at check time: not excluded
    assert not rules.should_exclude("src/core")


def test_core_predicate_checks_at_call_time(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    rules = ExclusionRuleSet()
    assert not rules.should_exclude("core")
    (tmp_path / "core").write_text("dump")
    assert rules.should_exclude("core")


def test_literal_rule_is_substring_match():
    rules = ExclusionRuleSet.empty()
    rules.add(LiteralRule("tmp/one/exclude"))
    assert rules.should_exclude("test/tmp/one/exclude/file.txt")
    assert not rules.should_exclude("test/tmp/one/two/file.txt")


def test_regex_rule():
    rules = ExclusionRuleSet.empty()
    rules.add(RegexRule(re.compile(r"\.log$")))
    assert rules.should_exclude("out/run.log")
    assert not rules.should_exclude("out/run.log.txt")


def test_glob_rule_expands_at_compile_time(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "logs").mkdir()
    (tmp_path / "logs" / "a.log").write_text("a")
    (tmp_path / "logs" / "a.txt").write_text("a")

    rules = ExclusionRuleSet.empty()
    rules.add(GlobRule("logs/*.log"))
    assert rules.should_exclude("logs/a.log")
    assert not rules.should_exclude("logs/a.txt")
    # Expansion only covers files that existed when compiled
    assert not rules.should_exclude("logs/b.log")


def test_glob_rule_missing_base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    rules = ExclusionRuleSet.empty()
    rules.add(GlobRule("missing/*.log"))
    assert not rules.should_exclude("missing/a.log")


def test_adding_pattern_invalidates_compiled():
    rules = ExclusionRuleSet.empty()
    first = rules.compile()
    assert not rules.should_exclude("a.tmp")
    rules.add(LiteralRule("a.tmp"))
    assert rules.compile() is not first
    assert rules.should_exclude("a.tmp")


def test_adding_predicate_keeps_compiled():
    rules = ExclusionRuleSet.empty()
    rules.add(LiteralRule("x"))
    compiled = rules.compile()
    rules.add(PredicateRule(lambda p: p.endswith(".tmp")))
    assert rules.compile() is compiled
    assert rules.should_exclude("a.tmp")


def test_predicates_run_in_order_and_short_circuit():
    calls: list[str] = []

    def first(path: str) -> bool:
        calls.append("first")
        return True

    def second(path: str) -> bool:
        calls.append("second")
        return False

    rules = ExclusionRuleSet.empty()
    rules.add(PredicateRule(first))
    rules.add(PredicateRule(second))
    assert rules.should_exclude("a")
    assert calls == ["first"]


def test_clear_removes_defaults():
    rules = ExclusionRuleSet()
    assert rules.should_exclude(".git/config")
    rules.clear()
    assert rules.patterns == ()
    assert rules.predicates == ()
    assert not rules.should_exclude(".git/config")


def test_copy_is_independent():
    rules = ExclusionRuleSet.empty()
    rules.add(LiteralRule("a"))
    clone = rules.copy()
    clone.add(LiteralRule("b"))
    assert rules.patterns == (LiteralRule("a"),)
    assert clone.patterns == (LiteralRule("a"), LiteralRule("b"))
    assert not rules.should_exclude("b")
    assert clone.should_exclude("b")


def test_clear_on_one_set_leaves_defaults_for_others():
    rules = ExclusionRuleSet()
    rules.clear()
    assert ExclusionRuleSet().should_exclude(".svn/entries")


def test_regex_rule_backreference_after_defaults():
    rules = ExclusionRuleSet()
    rules.add(RegexRule(re.compile(r"(a)\1\.txt$")))
    assert rules.should_exclude("aa.txt")
    assert not rules.should_exclude("ab.txt")


def test_regex_rules_keep_their_own_flags():
    rules = ExclusionRuleSet.empty()
    rules.add(RegexRule(re.compile("readme", re.IGNORECASE)))
    rules.add(RegexRule(re.compile(r"^\w+\.py$", re.ASCII)))
    rules.add(RegexRule(re.compile(r"\.tmp$  # temp files", re.VERBOSE)))
    assert rules.should_exclude("README.md")
    assert rules.should_exclude("main.py")
    assert not rules.should_exclude("caf\u00e9.py")
    assert rules.should_exclude("a.tmp")


def test_regex_rules_with_same_group_names():
    rules = ExclusionRuleSet.empty()
    rules.add(RegexRule(re.compile(r"(?P<ext>\.tmp)$")))
    rules.add(RegexRule(re.compile(r"(?P<ext>\.log)$")))
    assert rules.should_exclude("a.tmp")
    assert rules.should_exclude("b.log")
    assert not rules.should_exclude("c.txt")


def test_adding_regex_keeps_compiled():
    rules = ExclusionRuleSet.empty()
    rules.add(LiteralRule("x"))
    compiled = rules.compile()
    rules.add(RegexRule(re.compile(r"\.tmp$")))
    assert rules.compile() is compiled
    assert rules.should_exclude("a.tmp")
    assert rules.regexes == (re.compile(r"\.tmp$"),)
