import io
import json

import pytest

from keyhunt.core import matchers
from keyhunt.core.hunt_logging import setup_logging
from keyhunt.core.matchers import (
    base_prefix,
    compile_dynamic_matchers,
    compile_exact_matchers,
    extract_base_prefixes,
)


def _by_target(matcher_list):
    return {m.target: m for m in matcher_list}


def test_extract_base_prefixes_groups_siblings() -> None:
    keys = [
        "expenseCategory.foo",
        "expenseCategory.bar",
        "status.open",
        "status.closed",
        "title",
    ]
    prefixes = extract_base_prefixes(keys)

    assert prefixes == {
        "expenseCategory": {"expenseCategory.foo", "expenseCategory.bar"},
        "status": {"status.open", "status.closed"},
    }


def test_prefix_is_text_before_last_separator() -> None:
    prefixes = extract_base_prefixes(["user.profile.name", "items[0].label", "plain"])

    assert prefixes == {"user.profile": {"user.profile.name"}, "items[0]": {"items[0].label"}}
    assert base_prefix("plain") is None
    assert base_prefix("a.b.c") == "a.b"


def test_grouping_ignores_input_order() -> None:
    keys = ["a.x", "b.y", "a.z"]
    assert extract_base_prefixes(keys) == extract_base_prefixes(list(reversed(keys)))


def test_one_exact_matcher_per_key() -> None:
    compiled = compile_exact_matchers(["hello.world", "foo.bar"])
    assert sorted(m.target for m in compiled) == ["foo.bar", "hello.world"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ('t("hello.world")', True),
        ("t('hello.world', { ns: 'App' })", True),
        ("hello.world", True),
        ('t("hello.worlds")', False),
        ('t("say.hello.world")', True),  # "." is a word boundary
        ('t("helloXworld")', False),  # the dot is escaped
    ],
)
def test_exact_matcher_literal_and_bounded(text, expected) -> None:
    (matcher,) = compile_exact_matchers(["hello.world"])
    assert matcher.matches(text) is expected


def test_exact_matcher_does_not_match_inside_identifier() -> None:
    (matcher,) = compile_exact_matchers(["id"])

    assert not matcher.matches("const validId = 1;")
    assert not matcher.matches("valid")
    assert matcher.matches("t('id')")


def test_exact_matcher_escapes_metacharacters() -> None:
    (matcher,) = compile_exact_matchers(["price+tax.total"])

    assert matcher.matches("t('price+tax.total')")
    assert not matcher.matches("t('priceetax.total')")


@pytest.mark.parametrize(
    "text",
    [
        "const key = `expenseCategory.${variable}`;",
        "t(`expenseCategory.${item.kind}`, { ns: 'App' })",
        "t('expenseCategory.${kind}')",
        't("expenseCategory.${kind}")',
        "Reimbursement:expenseCategory.${reimbursement.expenseCategory}",
    ],
)
def test_dynamic_matcher_covers_quoting_styles(text) -> None:
    compiled = _by_target(compile_dynamic_matchers(extract_base_prefixes(["expenseCategory.foo"])))
    assert compiled["expenseCategory"].matches(text)


@pytest.mark.parametrize(
    "text",
    [
        "`expenseCategory.${}`",  # needs content between the braces
        "`expenseCategory.foo`",
        "`expenseCategory${kind}`",
        "`expenseCategory.{kind}`",
    ],
)
def test_dynamic_matcher_rejects_non_dynamic_text(text) -> None:
    compiled = _by_target(compile_dynamic_matchers(extract_base_prefixes(["expenseCategory.foo"])))
    assert not compiled["expenseCategory"].matches(text)


def test_dynamic_matcher_for_nested_prefix() -> None:
    compiled = _by_target(compile_dynamic_matchers(extract_base_prefixes(["errors.http.404"])))

    assert compiled["errors.http"].matches("t(`errors.http.${status}`)")
    assert not compiled["errors.http"].matches("t(`errorsXhttp.${status}`)")


def test_uncompilable_pattern_is_skipped(monkeypatch) -> None:
    real = matchers.exact_pattern

    def broken_for_bad_key(key):
        return "(" if key == "bad.key" else real(key)

    monkeypatch.setattr(matchers, "exact_pattern", broken_for_bad_key)

    compiled = compile_exact_matchers(["good.key", "bad.key", "other"])

    assert sorted(m.target for m in compiled) == ["good.key", "other"]


def test_uncompilable_dynamic_pattern_is_skipped(monkeypatch) -> None:
    monkeypatch.setattr(matchers, "dynamic_pattern", lambda prefix: "[" if prefix == "a" else prefix)

    compiled = compile_dynamic_matchers({"a": {"a.x"}, "b": {"b.y"}})

    assert [m.target for m in compiled] == ["b"]


def test_skipped_matcher_is_logged_at_debug(monkeypatch) -> None:
    monkeypatch.setattr(matchers, "exact_pattern", lambda key: "(")

    stream = io.StringIO()
    setup_logging(level="INFO", log_file="", json_output=True, stream=stream)
    compile_exact_matchers(["bad.key"])
    assert "matcher_skipped" not in stream.getvalue()

    setup_logging(level="DEBUG", log_file="", json_output=True, stream=stream)
    compile_exact_matchers(["bad.key"])
    entry = json.loads(stream.getvalue().splitlines()[-1])
    assert entry["event_key"] == "matcher_skipped"
    assert entry["level"] == "debug"
    assert entry["target"] == "bad.key"
