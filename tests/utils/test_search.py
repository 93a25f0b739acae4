from typing import Callable

import pytest

from mctui.models.instance import Instance
from mctui.utils.search import filter_instances, matches_query


def _names(instances: list[Instance]) -> list[str]:
    return [instance.name for instance in instances]


def test_empty_query_keeps_everything(scenario_instances: list[Instance]) -> None:
    result = filter_instances(scenario_instances, "")
    assert result == scenario_instances
    assert result is not scenario_instances


@pytest.mark.parametrize(
    "query,expected",
    [
        ("a", ["Alpha", "Beta", "Gamma"]),
        ("g", ["Gamma"]),
        ("G", ["Gamma"]),
        ("ALP", ["Alpha"]),
        ("mm", ["Gamma"]),
        ("z", []),
    ],
)
def test_substring_match_ignores_case(
    scenario_instances: list[Instance], query: str, expected: list[str]
) -> None:
    assert _names(filter_instances(scenario_instances, query)) == expected


def test_order_is_preserved(make_instance: Callable[..., Instance]) -> None:
    instances = [make_instance("Zeta pack"), make_instance("a pack"), make_instance("Mid Pack")]
    assert _names(filter_instances(instances, "pack")) == ["Zeta pack", "a pack", "Mid Pack"]


def test_filter_is_idempotent(scenario_instances: list[Instance]) -> None:
    once = filter_instances(scenario_instances, "a")
    assert filter_instances(once, "a") == once


def test_query_is_not_a_pattern(make_instance: Callable[..., Instance]) -> None:
    instances = [make_instance("Create (1.20)"), make_instance("Create 1.20")]
    assert _names(filter_instances(instances, "(1.")) == ["Create (1.20)"]
    assert _names(filter_instances(instances, ".*")) == []


def test_matches_query_casefold(make_instance: Callable[..., Instance]) -> None:
    assert matches_query(make_instance("Straße"), "STRASSE")
