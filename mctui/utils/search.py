from typing import Sequence

from mctui.models.instance import Instance


def matches_query(instance: Instance, query: str) -> bool:
    return query.casefold() in instance.name.casefold()


def filter_instances(instances: Sequence[Instance], query: str) -> list[Instance]:
    """
    Instances whose name contains query, ignoring case, in their current order.

    An empty query matches everything.
    """
    if not query:
        return list(instances)
    return [instance for instance in instances if matches_query(instance, query)]
