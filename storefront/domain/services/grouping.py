from typing import Callable, Dict, Hashable, List, Sequence, Tuple, TypeVar

from storefront.domain.exceptions import ConsistencyError

P = TypeVar("P")
J = TypeVar("J")
C = TypeVar("C")


def _by_id(parent) -> Hashable:
    return parent.id


def group(
    parents: Sequence[P],
    joined: Sequence[Tuple[J, C]],
    foreign_key: Callable[[J], Hashable],
    parent_key: Callable[[P], Hashable] = _by_id,
) -> List[Tuple[P, List[C]]]:
    """Attach children to their parents without re-querying per parent.

    ``joined`` is the result of a single query correlated to ``parents`` by
    parent id. Every parent is returned exactly once, in its original position,
    with the children in the order the query produced them. A parent without
    matches gets an empty list.

    Raises ConsistencyError when a join row points at a parent that is not in
    ``parents``: the two queries were not built from the same id set.
    """
    children_by_parent: Dict[Hashable, List[C]] = {}
    for parent in parents:
        children_by_parent.setdefault(parent_key(parent), [])

    for join_row, child in joined:
        key = foreign_key(join_row)
        bucket = children_by_parent.get(key)
        if bucket is None:
            raise ConsistencyError(f"Join row references parent {key!r} outside the current page")
        bucket.append(child)

    return [(parent, children_by_parent[parent_key(parent)]) for parent in parents]


def group_owned(
    parents: Sequence[P],
    children: Sequence[C],
    foreign_key: Callable[[C], Hashable],
    parent_key: Callable[[P], Hashable] = _by_id,
) -> List[Tuple[P, List[C]]]:
    """Same as ``group`` for children that carry the parent id themselves."""
    return group(parents, [(child, child) for child in children], foreign_key, parent_key)
