"""Job forest assembly and employee name resolution."""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional

from burn.timetracker.models import JobCode, JobNode, User


def build_job_tree(jobcodes: Mapping[int, JobCode]) -> List[JobNode]:
    """
    Assemble job codes into a forest.

    Roots are codes whose parent_id is absent or 0. Siblings are ordered
    case-insensitively by name.
    """
    children_by_parent: Dict[Optional[int], List[JobCode]] = defaultdict(list)
    for jc in jobcodes.values():
        children_by_parent[None if jc.is_root else jc.parent_id].append(jc)

    def _children(parent: Optional[int], seen: frozenset) -> List[JobNode]:
        kids = sorted(children_by_parent.get(parent, []), key=lambda jc: jc.name.lower())
        return [
            JobNode(id=jc.id, name=jc.name, children=_children(jc.id, seen | {jc.id}))
            for jc in kids
            if jc.id not in seen
        ]

    return _children(None, frozenset())


def employee_names(user_ids: Iterable[int], users: Mapping[int, User]) -> List[str]:
    """Display names for the given user ids, unknown/blank dropped, sorted case-insensitively."""
    names = []
    for uid in set(user_ids):
        user = users.get(uid)
        if user is None:
            continue
        name = user.display_name
        if name:
            names.append(name)
    return sorted(names, key=str.casefold)


def prune_inactive(tree: List[JobNode], jobcodes: Mapping[int, JobCode]) -> List[JobNode]:
    """
    Drop inactive branches from a built forest.

    An inactive node stays when any descendant is active, so active jobs are
    never hidden behind an inactive parent.
    """
    kept = []
    for node in tree:
        children = prune_inactive(node.children, jobcodes)
        code = jobcodes.get(node.id)
        if children or code is None or code.active is not False:
            kept.append(JobNode(id=node.id, name=node.name, children=children))
    return kept
