"""Group, rank and render filtered records.

Runs on a single thread after the fan-in barrier. Keys with equal frequency are
ordered by ascending key so the report is deterministic for a given input
order.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from ..ir.model import Group, Record
from ..sdk.base import ReducerBase


def count_frequencies(records: Sequence[Record]) -> Dict[str, int]:
    freq: Dict[str, int] = defaultdict(int)
    for r in records:
        freq[r.key] += 1
    return dict(freq)


def rank_keys(freq: Dict[str, int]) -> List[str]:
    return sorted(freq, key=lambda k: (-freq[k], k))


def group_records(records: Sequence[Record]) -> Dict[str, List[Record]]:
    groups: Dict[str, List[Record]] = defaultdict(list)
    for r in records:
        groups[r.key].append(r)
    return dict(groups)


def build_groups(records: Sequence[Record]) -> List[Group]:
    freq = count_frequencies(records)
    members = group_records(records)
    return [Group(key=k, frequency=freq[k], members=tuple(members[k])) for k in rank_keys(freq)]


def render_report(groups: Sequence[Group]) -> str:
    lines: List[str] = []
    for g in groups:
        lines.append(f"{g.key}: {g.frequency}\n")
        lines.extend(f"- {m.label}, {m.value}\n" for m in g.members)
    return "".join(lines)


def reduce_records(records: Sequence[Record]) -> str:
    return render_report(build_groups(records))


class StateReducer(ReducerBase):
    def run(self, records: Sequence[Record]) -> str:
        return reduce_records(records)
