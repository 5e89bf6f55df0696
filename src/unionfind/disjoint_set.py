# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Disjoint-set forest over the integers 0..size-1.

https://en.wikipedia.org/wiki/Disjoint-set_data_structure

Path compression on find, union by rank. Every find step is counted and
every query or merge is recorded in a human readable operation log, which
is what front ends display as "Operations" and the log pane.

Union listeners are called synchronously, in registration order, with
(new_root, absorbed_root) whenever a union actually merges two sets.
"""

from absl import logging
import collections
import dataclasses
import json
from pathlib import Path
from typing import Callable, FrozenSet, List, Tuple


UnionListener = Callable[[int, int], None]


_STATE_VERSION = (1, 0, 0)


class DisjointSetError(Exception):
    pass


class InvalidArgument(DisjointSetError, ValueError):
    pass


class IndexOutOfRange(DisjointSetError, IndexError):
    pass


@dataclasses.dataclass(frozen=True)
class DisjointSetState:
    """Everything needed to rebuild a DisjointSet. Listeners excluded."""

    size: int
    parent: Tuple[int, ...]
    rank: Tuple[int, ...]
    operation_log: Tuple[str, ...] = ()
    operation_count: int = 0

    def validate(self) -> "DisjointSetState":
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if len(self.parent) != self.size or len(self.rank) != self.size:
            raise ValueError(
                f"parent ({len(self.parent)}) and rank ({len(self.rank)}) "
                f"must both have {self.size} entries"
            )
        bad_parents = [p for p in self.parent if not 0 <= p < self.size]
        if bad_parents:
            raise ValueError(f"parent entries out of range: {bad_parents}")
        if any(r < 0 for r in self.rank):
            raise ValueError(f"rank must be zero or positive: {self.rank}")
        if self.operation_count < 0:
            raise ValueError("operation_count must be zero or positive")
        reaches_root = set()
        for e in range(self.size):
            path = set()
            while self.parent[e] != e and e not in reaches_root:
                if e in path:
                    raise ValueError(f"parent pointers cycle through {e}")
                path.add(e)
                e = self.parent[e]
            reaches_root.update(path)
        return self


class DisjointSet:
    def __init__(self, size: int):
        if size <= 0:
            raise InvalidArgument(f"size must be positive, got {size}")
        self._parent = list(range(size))
        self._rank = [0] * size
        self._listeners: List[UnionListener] = []
        self._operation_log: List[str] = []
        self._operation_count = 0

    @property
    def size(self) -> int:
        return len(self._parent)

    @property
    def operation_count(self) -> int:
        return self._operation_count

    @property
    def operation_log(self) -> Tuple[str, ...]:
        return tuple(self._operation_log)

    def component_count(self) -> int:
        return sum(1 for e, p in enumerate(self._parent) if e == p)

    def add_union_listener(self, listener: UnionListener):
        self._listeners.append(listener)

    def _check_index(self, e: int):
        if not 0 <= e < len(self._parent):
            raise IndexOutOfRange(f"{e} is not in [0, {len(self._parent)})")

    # find with path compression
    def find(self, e: int) -> int:
        self._check_index(e)
        path = [e]
        while self._parent[path[-1]] != path[-1]:
            path.append(self._parent[path[-1]])
        # one count per step, as if find recursed once per node on the path
        self._operation_count += len(path)
        root = path[-1]
        for node in path:
            self._parent[node] = root
        return root

    # union by rank
    def union(self, p: int, q: int):
        self._check_index(p)
        self._check_index(q)
        p_root = self.find(p)
        q_root = self.find(q)
        if p_root == q_root:
            return  # already in the same set

        if self._rank[p_root] < self._rank[q_root]:
            new_root, absorbed = q_root, p_root
        else:
            new_root, absorbed = p_root, q_root

        self._parent[absorbed] = new_root
        if self._rank[new_root] == self._rank[absorbed]:
            self._rank[new_root] += 1

        for listener in self._listeners:
            listener(new_root, absorbed)
        self._log("Union", p, q)

    def connected(self, p: int, q: int) -> bool:
        self._check_index(p)
        self._check_index(q)
        # the query itself counts, on top of its two finds
        self._operation_count += 1
        result = self.find(p) == self.find(q)
        self._log("Find", p, q)
        return result

    def _log(self, operation: str, p: int, q: int):
        self._operation_log.append(f"{operation} operation on nodes {p} and {q}")

    def _root(self, e: int) -> int:
        # no compression, no counting
        while self._parent[e] != e:
            e = self._parent[e]
        return e

    def sets(self) -> FrozenSet[FrozenSet[int]]:
        sets = collections.defaultdict(set)
        for e in range(len(self._parent)):
            sets[self._root(e)].add(e)
        return frozenset(frozenset(s) for s in sets.values())

    def sorted(self) -> Tuple[Tuple[int, ...], ...]:
        """Sorted tuple of sorted tuples edition of sets()."""
        return tuple(sorted(tuple(sorted(s)) for s in self.sets()))

    def snapshot(self) -> DisjointSetState:
        return DisjointSetState(
            size=self.size,
            parent=tuple(self._parent),
            rank=tuple(self._rank),
            operation_log=tuple(self._operation_log),
            operation_count=self._operation_count,
        )

    @classmethod
    def restore(cls, state: DisjointSetState) -> "DisjointSet":
        """A new DisjointSet equivalent to the one state was taken from.

        Listeners are not part of the state; re-attach them after restoring.
        """
        state.validate()
        dj = cls(state.size)
        dj._parent = list(state.parent)
        dj._rank = list(state.rank)
        dj._operation_log = list(state.operation_log)
        dj._operation_count = state.operation_count
        return dj

    def to_json(self) -> str:
        state = self.snapshot()
        json_dict = {
            "version": ".".join(str(v) for v in _STATE_VERSION),
            "size": state.size,
            "parent": list(state.parent),
            "rank": list(state.rank),
            "operation_log": list(state.operation_log),
            "operation_count": state.operation_count,
        }
        return json.dumps(json_dict, indent=2)

    @classmethod
    def from_json(cls, string: str) -> "DisjointSet":
        json_dict = json.loads(string)
        if not isinstance(json_dict, dict):
            raise ValueError(f"Expected a JSON object, got {type(json_dict).__name__}")
        try:
            version = tuple(int(v) for v in json_dict.pop("version").split("."))
            if version != _STATE_VERSION:
                raise ValueError(f"Bad version {version}")
            state = DisjointSetState(
                size=int(json_dict.pop("size")),
                parent=tuple(int(v) for v in json_dict.pop("parent")),
                rank=tuple(int(v) for v in json_dict.pop("rank")),
                operation_log=tuple(str(s) for s in json_dict.pop("operation_log")),
                operation_count=int(json_dict.pop("operation_count")),
            )
        except KeyError as e:
            raise ValueError(f"Missing {e} in disjoint set state") from e
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed disjoint set state: {e}") from e
        if json_dict:
            raise ValueError(f"Unconsumed input {json_dict}")
        return cls.restore(state)

    @classmethod
    def loadjson(cls, input_file: Path) -> "DisjointSet":
        ext = input_file.suffix.lower()
        if ext != ".json":
            raise ValueError(f"Unknown format {input_file}")
        logging.debug("Loading disjoint set from %s", input_file)
        return cls.from_json(input_file.read_text(encoding="utf-8"))

    def savejson(self, output_file: Path):
        ext = output_file.suffix.lower()
        if ext != ".json":
            raise ValueError(f"Unknown format {output_file}")
        output_file.write_text(self.to_json(), encoding="utf-8")
        logging.debug("Wrote disjoint set of %d to %s", self.size, output_file)
