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

"""Runs union / connectivity queries against a disjoint set of nodes.

Commands are read from the command line, e.g.:

unionfind --state_file state.json union 1 2 union 3 4 connected 1 4 find 3

Each command prints one result line, followed by a statistics line,
"Components: 8 | Operations: 10", and the operation log. When a state file
is configured the set is loaded from it (if present) and saved back.

A config .toml may be passed as an argument; flags override it.

Negative elements look like flags; put them after a "--" separator, e.g.
"unionfind -- find -1", to have them reported as out of range.
"""

from absl import app
from absl import flags
from absl import logging
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Tuple

from unionfind import config
from unionfind.config import UnionFindConfig
from unionfind.disjoint_set import DisjointSet, IndexOutOfRange
from unionfind import util


FLAGS = flags.FLAGS


flags.DEFINE_string("output_file", "-", "Output filename ('-' means stdout)")
flags.DEFINE_string(
    "log_level",
    "INFO",
    "The threshold for what messages will be logged. One of DEBUG, INFO, WARN, "
    "ERROR, or FATAL.",
)


# command name => number of element arguments
_COMMAND_ARITY = {
    "union": 2,
    "connected": 2,
    "find": 1,
}


class Command(NamedTuple):
    name: str
    elements: Tuple[int, ...]

    def __str__(self):
        return " ".join((self.name,) + tuple(str(e) for e in self.elements))


def parse_commands(args: Iterable[str]) -> Iterator[Command]:
    args = list(args)
    i = 0
    while i < len(args):
        name = args[i]
        if name not in _COMMAND_ARITY:
            raise ValueError(
                f"Unknown command {name!r}, expected one of {sorted(_COMMAND_ARITY)}"
            )
        arity = _COMMAND_ARITY[name]
        raw_elements = args[i + 1 : i + 1 + arity]
        if len(raw_elements) != arity:
            raise ValueError(f"{name} takes {arity} element(s), got {raw_elements}")
        try:
            elements = tuple(int(e) for e in raw_elements)
        except ValueError as e:
            raise ValueError(f"Elements must be integers: {name} {raw_elements}") from e
        yield Command(name, elements)
        i += 1 + arity


def run_command(dj: DisjointSet, command: Command) -> str:
    if command.name == "union":
        dj.union(*command.elements)
        return str(command)
    if command.name == "connected":
        connected = dj.connected(*command.elements)
        return f"{command}: {str(connected).lower()}"
    if command.name == "find":
        return f"{command}: {dj.find(*command.elements)}"
    raise ValueError(f"Unknown command {command.name}")


def stats_line(dj: DisjointSet) -> str:
    return f"Components: {dj.component_count()} | Operations: {dj.operation_count}"


def _load_disjoint_set(uf_config: UnionFindConfig) -> DisjointSet:
    if uf_config.has_state_file:
        state_file = Path(uf_config.state_file)
        if state_file.is_file():
            dj = DisjointSet.loadjson(state_file)
            if dj.size != uf_config.size:
                raise ValueError(
                    f"{state_file} holds {dj.size} elements, configured for {uf_config.size}"
                )
            logging.info("Loaded %s", state_file)
            return dj
    return DisjointSet(uf_config.size)


def _log_union(new_root: int, absorbed_root: int):
    logging.info("Merged set %d into set %d", absorbed_root, new_root)


def _run(argv):
    logging.set_verbosity(FLAGS.log_level)

    config_files = tuple(Path(a) for a in argv[1:] if a.endswith(".toml"))
    if len(config_files) > 1:
        raise ValueError(f"At most one config file, got {config_files}")
    uf_config = config.load(config_files[0] if config_files else None)
    commands = tuple(
        parse_commands(a for a in argv[1:] if a != "--" and not a.endswith(".toml"))
    )

    dj = _load_disjoint_set(uf_config)
    # listeners aren't persisted, attach after load
    dj.add_union_listener(_log_union)

    rejected = 0
    with util.file_printer(FLAGS.output_file) as print:
        for command in commands:
            try:
                print(run_command(dj, command))
            except IndexOutOfRange as e:
                logging.error("Rejected %s: %s", command, e)
                rejected += 1
        if uf_config.show_stats:
            print(stats_line(dj))
        if uf_config.show_log:
            for entry in dj.operation_log:
                print(entry)

    if uf_config.has_state_file:
        dj.savejson(Path(uf_config.state_file))
        logging.info("Wrote %s", uf_config.state_file)

    return 1 if rejected else 0


def main():
    # We don't seem to be __main__ when run as cli tool installed by setuptools
    app.run(_run)


if __name__ == "__main__":
    app.run(_run)
