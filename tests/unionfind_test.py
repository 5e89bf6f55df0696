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

from unionfind.disjoint_set import DisjointSet
from unionfind import unionfind
from unionfind.unionfind import Command
import pytest
from test_helper import mkdtemp, run_unionfind


@pytest.mark.parametrize(
    "args, expected",
    [
        ((), ()),
        (("find", "5"), (Command("find", (5,)),)),
        (
            ("union", "1", "2", "connected", "2", "1"),
            (Command("union", (1, 2)), Command("connected", (2, 1))),
        ),
    ],
)
def test_parse_commands(args, expected):
    assert tuple(unionfind.parse_commands(args)) == expected


@pytest.mark.parametrize(
    "args",
    [
        ("merge", "1", "2"),
        ("union", "1"),
        ("find",),
        ("find", "one"),
    ],
)
def test_parse_bad_commands(args):
    with pytest.raises(ValueError):
        tuple(unionfind.parse_commands(args))


def test_run_command():
    dj = DisjointSet(10)
    assert unionfind.run_command(dj, Command("union", (1, 2))) == "union 1 2"
    assert unionfind.run_command(dj, Command("connected", (2, 1))) == "connected 2 1: true"
    assert unionfind.run_command(dj, Command("connected", (0, 1))) == "connected 0 1: false"
    assert unionfind.run_command(dj, Command("find", (2,))) == "find 2: 1"
    assert unionfind.stats_line(dj) == "Components: 9 | Operations: 11"


def test_cli_scenario():
    result, lines = run_unionfind(
        (
            "union", "1", "2",
            "union", "3", "4",
            "connected", "1", "4",
            "union", "2", "3",
            "connected", "1", "4",
        )
    )

    assert result.returncode == 0
    assert lines == (
        "union 1 2",
        "union 3 4",
        "connected 1 4: false",
        "union 2 3",
        "connected 1 4: true",
        "Components: 7 | Operations: 16",
        "Union operation on nodes 1 and 2",
        "Union operation on nodes 3 and 4",
        "Find operation on nodes 1 and 4",
        "Union operation on nodes 2 and 3",
        "Find operation on nodes 1 and 4",
    )
    assert "Merged set 2 into set 1" in result.stderr


def test_cli_rejects_out_of_range():
    result, lines = run_unionfind(("find", "10", "find", "9"), check=False)

    assert result.returncode == 1
    assert lines == ("find 9: 9", "Components: 10 | Operations: 1")
    assert "Rejected find 10" in result.stderr


def test_cli_bad_command():
    result, _ = run_unionfind(("merge", "1", "2"), check=False)
    assert result.returncode != 0
    assert "Unknown command 'merge'" in result.stderr


def test_cli_state_file():
    state_file = mkdtemp() / "state.json"

    run_unionfind(("--state_file", state_file, "union", "0", "1"))
    assert DisjointSet.loadjson(state_file).sorted()[0] == (0, 1)

    _, lines = run_unionfind(("--state_file", state_file, "connected", "1", "0"))
    assert lines == (
        "connected 1 0: true",
        "Components: 9 | Operations: 6",
        "Union operation on nodes 0 and 1",
        "Find operation on nodes 1 and 0",
    )
    assert DisjointSet.loadjson(state_file).operation_count == 6


def test_cli_state_file_size_mismatch():
    state_file = mkdtemp() / "state.json"
    DisjointSet(4).savejson(state_file)

    result, _ = run_unionfind(("--state_file", state_file, "find", "0"), check=False)
    assert result.returncode != 0
    assert "holds 4 elements, configured for 10" in result.stderr


def test_cli_config_file():
    config_file = mkdtemp() / "small.toml"
    config_file.write_text("size = 3\nshow_log = false\n")

    _, lines = run_unionfind((config_file, "find", "2"))
    assert lines == ("find 2: 2", "Components: 3 | Operations: 1")

    result, _ = run_unionfind((config_file, "find", "3"), check=False)
    assert result.returncode == 1


def test_cli_negative_element_after_separator():
    result, lines = run_unionfind(("--", "find", "-1", "find", "0"), check=False)

    assert result.returncode == 1
    assert lines[:2] == ("find 0: 0", "Components: 10 | Operations: 1")
    assert "Rejected find -1" in result.stderr
