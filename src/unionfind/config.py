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

from absl import flags
import importlib.resources as resources
from pathlib import Path
import toml
from typing import Any, MutableMapping, NamedTuple, Optional


FLAGS = flags.FLAGS


_DEFAULT_CONFIG_FILE = "_default.toml"


# we use None as a sentinel for flag not set; UnionFindConfig has the actual defaults.
# CLI flags override config file (which overrides default UnionFindConfig).
flags.DEFINE_integer("size", None, "Number of elements, numbered 0..size-1.")
flags.DEFINE_string(
    "state_file",
    None,
    "JSON file to load state from (if it exists) and save state to. "
    "Empty means state is not persisted.",
)
flags.DEFINE_bool("show_log", None, "Whether to print the operation log.")
flags.DEFINE_bool(
    "show_stats", None, "Whether to print the component and operation counts."
)


class UnionFindConfig(NamedTuple):
    # matches the ten nodes of the original interactive demo
    size: int = 10
    state_file: str = ""
    show_log: bool = True
    show_stats: bool = True

    @property
    def has_state_file(self) -> bool:
        return bool(self.state_file)

    def validate(self):
        if self.size <= 0:
            raise ValueError("'size' must be positive")
        if self.has_state_file and Path(self.state_file).suffix.lower() != ".json":
            raise ValueError(f"'state_file' must be a .json file, got {self.state_file}")
        return self


def write(dest: Path, config: UnionFindConfig):
    toml_cfg = {
        "size": config.size,
        "state_file": config.state_file,
        "show_log": config.show_log,
        "show_stats": config.show_stats,
    }
    dest.write_text(toml.dumps(toml_cfg))


def _resolve_config(config_file: Optional[Path] = None) -> MutableMapping[str, Any]:
    if config_file is None:
        default_file = resources.files("unionfind.data") / _DEFAULT_CONFIG_FILE
        return toml.loads(default_file.read_text(encoding="utf-8"))
    return toml.load(config_file)


_DEFAULT_CONFIG = UnionFindConfig()


def _pop_flag(config: MutableMapping[str, Any], name: str) -> Any:
    config_value = config.pop(name, None)
    flag_value = getattr(FLAGS, name)
    if config_value is None and flag_value is None:
        return getattr(_DEFAULT_CONFIG, name)
    return flag_value if flag_value is not None else config_value


def load(config_file: Optional[Path] = None) -> UnionFindConfig:
    config = _resolve_config(config_file)

    # CLI flags will take precedence over the config file
    size = int(_pop_flag(config, "size"))
    state_file = str(_pop_flag(config, "state_file"))
    show_log = bool(_pop_flag(config, "show_log"))
    show_stats = bool(_pop_flag(config, "show_stats"))

    if config:
        raise ValueError(f"Unexpected config: {config}")

    return UnionFindConfig(
        size=size,
        state_file=state_file,
        show_log=show_log,
        show_stats=show_stats,
    ).validate()
