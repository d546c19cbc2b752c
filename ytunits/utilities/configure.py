import os
import sys
import warnings
from pathlib import Path
from typing import Callable, List

import tomli_w
from more_itertools import always_iterable

from ytunits.utilities.configuration_tree import ConfigLeaf, ConfigNode

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Run with the global configuration once ytunits is imported
configuration_callbacks: List[Callable[["YTConfig"], None]] = []

CONFIG_FILENAME = "ytunits.toml"


def config_dir():
    config_root = os.environ.get(
        "XDG_CONFIG_HOME", os.path.join(os.path.expanduser("~"), ".config")
    )
    return os.path.join(config_root, "ytunits")


class YTConfig:
    """
    Options of ytunits, as a tree of sections and typed leaves.

    Options are addressed by their path: ``cfg["ytunits", "log_level"]`` or
    ``cfg.get("ytunits", "internals", "within_pytest")``. A leaf keeps the
    type of its first value; assigning a value of another type raises a
    TypeError naming the file the leaf was last set from.
    """

    def __init__(self, defaults=None):
        self.config_root = ConfigNode(None)
        self.files_read: List[str] = []
        if defaults:
            self.update(defaults, metadata={"source": "defaults"})

    def __setitem__(self, args, value):
        section, *keys = always_iterable(args)
        self.set(section, *keys, value)

    def __getitem__(self, key):
        section, *keys = always_iterable(key)
        return self.get(section, *keys)

    def __contains__(self, item):
        return item in self.config_root

    def get(self, section, *keys, callback=None):
        node_or_leaf = self.config_root.get(section, *keys)
        if not isinstance(node_or_leaf, ConfigLeaf):
            return node_or_leaf
        if callback is None:
            return node_or_leaf.value
        return callback(node_or_leaf)

    def set(self, *args, metadata=None):
        *path, value = args
        if metadata is None:
            metadata = {"source": "runtime"}
        self.config_root.upsert_from_list(path, value, extra_data=metadata)

    def remove(self, *args):
        self.config_root.pop_leaf(args)

    def update(self, new_values, metadata=None):
        self.config_root.update(new_values, metadata or {})

    def has_section(self, section):
        return isinstance(self.config_root.children.get(section), ConfigNode)

    def add_section(self, section):
        self.config_root.add_child(section)

    def remove_section(self, section):
        if not self.has_section(section):
            return False
        self.config_root.remove_child(section)
        return True

    def read(self, file_names):
        """
        Merge the TOML files among *file_names* that exist, in order, and
        return the list of those successfully read. Invalid files are
        skipped with a warning.
        """
        read = []
        for fname in always_iterable(file_names):
            if not os.path.exists(fname):
                continue
            try:
                with open(fname, "rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                warnings.warn(
                    f"Could not load configuration file {fname} (invalid TOML: {exc})"
                )
                continue
            self.update(data, metadata={"source": f"file: {fname}"})
            read.append(fname)
        self.files_read.extend(read)
        return read

    def write(self, file_handler):
        """Write the options to a path or to a writable object, as TOML."""
        config_as_str = tomli_w.dumps(self.config_root.as_dict())
        if hasattr(file_handler, "write"):
            file_handler.write(config_as_str)
            return
        try:
            file_path = Path(file_handler)
        except TypeError:
            raise TypeError(
                f"Expected a path to a file, or a writable object, got {file_handler}"
            ) from None
        if not file_path.parent.exists():
            warnings.warn(
                f"{file_path.parent!s} does not exist, creating it (recursively)"
            )
            os.makedirs(file_path.parent)
        file_path.write_text(config_as_str)

    @staticmethod
    def get_global_config_file():
        return os.path.join(config_dir(), CONFIG_FILENAME)

    @staticmethod
    def get_local_config_file():
        return os.path.join(os.path.abspath(os.curdir), CONFIG_FILENAME)


def _cast_bool_helper(value):
    if value in ("True", "False"):
        return value == "True"
    raise ValueError("Cannot safely cast to bool")


def _expand_all(s):
    return os.path.expandvars(os.path.expanduser(s))


def _cast_value_helper(value, types=(_cast_bool_helper, int, float, _expand_all)):
    # option values given as strings take the first type they parse as
    for t in types:
        try:
            return t(value)
        except ValueError:
            continue


# The configuration edited by the helpers below
CONFIG = YTConfig()


def get_config(section, option):
    return CONFIG.get(section, *option.split("."))


def set_config(section, option, value, config_file):
    if not CONFIG.has_section(section):
        CONFIG.add_section(section)
    CONFIG.set(section, *option.split("."), _cast_value_helper(value))
    write_config(config_file)


def write_config(config_file):
    CONFIG.write(config_file)


def rm_config(section, option, config_file):
    CONFIG.remove(section, *option.split("."))
    write_config(config_file)
