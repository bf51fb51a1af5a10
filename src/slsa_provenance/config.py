"""Read the slsa_provenance config file."""
from __future__ import annotations
from dataclasses import fields, dataclass

from typing import TYPE_CHECKING, get_type_hints, ClassVar

from tomlkit import parse
from tomlkit.exceptions import TOMLKitError
from typeguard import TypeCheckError, check_type

import logging
import os

if TYPE_CHECKING:
    from typing import Type, TypeVar

    T = TypeVar("T", bound="ConfigSection")


CONFIG_ENV_VAR = "SLSA_PROVENANCE_CONFIG"
CONFIG_FILE_NAME = "slsa-provenance.toml"


def known_config_files() -> list[str]:
    """Return the configuration files to load, in loading order.

    When $SLSA_PROVENANCE_CONFIG is set, it is the only file considered.
    Otherwise settings of ~/slsa-provenance.toml override the ones of the
    XDG configuration directory.
    """
    if CONFIG_ENV_VAR in os.environ:
        return [os.environ[CONFIG_ENV_VAR]]
    return [
        os.path.join(
            os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")),
            CONFIG_FILE_NAME,
        ),
        os.path.expanduser(f"~/{CONFIG_FILE_NAME}"),
    ]


@dataclass
class ConfigSection:
    title: ClassVar[str]

    @classmethod
    def load(cls: Type[T]) -> T:
        """Load a section of the configuration files.

        To load a new section, subclass ConfigSection and declare the fields
        that you expect to parse, e.g.::

            @dataclass
            class MyConfig(ConfigSection):
                title = "my_config_subsection"
                option : str = "default value"

        my_config = MyConfig.load()

        Values whose type does not match the field annotation are reported
        and the field default is kept. Unknown settings are reported and
        ignored; nested tables are left to their own section.
        """
        schema = get_type_hints(cls)
        cls_fields = {f.name: schema[f.name] for f in fields(cls) if f.name != "title"}
        kwargs = {}

        for k, v in Config.load_section(cls.title).items():
            if k not in cls_fields:
                if not isinstance(v, dict):
                    logging.warning(f"{cls.title}.{k}: unknown setting ignored")
                continue
            try:
                check_type(v, cls_fields[k])
            except TypeCheckError as err:
                logging.error(f"{cls.title}.{k}: {err}")
            else:
                kwargs[k] = v

        return cls(**kwargs)  # type: ignore


class Config:
    """Load the configuration file and validate each section.

    This class expose the .load_section(<section>) method that can be used
    by ConfigSection instance corresponding to the loaded configuration
    section after validation.
    """

    data: ClassVar[dict] = {}

    @classmethod
    def load_section(cls, section: str) -> dict:
        """Load a configuration section content.

        :param section: if contains "." nested subsection will be found. For
            instance "log.fmt" will return the section:

            [log]
              [log.fmt]
        :return: the configuration dict
        """
        if not cls.data:
            cls.load()

        subsections = section.split(".")
        result = cls.data
        for subsection in subsections:
            result = result.get(subsection, {})

        return result

    @classmethod
    def load_file(cls, filename: str) -> None:
        """Load a configuration file.

        Tables already loaded are merged, values of *filename* taking
        precedence.

        :param filename: configuration file to load
        """
        with open(filename) as f:
            try:
                _merge(cls.data, parse(f.read()).unwrap())
            except TOMLKitError as e:
                logging.error(f"cannot load {filename}: {e}")

    @classmethod
    def load(cls) -> None:
        """Load the known configuration file(s).

        Note that this method is automatically called the first time
        .load_section() is called.

        .. seealso:: :func:`known_config_files`
        """
        for config_file in known_config_files():
            if os.path.isfile(config_file):
                cls.load_file(config_file)


@dataclass
class ProvenanceConfig(ConfigSection):
    """Serialization and parsing settings for provenance documents."""

    title: ClassVar[str] = "provenance"

    json_indent: int = 0
    sort_keys: bool = True
    keep_extra_fields: bool = True


def _merge(target: dict, source: dict) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = value
