# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Loads option declarations for an `OptionParser` from a YAML or TOML file.

Example (YAML):

    program: nd-sandbox
    version: "1.0"
    settings:
      case_sensitive: false
    options:
      - flags: ["-c", "--connect"]
        help: Connection socket endpoint.
      - flags: ["-n", "--count"]
        type: int
        default: 10
      - flags: ["-l", "--level"]
        type: my_package.levels.Level
    values:
      dest: files
      max_elements: 2
    help_option:
      short: h
"""
from __future__ import annotations

import importlib
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from optbind.exceptions import OptionConfigurationError
from optbind.logger import logger
from optbind.parser.option_arity import Arity
from optbind.parser.option_parser import OptionParser
from optbind.parser.option_spec import (
    DEFAULT_HELP_OPTION_TEXT,
    DEFAULT_SEPARATOR,
    MISSING,
)
from optbind.settings import ParserSettings

TYPE_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "decimal": Decimal,
    "path": Path,
    "datetime": datetime,
}


def import_type(dotted_path: str) -> Any:
    """Dynamically imports a type from a dotted path like 'my.module.Level'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise OptionConfigurationError(f"Invalid type path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise OptionConfigurationError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise OptionConfigurationError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error


def resolve_type(name: str) -> Any:
    """Return the type for a short name like `int`, or import a dotted path."""
    if name.lower() in TYPE_NAMES:
        return TYPE_NAMES[name.lower()]
    return import_type(name)


class RawOption(BaseModel):
    """One option entry of a configuration file."""

    flags: list[str]
    dest: str | None = None
    arity: Arity | None = None
    type: str | None = None
    nullable: bool = False
    required: bool = False
    default: Any = None
    mutually_exclusive_set: str | None = None
    separator: str = DEFAULT_SEPARATOR
    help: str = ""

    @field_validator("arity", mode="before")
    @classmethod
    def validate_arity(cls, value: Any) -> Any:
        if value is None or isinstance(value, Arity):
            return value
        try:
            return Arity(value)
        except ValueError as error:
            raise ValueError(
                f"Invalid arity '{value}'. Choose from: {Arity.choices()}"
            ) from error

    def declared_type(self) -> Any:
        """Build the field type from `type`, `arity` and `nullable`."""
        if self.type is None:
            element_type = None
        else:
            element_type = resolve_type(self.type)
        if self.arity is Arity.DELIMITED_LIST:
            return list[str]
        if self.arity is Arity.ARRAY:
            return list[element_type or str]
        if self.nullable:
            return (element_type or str) | None
        return element_type

    def declared_default(self) -> Any:
        if "default" not in self.model_fields_set:
            return MISSING
        return self.default


class RawValueList(BaseModel):
    """The `values` section of a configuration file."""

    dest: str
    max_elements: int = -1
    help: str = ""


class RawHelpOption(BaseModel):
    """The `help_option` section of a configuration file."""

    short: str | None = None
    long: str | None = "help"
    help: str = DEFAULT_HELP_OPTION_TEXT


class OptbindConfig(BaseModel):
    """Optbind configuration model."""

    program: str | None = None
    version: str | None = None
    copyright: str = ""
    help_text: str = ""
    help_epilog: str = ""
    settings: ParserSettings = Field(default_factory=ParserSettings)
    options: list[RawOption] = []
    values: RawValueList | None = None
    help_option: RawHelpOption | None = None

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value

    def to_parser(self) -> OptionParser:
        parser = OptionParser(
            program=self.program,
            version=self.version,
            copyright=self.copyright,
            help_text=self.help_text,
            help_epilog=self.help_epilog,
            settings=self.settings,
        )
        for option in self.options:
            parser.add_option(
                *option.flags,
                dest=option.dest,
                arity=option.arity,
                type=option.declared_type(),
                required=option.required,
                default=option.declared_default(),
                mutually_exclusive_set=option.mutually_exclusive_set,
                separator=option.separator,
                help=option.help,
            )
        if self.values is not None:
            parser.add_value_list(
                self.values.dest,
                max_elements=self.values.max_elements,
                help=self.values.help,
            )
        if self.help_option is not None:
            parser.add_help_option(
                short_name=self.help_option.short,
                long_name=self.help_option.long,
                help=self.help_option.help,
            )
        return parser


def loader(file_path: Path | str) -> OptionParser:
    """
    Load option declarations from a YAML or TOML file.

    The file should contain a dictionary with a list of options. Each option
    should be defined as a dictionary with at least:
    - flags: a list of `-x` and/or `--name` flags

    Args:
        file_path (str): Path to the config file (YAML or TOML).

    Returns:
        OptionParser: A parser with every declared option registered.

    Raises:
        OptionConfigurationError: If the file format is unsupported, the file
            cannot be parsed or a declaration is invalid.
        FileNotFoundError: If the file does not exist.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise OptionConfigurationError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise OptionConfigurationError(
                f"Could not parse config file {path}: {error}"
            ) from error

    if not isinstance(raw_config, dict):
        raise OptionConfigurationError(
            "Configuration file must contain a dictionary with a list of options.\n"
            "Example:\n"
            "program: 'nd-req-ping'\n"
            "options:\n"
            "  - flags: ['-c', '--connect']\n"
            "    required: true"
        )

    try:
        config = OptbindConfig.model_validate(raw_config)
    except ValidationError as error:
        raise OptionConfigurationError(f"Invalid config file {path}:\n{error}") from error
    logger.debug("Loaded %d option(s) from %s", len(config.options), path)
    return config.to_parser()
