"""Configuration file loader and validator.

Reads ``greeter.ini`` into the Config dataclasses, layers environment variables and command-line
overrides on top, and validates the result. Raises exceptions for any issues encountered.
"""

from __future__ import annotations

import ast
import configparser
import os
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping
    from dataclasses import Field as DataclassField
else:
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "Config",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_CONFIG_FILE: Final[str] = "greeter.ini"

ALLOWED_TRANSLATION_ENGINES: list[str] = ["google_cloud"]

# environment variable -> (section, key)
ENVIRONMENT_OVERRIDES: Final[dict[str, tuple[str, str]]] = {
    "GOOGLE_CLOUD_PROJECT_ID": ("TRANSLATION", "PROJECT_ID"),
    "GOOGLE_APPLICATION_CREDENTIALS": ("TRANSLATION", "CREDENTIALS"),
    "PORT": ("SERVER", "PORT"),
}


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration contains an invalid type."""


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    Precedence, lowest first: dataclass defaults, the INI file, environment variables,
    command-line overrides.

    Args:
        config_filename (str | None): INI file to load. None skips the file entirely.
        script_name (str): Executing script name, used in error messages.
        environ (Mapping[str, str] | None): Environment to read overrides from. Defaults to os.environ.
        port (int | None): Optional override for SERVER.PORT.
        debug (bool): Force GENERAL.DEBUG on.

    Raises:
        ConfigFileNotFoundError: If the named configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(
        self,
        *,
        config_filename: str | None,
        script_name: str,
        environ: Mapping[str, str] | None = None,
        **args,
    ) -> None:
        self.config = Config()
        self.config.GENERAL.SCRIPT_NAME = script_name

        if config_filename is not None:
            self._load_file(config_filename, script_name)

        self._apply_environment(os.environ if environ is None else environ)

        if args.get("port") is not None:
            self.config.SERVER.PORT = int(args["port"])
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True
        self._validate_settings()

    @classmethod
    def find_default(cls, directory: Path | None = None) -> str | None:
        """Return the default INI file name if it exists in ``directory`` (cwd by default)."""
        candidate: Path = (directory or Path.cwd()) / DEFAULT_CONFIG_FILE
        return str(candidate) if candidate.is_file() else None

    def _load_file(self, config_filename: str, script_name: str) -> None:
        msg: str
        if not Path(config_filename).exists():
            msg = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_filename}' or run '{script_name}' without --config."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()

        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self._convert_settings(parser)
        logger.debug("Configuration loaded from '%s'", config_filename)

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Copy every known key from the parser into the Config object.

        Raises:
            ConfigFormatError: If a value cannot be parsed or coerced to the expected type.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                continue
            for key in fields(getattr(self.config, section.name)):
                if not parser.has_option(section.name, key.name):
                    logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                    continue
                formatted_value = formatter.apply_format(section, key)
                setattr(getattr(self.config, section.name), key.name, formatted_value)

        for section_name in parser.sections():
            if not hasattr(self.config, section_name):
                logger.warning("Unknown section '[%s]' in configuration file is ignored", section_name)

    def _apply_environment(self, environ: Mapping[str, str]) -> None:
        """Override file values with the environment variables named in ENVIRONMENT_OVERRIDES."""
        for variable, (section_name, key_name) in ENVIRONMENT_OVERRIDES.items():
            value: str | None = environ.get(variable)
            if not value:
                continue
            section = getattr(self.config, section_name)
            current = getattr(section, key_name)
            if isinstance(current, int):
                try:
                    setattr(section, key_name, int(value))
                except ValueError as err:
                    msg: str = f"Environment variable {variable} must be an integer: '{value}'"
                    raise ConfigValueError(msg) from err
            else:
                setattr(section, key_name, value)
            logger.debug("'%s.%s' taken from environment variable %s", section_name, key_name, variable)

    def _validate_settings(self) -> None:
        """Validate the port and the translation engine name.

        Missing credentials are not checked here; they are a construction-time error of the
        greeting engine so that a config file can be inspected without them.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        self._validate_port("SERVER", "PORT")
        self._inspect_defined_item("TRANSLATION", "ENGINE", ALLOWED_TRANSLATION_ENGINES)
        source: str = self.config.TRANSLATION.SOURCE_LANGUAGE
        if not source.strip():
            msg = "'TRANSLATION.SOURCE_LANGUAGE' must not be empty"
            raise ConfigValueError(msg)
        self.config.TRANSLATION.SOURCE_LANGUAGE = source.strip().lower()

    def _validate_port(self, section_name: str, key_name: str) -> None:
        value: int = getattr(getattr(self.config, section_name), key_name)
        if not 1 <= value <= 65535:
            msg: str = f"'{section_name}.{key_name}' must be between 1 and 65535: {value}"
            raise ConfigValueError(msg)

    def _inspect_defined_item(self, section_name: str, key_name: str, defined_list: list[str]) -> None:
        """Warn about values outside the known set without rejecting them.

        Raises:
            ConfigTypeError: If the configured value is not a str.
        """
        value: Any = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"

        if not isinstance(value, str):
            msg: str = f"Unsupported type used for '{field_name}': {type(value)}"
            raise ConfigTypeError(msg)
        if value not in defined_list:
            logger.warning("Unknown value '%s' is set for '%s'", value, field_name)


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, int, float, str, list, dict)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert an INI value to the type of the matching Config default.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If an unexpected type is encountered during coercion.
        """
        formatters: dict[type, Callable[[DataclassField[Any], DataclassField[Any]], Any]] = {
            bool: self.parse_as_boolean,
            int: self.parse_as_integer,
            float: self.parse_as_float,
            str: self.parse_as_string,
        }

        formatter = formatters.get(type(getattr(getattr(self.config, section.name), key.name)))
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigTypeError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            return ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

    def parse_as_string(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        """Return the raw INI string, minus one pair of surrounding quotes."""
        value: str = self.parser.get(section.name, key.name).strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        return value

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return float(value)

    def parse_as_integer(self, section: DataclassField[Any], key: DataclassField[Any]) -> int:
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return int(float(value))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        return self.parser.getboolean(section.name, key.name)
