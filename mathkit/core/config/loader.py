"""
Configuration file loaders.

A configuration file holds an optional ``fitting`` section and an optional
``geometry`` section. JSON and YAML (PyYAML) files are supported; the
format is chosen from the file extension.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, IO, Tuple, Type, Union, List
import json
import logging

import yaml

from ..base.exceptions import ConfigurationError
from .settings import FittingConfig, GeometryConfig, validate_against_schema

logger = logging.getLogger(__name__)

SECTIONS = ('fitting', 'geometry')


class ConfigLoader(ABC):
    """Reads and writes configuration mappings in one file format.

    Subclasses only parse and dump streams; file handling and error
    translation into ``ConfigurationError`` happen here.
    """

    # exceptions raised by the parser on malformed content
    decode_errors: Tuple[Type[Exception], ...] = ()
    # how the format calls a mapping, used in error messages
    mapping_name = "mapping"

    @property
    @abstractmethod
    def supported_extensions(self) -> List[str]:
        """File extensions handled, including the dot."""
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        pass

    @abstractmethod
    def _parse(self, stream: IO[str]) -> Any:
        pass

    @abstractmethod
    def _dump(self, data: Dict[str, Any], stream: IO[str]) -> None:
        pass

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Read a configuration mapping.

        Raises
        ------
        ConfigurationError
            If the file is missing, unreadable, malformed or not a mapping
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = self._parse(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {path}",
                                     config_file=str(path), cause=e) from e
        except PermissionError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}",
                                     config_file=str(path), cause=e) from e
        except self.decode_errors as e:
            raise ConfigurationError(f"Invalid {self.format_name} in {path}: {e}",
                                     config_file=str(path), cause=e) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self.format_name} file must contain an {self.mapping_name}, got {type(data).__name__}",
                config_file=str(path))

        logger.debug(f"Loaded {self.format_name} configuration from {path}")
        return data

    def save(self, data: Dict[str, Any], path: Union[str, Path]) -> None:
        """Write a configuration mapping, creating parent directories.

        ``Path`` values are written as strings.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Only a dictionary can be saved as {self.format_name}, "
                                     f"got {type(data).__name__}")

        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                self._dump(_plain(data), f)
        except PermissionError as e:
            raise ConfigurationError(f"Cannot write configuration file {path}",
                                     config_file=str(path), cause=e) from e

        logger.debug(f"Saved {self.format_name} configuration to {path}")


def _plain(value):
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class JSONConfigLoader(ConfigLoader):
    decode_errors = (json.JSONDecodeError,)
    mapping_name = "object/dictionary"

    @property
    def supported_extensions(self) -> List[str]:
        return ['.json']

    @property
    def format_name(self) -> str:
        return "JSON"

    def _parse(self, stream: IO[str]) -> Any:
        return json.load(stream)

    def _dump(self, data: Dict[str, Any], stream: IO[str]) -> None:
        json.dump(data, stream, indent=2, sort_keys=True)


class YAMLConfigLoader(ConfigLoader):
    decode_errors = (yaml.YAMLError,)
    mapping_name = "mapping/dictionary"

    @property
    def supported_extensions(self) -> List[str]:
        return ['.yaml', '.yml']

    @property
    def format_name(self) -> str:
        return "YAML"

    def _parse(self, stream: IO[str]) -> Any:
        data = yaml.safe_load(stream)
        # an empty document is an empty configuration
        return {} if data is None else data

    def _dump(self, data: Dict[str, Any], stream: IO[str]) -> None:
        yaml.safe_dump(data, stream, default_flow_style=False, sort_keys=True)


_LOADERS: Dict[str, Type[ConfigLoader]] = {
    extension: loader
    for loader in (JSONConfigLoader, YAMLConfigLoader)
    for extension in loader().supported_extensions
}


def get_config_loader(file_path: Union[str, Path]) -> ConfigLoader:
    """Pick the loader matching the file extension (case-insensitive).

    Raises
    ------
    ConfigurationError
        If no loader handles the extension
    """
    suffix = Path(file_path).suffix.lower()
    if suffix not in _LOADERS:
        raise ConfigurationError(
            f"Unsupported configuration file format: {suffix}. Available: {sorted(_LOADERS)}",
            config_file=str(file_path))
    return _LOADERS[suffix]()


def load_config_file(file_path: Union[str, Path]) -> Tuple[FittingConfig, GeometryConfig]:
    """Load fitting and geometry configuration from a file.

    Missing sections fall back to defaults.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, has unknown sections or a section
        violates the schema
    """
    data = get_config_loader(file_path).load(file_path)

    unknown = [key for key in data if key not in SECTIONS]
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {unknown}",
                                 config_file=str(file_path))

    fitting = data.get('fitting') or {}
    geometry = data.get('geometry') or {}

    errors = validate_against_schema('fitting', fitting) + validate_against_schema('geometry', geometry)
    if errors:
        raise ConfigurationError(f"Invalid configuration file: {'; '.join(errors)}",
                                 config_file=str(file_path))

    return FittingConfig.from_dict(fitting), GeometryConfig.from_dict(geometry)
