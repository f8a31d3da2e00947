# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import fnmatch
import logging
import os
import socket
from configparser import ConfigParser
from pathlib import Path
from typing import Mapping
from typing import Optional


def read_config(extra: Optional[os.PathLike] = None) -> 'Config':
    paths = [
        Path(__file__).with_name('config.ini'),
        Path('~/.config/jetson_setup.ini').expanduser(),
        ]
    if extra is not None:
        extra = Path(extra)
        if not extra.exists():
            raise ConfigError(f"Config file does not exist: {extra}")
        paths.append(extra)
    return Config(_read_config(*paths))


class Config:

    def __init__(self, values: Mapping[str, str]):
        self._values = dict(values)

    def __repr__(self):
        return f'<{Config.__name__} with {len(self._values)} values>'

    def __getitem__(self, key: str) -> str:
        try:
            return self._values[key]
        except KeyError:
            raise ConfigError(f"Missing config value: {key}")

    def items(self):
        return self._values.items()


class ConfigError(Exception):
    pass


def _read_config(*paths: Path) -> Mapping[str, str]:
    """Read and resolve overrides according to versions.

    Section names are masks matched against the host name,
    e.g. "[jetson-orin-*]"; "[defaults]" applies to all hosts.
    Optionally add ";v123" to sections like "[jetson-*;v2]".
    If not specified, "v0" is assumed.
    Higher versions override lower versions.
    With equal versions, later files override earlier ones.
    """
    config_parts = []
    host = socket.gethostname()
    for path_i, path in enumerate(paths):
        config_parser = ConfigParser(interpolation=None)
        config_parser.read(path)
        sections = config_parser.sections()
        for section_i, section in enumerate(sections):
            mask, version = _parse_section_header(section)
            if fnmatch.fnmatch(host, mask):
                _logger.info("Config %s: section %s: read", path, section)
                items = config_parser.items(section)
                config_parts.append((version, path_i, section_i, items))
            else:
                _logger.debug("Config %s: section %s: skip", path, section)
    config_parts.sort(key=lambda part: part[:3])
    config = {}
    for _version, _path_i, _section_i, items in config_parts:
        config.update(items)
    return config


def _parse_section_header(section):
    """Split section name into host mask and version.

    >>> _parse_section_header('defaults')
    ('*', 0)
    >>> _parse_section_header('jetson-*;v3')
    ('jetson-*', 3)
    """
    if section == 'defaults':
        return '*', 0
    else:
        mask, semicolon, extra = section.partition(';')
        if not extra:
            return mask, 0
        elif extra.startswith('v'):
            try:
                return mask, int(extra[1:])
            except ValueError:
                raise ConfigError(f"Cannot parse {extra} in {section}")
        else:
            raise ConfigError(f"Unknown {extra} in {section}")


_logger = logging.getLogger(__name__)
