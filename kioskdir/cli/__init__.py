# encoding: utf-8
'''Reading kioskdir ini files.

Options live in the ``[app:main]`` section. A file may build on another
one with ``use = config:<relative path>``; the options of the including
file win. ``%(here)s`` expands to the directory of the file it appears in
and every ``KIOSKDIR_*`` environment variable can be referenced by name.
'''
from __future__ import annotations

import os
from typing import Optional

import click
import logging
from logging.config import fileConfig as loggingFileConfig
from configparser import ConfigParser, Error as ConfigParserError

from kioskdir.exceptions import KioskConfigurationException
from kioskdir.types import Config

log = logging.getLogger(__name__)

SECTION = u'app:main'
DEFAULT_CONFIG = u'kioskdir.ini'


def _env_defaults() -> dict[str, str]:
    # escaped, values are plain text rather than interpolation templates
    return {
        key: value.replace(u'%', u'%%')
        for key, value in os.environ.items() if key.startswith(u'KIOSKDIR_')
    }


def _parser(filename: str) -> ConfigParser:
    parser = ConfigParser()
    # option names are case sensitive
    parser.optionxform = str  # type: ignore
    defaults = _env_defaults()
    defaults[u'here'] = os.path.dirname(filename).replace(u'%', u'%%')
    parser.read_dict({u'DEFAULT': defaults})
    try:
        with open(filename) as f:
            parser.read_file(f)
    except OSError as e:
        raise KioskConfigurationException(
            u'Can not read kioskdir config file {}: {}'.format(
                filename, e.strerror))
    except ConfigParserError as e:
        raise KioskConfigurationException(
            u'Malformed kioskdir config file {}: {}'.format(filename, e))
    return parser


def _included(filename: str, parser: ConfigParser) -> Optional[str]:
    use = parser.get(SECTION, u'use', raw=True, fallback=u'')
    if not use.startswith(u'config:'):
        return None
    return os.path.normpath(os.path.join(
        os.path.dirname(filename), use[len(u'config:'):].strip()))


def read_config(filename: str) -> Config:
    '''Return the options of ``filename`` merged over the files it uses.

    ``__file__`` is set to the absolute path of ``filename``.
    '''
    filename = os.path.abspath(filename)
    chain: list[tuple[str, ConfigParser]] = []
    current: Optional[str] = filename
    while current:
        if current in [name for name, _ in chain]:
            raise KioskConfigurationException(
                u'kioskdir config files include each other: {}'.format(
                    u' -> '.join([name for name, _ in chain] + [current])))
        parser = _parser(current)
        if not parser.has_section(SECTION):
            raise KioskConfigurationException(
                u'{} has no [{}] section'.format(current, SECTION))
        chain.append((current, parser))
        current = _included(current, parser)

    conf: Config = {}
    for name, parser in reversed(chain):
        own = set(parser.options(SECTION)) - set(parser.defaults())
        conf.update(
            (key, parser.get(SECTION, key)) for key in own if key != u'use')
    conf[u'__file__'] = filename
    log.debug(u'Read configuration from %s', [name for name, _ in chain])
    return conf


def error_shout(exception: Exception) -> None:
    """Report CLI error with a styled message.
    """
    click.secho(str(exception), fg=u'red', err=True)


def _config_path(ini_path: Optional[str]) -> str:
    if ini_path:
        return os.path.abspath(os.path.expanduser(ini_path))
    if os.environ.get(u'KIOSKDIR_INI'):
        return os.path.abspath(os.environ[u'KIOSKDIR_INI'])
    candidate = os.path.join(os.getcwd(), DEFAULT_CONFIG)
    if os.path.exists(candidate):
        return candidate
    raise KioskConfigurationException(
        u'No kioskdir config file: pass --config, set KIOSKDIR_INI or run '
        u'from a directory containing {}'.format(DEFAULT_CONFIG))


def load_config(ini_path: Optional[str] = None) -> Config:
    '''Read the config file given with ``-c``, named by ``$KIOSKDIR_INI``
    or found as ``kioskdir.ini`` in the working directory, and configure
    logging from it when it has a ``[loggers]`` section.'''
    filename = _config_path(ini_path)
    conf = read_config(filename)

    if u'loggers' in _parser(filename):
        loggingFileConfig(filename, disable_existing_loggers=False)
    log.info(u'Using configuration file %s', filename)
    return conf
