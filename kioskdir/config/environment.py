# encoding: utf-8
'''kioskdir environment configuration'''
from __future__ import annotations

import os
import logging
from typing import Union

import sqlalchemy

import kioskdir.model as model
import kioskdir.logic as logic

from kioskdir.common import KioskConfig, config, config_declaration
from kioskdir.exceptions import KioskConfigurationException
from kioskdir.types import Config

log = logging.getLogger(__name__)


def load_environment(conf: Union[Config, KioskConfig]) -> None:
    """
    Configure the kioskdir environment via the ``kioskdir.common.config``
    object. This code should only need to be run once.
    """
    if conf.get('__file__'):
        os.environ['KIOSKDIR_INI'] = conf['__file__']

    # Initialize main kioskdir config object
    config.clear()
    config.update(conf)

    update_config()


# A mapping of config settings that can be overridden by env vars.
# Note: Do not remove the following lines, they are used in the docs
# Start CONFIG_FROM_ENV_VARS
CONFIG_FROM_ENV_VARS: dict[str, str] = {
    'sqlalchemy.url': 'KIOSKDIR_SQLALCHEMY_URL',
    'kioskdir.storage_path': 'KIOSKDIR_STORAGE_PATH',
}
# End CONFIG_FROM_ENV_VARS


def update_config() -> None:
    ''' This code needs to be run when the config is changed to take those
    changes into account. '''

    for option in CONFIG_FROM_ENV_VARS:
        from_env = os.environ.get(CONFIG_FROM_ENV_VARS[option], None)
        if from_env:
            config[option] = from_env

    config_declaration.setup()
    config_declaration.make_safe(config)
    config_declaration.normalize(config)

    errors = config_declaration.validate(config)
    if errors:
        msg = '; '.join(
            '{}: {}'.format(key, ', '.join(problems))
            for key, problems in errors.items())
        raise KioskConfigurationException(
            'Invalid configuration: {}'.format(msg))

    storage_path = config.get('kioskdir.storage_path')
    if storage_path and not os.path.isdir(storage_path):
        log.warning('kioskdir.storage_path %s is not a directory',
                    storage_path)

    # Initialize SQLAlchemy
    engine = sqlalchemy.engine_from_config(
        {k: v for k, v in config.items() if k in _ENGINE_OPTIONS})
    model.init_model(engine)

    # clear other caches
    logic.clear_actions_cache()
    log.debug('Environment loaded for %s', engine.url.render_as_string())


_ENGINE_OPTIONS = ('sqlalchemy.url', 'sqlalchemy.echo')
