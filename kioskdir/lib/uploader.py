# encoding: utf-8
'''Storage of the files referenced by ads and floor plans.

Uploading itself happens in the web layer; this module only resolves the
stored references and removes files that are no longer referenced.
'''
from __future__ import annotations

import logging
import os
from typing import Optional

from kioskdir.common import config

log = logging.getLogger(__name__)


def get_storage_path() -> Optional[str]:
    '''Function to get the storage path from config file.'''
    storage_path = config.get('kioskdir.storage_path')
    if not storage_path:
        log.critical('''Please specify a kioskdir.storage_path in your config
                        for your uploads''')

    return storage_path


def get_path(file_url: str) -> Optional[str]:
    '''Return the filesystem path of a stored file reference.

    References are relative to the storage path (``ads/summer-3f1a.png``);
    absolute URLs point at remote files and have no local path. Anything
    that resolves outside the storage path, absolute paths included, has
    no path either.
    '''
    if not file_url or '://' in file_url:
        return None
    file_url = file_url.replace('\\', '/')

    storage_path = get_storage_path()
    if not storage_path:
        return None
    full_path = os.path.realpath(os.path.join(storage_path, file_url))
    if not full_path.startswith(os.path.realpath(storage_path) + os.sep):
        log.warning('Refusing to resolve %s outside of the storage path',
                    file_url)
        return None
    return full_path


def delete_file(file_url: str) -> bool:
    '''Remove a stored file, returns whether something was removed.

    A missing file is logged and otherwise ignored, so removing the file of
    a committed change never fails the request.
    '''
    path = get_path(file_url)
    if path is None:
        return False
    try:
        os.remove(path)
    except OSError as e:
        log.warning('Error deleting file at %s: %s', path, e)
        return False
    log.debug('Deleted file %s', path)
    return True
