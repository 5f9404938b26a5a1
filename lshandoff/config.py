# -*- coding:utf-8 -*-
# Copyright (c) 2021-2022.

################################################################
# The contents of this file are subject to the GPLv3 License
# you may not use this file except in
# compliance with the License. You may obtain a copy of the License at
# https://www.gnu.org/licenses/gpl-3.0.en.html

# Software distributed under the License is distributed on an "AS IS"
# basis, WITHOUT WARRANTY OF ANY KIND, either express or implied. See the
# License for the specific language governing rights and limitations
# under the License.

# The Original Code is part of the LSHANDOFF python package.

# Initial Dev of the Original Code is Jinshun Zhu, PhD Student,
# Institute of Remote Sensing and Geographic Information System,
# Peking Universiy Copyright (C) 2022
# All Rights Reserved.

# Contributor(s): Jinshun Zhu (created, refactored and updated original code).
###############################################################

import os
import logging
from os.path import expanduser
from collections.abc import Mapping

import yaml
from appdirs import AppDirs

try:
    from yaml import UnsafeLoader
except ImportError:
    from yaml import Loader as UnsafeLoader


LOG = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.realpath(__file__))

BUILTIN_CONFIG_FILE = os.path.join(PACKAGE_DIR, 'etc', 'config.yaml')

WINDOW_FILE = os.path.join(PACKAGE_DIR, 'etc', 'windows.yaml')

CONFIG_FILE = os.environ.get('LSHANDOFF_CONFIG')

if CONFIG_FILE is not None and (not os.path.exists(CONFIG_FILE) or
                                not os.path.isfile(CONFIG_FILE)):
    raise IOError(
        str(CONFIG_FILE) + " pointed to by the environment " +
        "variable LSHANDOFF_CONFIG is not a file or does not exist!")


def recursive_dict_update(d, u):
    """Recursive dictionary update.

    Copied from:

        http://stackoverflow.com/questions/3232943/update-value-of-a-nested-dictionary-of-varying-depth

    """
    for k, v in u.items():
        if isinstance(v, Mapping):
            r = recursive_dict_update(d.get(k, {}), v)
            d[k] = r
        else:
            d[k] = u[k]
    return d


def get_config(configfile=None):
    """Get the configuration from file.

    The built-in configuration is always read first, a user file (either
    given explicitly or through LSHANDOFF_CONFIG) only overrides the keys
    it defines.
    """
    config = {}
    with open(BUILTIN_CONFIG_FILE, 'r', encoding='utf-8') as fp_:
        config = recursive_dict_update(config, yaml.load(fp_, Loader=UnsafeLoader))

    if configfile is None:
        configfile = CONFIG_FILE
    if configfile is not None:
        with open(configfile, 'r', encoding='utf-8') as fp_:
            config = recursive_dict_update(config, yaml.load(fp_, Loader=UnsafeLoader) or {})

    app_dirs = AppDirs('lshandoff', 'lshandoff')
    user_datadir = app_dirs.user_data_dir
    config['output_dir'] = expanduser(config.get('output_dir') or user_datadir)
    return config


CFG = get_config()


# window details
with open(WINDOW_FILE, 'r', encoding='utf-8') as fp_:
    WINDOW_CFG = recursive_dict_update({}, yaml.load(fp_, Loader=UnsafeLoader))

WINDOW_NAMES = list(WINDOW_CFG.keys())

# input columns
MISSION_COLUMN = CFG['columns']['mission']
DATE_COLUMN = CFG['columns']['date']
SCENE_COLUMN = CFG['columns']['scene']
BAND_COLUMNS = dict(CFG['band_columns'])

VALID_RANGE = tuple(CFG['valid_range'])

# parallel
NUM_WORKERS = int(CFG.get('num_workers', 1))

# debug&logging

def debug_on():
    """Turn debugging logging on."""
    logging_on(logging.DEBUG)


_is_logging_on = False


def logging_on(level=logging.WARNING):
    """Turn logging on."""
    global _is_logging_on

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    if not _is_logging_on:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("[%(levelname)s: %(asctime)s :"
                                               " %(name)s] %(message)s",
                                               '%Y-%m-%d %H:%M:%S'))
        console.setLevel(level)
        logging.getLogger('').addHandler(console)
        _is_logging_on = True

    log = logging.getLogger('')
    log.setLevel(level)
    for h in log.handlers:
        h.setLevel(level)


class NullHandler(logging.Handler):
    """empty handler."""

    def emit(self, record):
        """Record a message."""


def logging_off():
    """turn logging off."""
    global _is_logging_on
    logging.getLogger('').handlers = [NullHandler()]
    _is_logging_on = False


def get_logger(name):
    """Return logger with null handle."""
    log = logging.getLogger(name)
    if not log.handlers:
        log.addHandler(NullHandler())
    return log
