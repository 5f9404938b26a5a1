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

import pandas as pd

from lshandoff.constants import COEFFICIENT_FIELDS, BANDS, MISSIONS
from lshandoff.exceptions import KeysMismatch, HandoffFileNotFoundException

LOG = logging.getLogger(__name__)


def ensure_dir(filename):
    """ Check if the dir of f exists, otherwise create it.
    """
    directory = os.path.dirname(filename)
    if directory and not os.path.isdir(directory):
        os.makedirs(directory)

def check_filename_exist(filename):
    if not os.path.exists(filename) or not os.path.isfile(filename):
        errmsg = ('File does not exist! Filename = ' + str(filename))
        raise HandoffFileNotFoundException(errmsg)
    else:
        return True

def write_coefficients(table, filename):
    """ Save a coefficient table as csv.
    """
    ensure_dir(filename)
    table.to_csv(filename, index=False, columns=COEFFICIENT_FIELDS)
    LOG.info('wrote %d handoff coefficients to %s', len(table), filename)
    return filename

def read_coefficients(filename):
    """ Load a coefficient table written by write_coefficients.
    """
    check_filename_exist(filename)
    table = pd.read_csv(filename)
    if list(table.columns) != COEFFICIENT_FIELDS:
        raise KeysMismatch(f'coefficient table columns {list(table.columns)} do not match {COEFFICIENT_FIELDS}')
    if not table['band'].isin(BANDS).all() or not table['SatCorr'].isin(MISSIONS).all():
        raise KeysMismatch('coefficient table holds unknown bands or missions')
    return table
