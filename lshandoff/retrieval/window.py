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

"""lshandoff.retrieval.window module. Provides: mission pair windowing
"""

import logging

from lshandoff.exceptions import InsufficientOverlapData

LOG = logging.getLogger(__name__)


def window_observations(dataset, window):
    """ Split the observations falling strictly inside a mission pair window.

    Returns the reference mission rows and the candidate mission rows, both
    as new datasets. Observations dated on the window start or end are
    left out.
    """
    inside = window.contains(dataset.dates)
    ref = dataset.select(inside & dataset.mission_mask(window.reference))
    cand = dataset.select(inside & dataset.mission_mask(window.candidate))
    LOG.debug('%s: %d %s rows, %d %s rows', window.name, len(ref),
              window.reference, len(cand), window.candidate)
    return ref, cand


def check_overlap(dataset, window, ref, cand):
    """ Raise InsufficientOverlapData when either side of a window is empty.

    The orphaned mission is the one without rows inside the window; its
    last date anywhere in the dataset is attached to the exception.
    """
    for mission, rows in ((window.candidate, cand), (window.reference, ref)):
        if len(rows) == 0:
            raise InsufficientOverlapData(window.name, mission, dataset.last_date(mission))
