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

"""lshandoff.retrieval.correction module. Provides: application of the
handoff coefficients to a reflectance dataset
"""

import logging
import numpy as np

from lshandoff.constants import (BANDS, MISSIONS, REFERENCE_MISSION, CORRECTED_SUFFIX,
                                 BAND_FIELD, INTERCEPT_FIELD, LINEAR_FIELD, QUADRATIC_FIELD,
                                 MISSION_FIELD)
from lshandoff.exceptions import KeysMismatch, ParameterException

LOG = logging.getLogger(__name__)


def coefficient_lookup(table):
    """ {(band, mission): (a, b, c)} from a coefficient table
    """
    lookup = {}
    for row in table.itertuples(index=False):
        row = row._asdict()
        key = (row[BAND_FIELD], row[MISSION_FIELD])
        if key in lookup:
            raise KeysMismatch(f"duplicated handoff row for {key}")
        lookup[key] = (row[INTERCEPT_FIELD], row[LINEAR_FIELD], row[QUADRATIC_FIELD])
    return lookup


def apply_handoff(dataset, table, aliases=None):
    """ Normalize every band of the dataset to the reference mission.

    Adds one <band>_corr7 column per band to dataset.to_frame(). Reference
    rows are copied, other missions go through their polynomial. Missions
    without a coefficient row stay NaN unless aliases maps them onto a
    mission that has one, e.g. {'LANDSAT_4': 'LANDSAT_5'}.
    """
    aliases = dict(aliases or {})
    for src, dst in aliases.items():
        if src not in MISSIONS or dst not in MISSIONS:
            raise ParameterException(f"unknown mission in alias {src} -> {dst}")
    lookup = coefficient_lookup(table)
    df = dataset.to_frame()
    missions = dataset.missions
    for band in BANDS:
        values = dataset.band(band)
        corrected = np.full(len(values), np.nan)
        ref = missions == REFERENCE_MISSION
        corrected[ref] = values[ref]
        for mission in MISSIONS:
            if mission == REFERENCE_MISSION:
                continue
            mask = missions == mission
            if not mask.any():
                continue
            coeffs = lookup.get((band, aliases.get(mission, mission)))
            if coeffs is None:
                LOG.warning("no %s handoff for %s, %d rows left uncorrected",
                            band, mission, int(mask.sum()))
                continue
            a, b, c = coeffs
            x = values[mask]
            corrected[mask] = a + b * x + c * x * x
        df[band + CORRECTED_SUFFIX] = corrected
    return df
