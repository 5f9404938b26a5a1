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

""" Constants"""

# Missions
LANDSAT_4 = 'LANDSAT_4'
LANDSAT_5 = 'LANDSAT_5'
LANDSAT_7 = 'LANDSAT_7'
LANDSAT_8 = 'LANDSAT_8'
LANDSAT_9 = 'LANDSAT_9'

MISSIONS = (LANDSAT_4, LANDSAT_5, LANDSAT_7, LANDSAT_8, LANDSAT_9)

# every handoff is normalized to Landsat 7
REFERENCE_MISSION = LANDSAT_7

# Surface reflectance bands, in output order
BANDS = ('Blue', 'Green', 'Red', 'Nir', 'Swir1', 'Swir2')

# Polynomial handoff
POLY_DEGREE = 2
MIN_FIT_POINTS = POLY_DEGREE + 1

# Coefficient table
BAND_FIELD = 'band'
INTERCEPT_FIELD = 'intercept'
LINEAR_FIELD = 'B1'
QUADRATIC_FIELD = 'B2'
MISSION_FIELD = 'SatCorr'
COEFFICIENT_FIELDS = [BAND_FIELD, INTERCEPT_FIELD, LINEAR_FIELD, QUADRATIC_FIELD, MISSION_FIELD]

# suffix of harmonized band columns
CORRECTED_SUFFIX = '_corr7'

DATE_FORMAT = '%Y-%m-%d'
