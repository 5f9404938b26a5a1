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

"""lshandoff.retrieval.quantile module. Provides: quantile summaries
"""

import numpy as np

from lshandoff.exceptions import ParameterException


def empirical_quantiles(values, probabilities):
    """ Quantiles by linear interpolation between order statistics.

    For n sorted values the p quantile sits at position (n - 1) * p, e.g.
    the median of [1, 2, 3, 4] is 2.5.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        raise ParameterException('cannot summarize an empty sample')
    probabilities = np.asarray(probabilities, dtype=np.float64)
    if np.any(probabilities < 0) or np.any(probabilities > 1):
        raise ParameterException('quantile probabilities should be within [0, 1]')
    return np.quantile(values, probabilities, method='linear')


def quantile_vector(rows, band, probabilities):
    """ Quantile values of one band, aligned with probabilities.
    """
    return empirical_quantiles(rows.band(band), probabilities)
