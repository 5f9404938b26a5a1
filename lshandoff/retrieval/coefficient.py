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

import logging
import numpy as np
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_squared_error, r2_score

from lshandoff.constants import (POLY_DEGREE, MIN_FIT_POINTS, BAND_FIELD, INTERCEPT_FIELD,
                                 LINEAR_FIELD, QUADRATIC_FIELD, MISSION_FIELD)
from lshandoff.exceptions import DegenerateFit, MismatchedListLengthsException
from lshandoff.retrieval.window import window_observations, check_overlap
from lshandoff.retrieval.quantile import quantile_vector
from lshandoff.utils.timer import Timer

LOG = logging.getLogger(__name__)


def poly_params(x, degree=POLY_DEGREE):
    """ raw polynomial terms x, x^2, ..., x^degree as columns
    """
    x = np.asarray(x, dtype=np.float64).reshape(-1, 1)
    return np.concatenate(
        [np.power(x, d) for d in range(1, degree + 1)],
        axis=1,
    )


def fit_handoff(x, y, degree=POLY_DEGREE):
    """ Least-squares fit of y = a + b * x + c * x^2.

    Returns the coefficients (a, b, c) and the fitted model.
    """
    x = np.asarray(x, dtype=np.float64).ravel()
    y = np.asarray(y, dtype=np.float64).ravel()
    if len(x) != len(y):
        raise MismatchedListLengthsException(
            f"x and y should have a same length, got {len(x)} and {len(y)}")
    if len(x) < degree + 1:
        raise DegenerateFit(len(x), degree)
    if np.unique(x).size < degree + 1:
        raise DegenerateFit(np.unique(x).size, degree)
    params = poly_params(x, degree)
    model = LinearRegression()
    model.fit(params, y)
    coefs = np.append(model.intercept_, model.coef_)
    return tuple(float(c) for c in coefs), model


class HandoffFit(object):
    ''' Coefficients of one (mission pair, band) unit and their diagnostics
    '''
    def __init__(self, window, band, coeffs, x, y, counts, rmse, r2):
        self.window = window
        self.band = band
        self.coeffs = coeffs
        self.x = x
        self.y = y
        self.counts = counts
        self.rmse = rmse
        self.r2 = r2

    @property
    def mission(self):
        return self.window.candidate

    @property
    def label(self):
        return f"{self.window.name}_{self.band}"

    def predict(self, values):
        a, b, c = self.coeffs
        values = np.asarray(values, dtype=np.float64)
        return a + b * values + c * values * values

    def as_row(self):
        a, b, c = self.coeffs
        return {
            BAND_FIELD: self.band,
            INTERCEPT_FIELD: a,
            LINEAR_FIELD: b,
            QUADRATIC_FIELD: c,
            MISSION_FIELD: self.mission,
        }

    def __str__(self):
        a, b, c = self.coeffs
        return f"HandoffFit({self.label}: {a:.6f} + {b:.6f}x + {c:.6f}x^2, R2={self.r2:.4f})"

    __repr__ = __str__


@Timer.timeit(level=1)
def compute_handoff(dataset, window, band):
    """ calculate handoff coefficients of one band for one mission pair.

    Pure function of its arguments: windows the dataset, summarizes both
    missions on the window probability grid and regresses the reference
    quantiles on the candidate quantiles.
    """
    ref, cand = window_observations(dataset, window)
    check_overlap(dataset, window, ref, cand)
    probs = window.probabilities
    y = quantile_vector(ref, band, probs)
    x = quantile_vector(cand, band, probs)
    # a single candidate row or a constant band collapses the quantiles
    distinct = np.unique(x).size
    if distinct < MIN_FIT_POINTS:
        raise DegenerateFit(distinct, POLY_DEGREE, window.name, band)
    coeffs, model = fit_handoff(x, y)
    y_pred = model.predict(poly_params(x))
    counts = {
        window.reference: {"scenes": ref.scene_count(), "rows": len(ref)},
        window.candidate: {"scenes": cand.scene_count(), "rows": len(cand)},
    }
    return HandoffFit(
        window,
        band,
        coeffs,
        x,
        y,
        counts,
        float(np.sqrt(mean_squared_error(y, y_pred))),
        float(r2_score(y, y_pred)),
    )
