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

from lshandoff.config import CFG, NUM_WORKERS, logging_on
from lshandoff.constants import BANDS, COEFFICIENT_FIELDS, BAND_FIELD, MISSION_FIELD
from lshandoff.exceptions import (HandoffException, InsufficientOverlapData, KeysMismatch,
                                  assert_required_keywords_provided)
from lshandoff.observer.dataset import read_dataset
from lshandoff.observer.mission import get_windows
from lshandoff.retrieval.coefficient import compute_handoff
from lshandoff.retrieval.window import window_observations, check_overlap
from lshandoff.utils.algorithm import parallel_exec
from lshandoff.utils.io import write_coefficients
from lshandoff.utils.timer import Timer
from lshandoff.validation.report import write_report

LOG = logging.getLogger(__name__)


class UnitFailure(object):
    ''' A (mission pair, band) unit that could not be fitted
    '''
    def __init__(self, window, band, error):
        self.window = window
        self.band = band
        self.kind = type(error).__name__
        self.message = str(error)

    def __str__(self):
        return f"{self.window}/{self.band}: {self.kind}: {self.message}"

    __repr__ = __str__


def run_unit(unit):
    """ Fit one (dataset, window, band) unit, errors come back as UnitFailure.
    """
    dataset, window, band = unit
    try:
        return compute_handoff(dataset, window, band)
    except Exception as e:
        LOG.error("handoff %s/%s failed: %s", window.name, band, e)
        return UnitFailure(window.name, band, e)


def unit_failure(unit, error):
    """ UnitFailure for a unit whose worker process did not return.
    """
    _, window, band = unit
    LOG.error("handoff %s/%s worker failed: %s", window.name, band, error)
    return UnitFailure(window.name, band, error)


def coefficient_table(fits):
    """ Union the coefficient rows of the fits into one table.
    """
    table = pd.DataFrame([fit.as_row() for fit in fits], columns=COEFFICIENT_FIELDS)
    duplicated = table.duplicated(subset=[BAND_FIELD, MISSION_FIELD], keep=False)
    if duplicated.any():
        keys = table.loc[duplicated, [BAND_FIELD, MISSION_FIELD]].drop_duplicates()
        raise KeysMismatch(f"duplicated handoff rows for {keys.to_records(index=False).tolist()}")
    return table


class HandoffResult(object):
    ''' Coefficient table with the fits, skipped windows and failures behind it
    '''
    def __init__(self, fits, skipped, failures):
        self.fits = fits
        self.skipped = skipped
        self.failures = failures
        self.table = coefficient_table(fits)

    def get_fit(self, window_name, band):
        for fit in self.fits:
            if fit.window.name == window_name and fit.band == band:
                return fit
        raise KeyError(f"no fit for {window_name}/{band}")

    def __str__(self):
        return (f"HandoffResult({len(self.fits)} fits, {len(self.skipped)} skipped windows, "
                f"{len(self.failures)} failures)")

    __repr__ = __str__


@Timer.timeit(level=0)
def compute_coefficients(dataset, windows=None, bands=BANDS, num_workers=NUM_WORKERS):
    """ calculate handoff coefficients for every mission pair and band.

    Windows without observations of either mission are skipped and
    reported; a failing (window, band) unit is recorded without stopping
    the others. Units run in a process pool when num_workers > 1.
    """
    if windows is None:
        windows = get_windows()
    units = []
    skipped = []
    for window in windows:
        ref, cand = window_observations(dataset, window)
        try:
            check_overlap(dataset, window, ref, cand)
        except InsufficientOverlapData as e:
            LOG.warning("skipping %s: %s", window.name, e)
            skipped.append(e)
            continue
        LOG.info("%s: %d %s rows (%d scenes), %d %s rows (%d scenes)", window.name,
                 len(ref), window.reference, ref.scene_count(),
                 len(cand), window.candidate, cand.scene_count())
        units.extend((dataset, window, band) for band in bands)

    if num_workers > 1 and len(units) > 1:
        outcomes = parallel_exec(run_unit, units, max_workers=num_workers,
                                 on_error=unit_failure)
    else:
        outcomes = [run_unit(unit) for unit in units]

    fits = [o for o in outcomes if not isinstance(o, UnitFailure)]
    failures = [o for o in outcomes if isinstance(o, UnitFailure)]
    for fit in fits:
        LOG.debug("%s", fit)
    return HandoffResult(fits, skipped, failures)


class HandoffRunner(object):
    ''' Read the filtered export, compute and save the handoff coefficients
    '''
    def __init__(self, config=None):
        self.config = dict(CFG if config is None else config)
        assert_required_keywords_provided(['output_dir', 'coefficient_file'], **self.config)
        self.result = None

    @property
    def output_dir(self):
        return self.config['output_dir']

    @property
    def coefficient_file(self):
        return os.path.join(self.output_dir, self.config['coefficient_file'])

    def load(self):
        assert_required_keywords_provided(['input_file'], **self.config)
        if not self.config['input_file']:
            raise HandoffException('no input_file configured, set it in the LSHANDOFF_CONFIG file')
        valid_range = self.config.get('valid_range')
        return read_dataset(self.config['input_file'],
                            valid_range=tuple(valid_range) if valid_range else None,
                            drop_invalid=self.config.get('drop_invalid', False))

    def run(self, dataset=None, windows=None, report=True):
        if self.config.get('log_level'):
            logging_on(self.config['log_level'])
        if self.config.get('timing'):
            Timer(enabled=True)
        if dataset is None:
            dataset = self.load()
        LOG.info("%s", dataset)
        self.result = compute_coefficients(
            dataset,
            windows=windows,
            num_workers=int(self.config.get('num_workers', NUM_WORKERS)),
        )
        write_coefficients(self.result.table, self.coefficient_file)
        if report:
            write_report(self.result, self.output_dir,
                         report_file=self.config.get('report_file', 'handoff_report.txt'),
                         figure_dir=self.config.get('figure_dir', 'figures'),
                         plot=self.config.get('plot', True))
        if Timer.enabled:
            Timer.show_log()
        return self.result
