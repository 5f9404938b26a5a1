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

"""
Mission Pair Windows.
=====================

Provides the temporal overlap windows between Landsat missions.

"""

import logging
import numpy as np
from datetime import datetime

from lshandoff.config import WINDOW_CFG, WINDOW_NAMES
from lshandoff.constants import MISSIONS, REFERENCE_MISSION, DATE_FORMAT
from lshandoff.exceptions import WindowNotFoundException, ParameterException


LOG = logging.getLogger(__name__)


def probability_grid(step):
    ''' Quantile probabilities step, 2*step, ..., 1 - step
    '''
    if step <= 0 or step >= 0.5:
        raise ParameterException(f'grid step should be in (0, 0.5), got {step}')
    ratio = 1.0 / step
    if abs(ratio - round(ratio)) > 1e-9:
        raise ParameterException(f'grid step should divide 1, got {step}')
    count = int(round(ratio)) - 1
    return np.round(np.linspace(step, 1.0 - step, count), 10)


class MissionPairWindow(object):
    ''' Temporal overlap of a reference and a candidate mission.

    Both ``start`` and ``end`` are excluded from the window. A window whose
    end does not come after its start is rejected unless ``empty`` is set,
    which marks a mission pair that never overlapped.
    '''
    def __init__(self, name, reference, candidate, start, end, step, empty=False):
        for mission in (reference, candidate):
            if mission not in MISSIONS:
                raise ParameterException(f'unknown mission `{mission}`, expecting one of {MISSIONS}')
        if reference == candidate:
            raise ParameterException('reference and candidate missions should differ')
        if isinstance(start, str):
            start = datetime.strptime(start, DATE_FORMAT)
        if isinstance(end, str):
            end = datetime.strptime(end, DATE_FORMAT)
        self._name = name
        self._reference = reference
        self._candidate = candidate
        self._start = np.datetime64(start, 'D')
        self._end = np.datetime64(end, 'D')
        if self._end <= self._start and not empty:
            raise ParameterException(f'window {name} ends ({self._end}) before it starts ({self._start})')
        self._empty = bool(empty)
        self._step = float(step)
        self._probabilities = probability_grid(self._step)
        self._probabilities.setflags(write=False)

    name = property(lambda self: self._name)
    reference = property(lambda self: self._reference)
    candidate = property(lambda self: self._candidate)
    start = property(lambda self: self._start)
    end = property(lambda self: self._end)
    step = property(lambda self: self._step)
    probabilities = property(lambda self: self._probabilities)

    @property
    def is_empty(self):
        ''' True when no date can satisfy start < date < end
        '''
        return self._end - self._start <= np.timedelta64(1, 'D')

    def contains(self, dates):
        ''' Strict membership of datetime64[D] values
        '''
        dates = np.asarray(dates, dtype='datetime64[D]')
        return (dates > self._start) & (dates < self._end)

    def __eq__(self, other):
        if not isinstance(other, MissionPairWindow):
            return NotImplemented
        return (self.name, self.reference, self.candidate, self.start,
                self.end, self.step) == (other.name, other.reference,
                other.candidate, other.start, other.end, other.step)

    def __hash__(self):
        return hash((self.name, self.reference, self.candidate,
                     str(self.start), str(self.end), self.step))

    def __reduce__(self):
        return (MissionPairWindow, (self.name, self.reference, self.candidate,
                self.start.item(), self.end.item(), self.step, self._empty))

    def __str__(self):
        return f"{self.name}: {self.candidate} -> {self.reference} ({self.start}, {self.end}), {len(self.probabilities)} quantiles"

    __repr__ = __str__


def get_window(name):
    ''' Get one of the configured mission pair windows
    '''
    if name not in WINDOW_CFG:
        raise WindowNotFoundException(f'window `{name}` not found, available windows are {WINDOW_NAMES}')
    cfg = WINDOW_CFG[name]
    return MissionPairWindow(name, cfg.get('reference', REFERENCE_MISSION),
                             cfg['candidate'], cfg['start'], cfg['end'], cfg['step'],
                             empty=cfg.get('empty', False))


def get_windows(names=None):
    ''' Get configured windows, all of them by default
    '''
    if names is None:
        names = WINDOW_NAMES
    return [get_window(name) for name in names]
