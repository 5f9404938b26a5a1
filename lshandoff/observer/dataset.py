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
Reflectance Dataset.
====================

Provides the validated, read-only view of the filtered upstream export.

"""

import logging
import numpy as np
import pandas as pd

from lshandoff.config import (MISSION_COLUMN, DATE_COLUMN, SCENE_COLUMN,
                              BAND_COLUMNS, VALID_RANGE)
from lshandoff.constants import BANDS, MISSIONS
from lshandoff.exceptions import MalformedInput, AttributeTableColumnException
from lshandoff.utils.io import check_filename_exist


LOG = logging.getLogger(__name__)


def _readonly(arr):
    arr = np.array(arr, copy=True)
    arr.setflags(write=False)
    return arr


class ReflectanceDataset(object):
    ''' Immutable observation set, one entry per scene-location observation.

    Columns are checked once at construction: every band is a finite float
    column, dates are datetime64[D] and missions belong to MISSIONS.
    '''
    def __init__(self, missions, dates, scenes, bands):
        missions = np.asarray(missions, dtype=object)
        n = len(missions)
        if set(bands.keys()) != set(BANDS):
            raise AttributeTableColumnException(f'bands should be exactly {BANDS}, got {sorted(bands.keys())}')
        unknown = set(missions.tolist()) - set(MISSIONS)
        if unknown:
            raise MalformedInput(f'unknown mission identifiers {sorted(map(str, unknown))}')
        try:
            dates = np.asarray(dates, dtype='datetime64[D]')
        except ValueError as e:
            raise MalformedInput(f'unparseable acquisition date: {e}') from e
        if np.isnat(dates).any():
            raise MalformedInput(f'{int(np.isnat(dates).sum())} rows without acquisition date')
        self._missions = _readonly(missions)
        self._dates = _readonly(dates)
        self._scenes = _readonly(np.asarray(scenes, dtype=object))
        self._bands = {}
        for band in BANDS:
            try:
                values = np.asarray(bands[band], dtype=np.float64)
            except (TypeError, ValueError) as e:
                raise MalformedInput(f'band {band} holds non-numeric values') from e
            if not np.isfinite(values).all():
                raise MalformedInput(f'band {band} holds missing or infinite values')
            self._bands[band] = _readonly(values)
        for arr in (self._dates, self._scenes, *self._bands.values()):
            if len(arr) != n:
                raise MalformedInput('columns of the dataset have different lengths')

    @classmethod
    def from_frame(cls, df, mission_column=MISSION_COLUMN, date_column=DATE_COLUMN,
                   scene_column=SCENE_COLUMN, band_columns=None):
        ''' Build a dataset from a DataFrame of the upstream export
        '''
        if band_columns is None:
            band_columns = BAND_COLUMNS
        required = [mission_column, date_column, scene_column] + [band_columns[b] for b in BANDS]
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise MalformedInput(f'input is missing required columns {missing}')
        try:
            dates = pd.to_datetime(df[date_column], errors='raise').dt.floor('D')
        except (ValueError, TypeError) as e:
            raise MalformedInput(f'column `{date_column}` is not parseable as dates: {e}') from e
        return cls(df[mission_column].to_numpy(dtype=object),
                   dates.to_numpy(dtype='datetime64[D]'),
                   df[scene_column].astype(str).to_numpy(dtype=object),
                   {b: df[band_columns[b]].to_numpy() for b in BANDS})

    missions = property(lambda self: self._missions)
    dates = property(lambda self: self._dates)
    scenes = property(lambda self: self._scenes)

    def band(self, name):
        ''' Read-only reflectance column of a band
        '''
        try:
            return self._bands[name]
        except KeyError:
            raise AttributeTableColumnException(f'unknown band `{name}`, expecting one of {BANDS}') from None

    def select(self, mask):
        ''' New dataset holding the rows where mask is True
        '''
        mask = np.asarray(mask, dtype=bool)
        return ReflectanceDataset(self._missions[mask], self._dates[mask], self._scenes[mask],
                                  {b: v[mask] for b, v in self._bands.items()})

    def mission_mask(self, mission):
        return self._missions == mission

    def last_date(self, mission):
        ''' Last acquisition date of a mission, None if absent
        '''
        dates = self._dates[self.mission_mask(mission)]
        if len(dates) == 0:
            return None
        return dates.max().item()

    def scene_count(self):
        return len(np.unique(self._scenes.astype(str)))

    def to_frame(self):
        df = pd.DataFrame({
            MISSION_COLUMN: self._missions,
            DATE_COLUMN: pd.to_datetime(self._dates),
            SCENE_COLUMN: self._scenes,
        })
        for band in BANDS:
            df[band] = self._bands[band]
        return df

    def __len__(self):
        return len(self._missions)

    def __str__(self):
        counts = ', '.join(f'{m}: {int(np.sum(self.mission_mask(m)))}' for m in MISSIONS)
        return f'ReflectanceDataset({len(self)} observations; {counts})'

    __repr__ = __str__


def read_dataset(filename, valid_range=VALID_RANGE, drop_invalid=False, **kwargs):
    ''' Read the filtered upstream csv export.

    Rows outside the open interval valid_range abort the read unless
    drop_invalid is set, in which case they are dropped and logged.
    Extra keyword arguments are passed to ReflectanceDataset.from_frame.
    '''
    check_filename_exist(filename)
    df = pd.read_csv(filename)
    LOG.info('read %d rows from %s', len(df), filename)
    if valid_range is not None:
        band_columns = kwargs.get('band_columns') or BAND_COLUMNS
        columns = [band_columns[b] for b in BANDS if band_columns[b] in df.columns]
        values = df[columns].apply(pd.to_numeric, errors='coerce')
        low, high = valid_range
        outside = ((values <= low) | (values >= high)).any(axis=1)
        if outside.any():
            if not drop_invalid:
                raise MalformedInput(f'{int(outside.sum())} rows outside the valid reflectance range {valid_range}')
            LOG.warning('dropping %d rows outside the valid reflectance range %s',
                        int(outside.sum()), valid_range)
            df = df.loc[~outside].reset_index(drop=True)
    return ReflectanceDataset.from_frame(df, **kwargs)
