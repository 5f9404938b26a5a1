import numpy as np
import pandas as pd
import pytest

import matplotlib
matplotlib.use('Agg')

from lshandoff.config import MISSION_COLUMN, DATE_COLUMN, SCENE_COLUMN, BAND_COLUMNS
from lshandoff.constants import BANDS


def synthetic_frame(blocks):
    """ blocks: list of (mission, dates, values) where values is either an
    array applied to every band or a {band: array} dict
    """
    frames = []
    for mission, dates, values in blocks:
        dates = pd.to_datetime(pd.Series(dates))
        n = len(dates)
        data = {
            MISSION_COLUMN: [mission] * n,
            DATE_COLUMN: dates.dt.strftime('%Y-%m-%d').tolist(),
            SCENE_COLUMN: [f'{mission}_{i:05d}' for i in range(n)],
        }
        for band in BANDS:
            col = values[band] if isinstance(values, dict) else values
            data[BAND_COLUMNS[band]] = np.broadcast_to(np.asarray(col, dtype=float), (n,)).copy()
        frames.append(pd.DataFrame(data))
    return pd.concat(frames, ignore_index=True)


def spread_dates(start, end, n):
    """ n dates strictly between start and end
    """
    start, end = pd.Timestamp(start), pd.Timestamp(end)
    days = (end - start).days
    offsets = np.linspace(1, days - 1, n).astype(int)
    return [start + pd.Timedelta(days=int(d)) for d in offsets]


@pytest.fixture
def make_frame():
    return synthetic_frame


@pytest.fixture
def make_dates():
    return spread_dates
