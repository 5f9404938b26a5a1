import numpy as np
import pytest

from lshandoff.constants import LANDSAT_7, LANDSAT_8, LANDSAT_9
from lshandoff.exceptions import (DegenerateFit, MismatchedListLengthsException,
                                  InsufficientOverlapData)
from lshandoff.observer.dataset import ReflectanceDataset
from lshandoff.observer.mission import get_window, MissionPairWindow
from lshandoff.retrieval.coefficient import fit_handoff, compute_handoff
from lshandoff.retrieval.window import window_observations


class TestCoeffClass:

    def test_polynomial_round_trip(self):
        x = np.array([0, 1, 2, 3, 4], dtype=float)
        y = 2 + 3 * x + 0.5 * x ** 2
        (a, b, c), _ = fit_handoff(x, y)
        assert abs(a - 2.0) < 1e-6
        assert abs(b - 3.0) < 1e-6
        assert abs(c - 0.5) < 1e-6

    def test_deterministic(self):
        rng = np.random.default_rng(7)
        x = np.sort(rng.uniform(0, 0.1, 99))
        y = 0.001 + 0.95 * x + 0.3 * x ** 2 + rng.normal(0, 1e-4, 99)
        assert fit_handoff(x, y)[0] == fit_handoff(x, y)[0]

    def test_degenerate(self):
        with pytest.raises(DegenerateFit):
            fit_handoff([0.01, 0.02], [0.01, 0.02])

    def test_mismatched(self):
        with pytest.raises(MismatchedListLengthsException):
            fit_handoff([0.01, 0.02, 0.03], [0.01, 0.02])

    def test_window_excludes_boundaries(self, make_frame):
        window = get_window('LS7_LS8')
        df = make_frame([
            (LANDSAT_7, ['2013-02-11', '2013-02-12', '2022-04-16'], 0.05),
            (LANDSAT_8, ['2013-02-11', '2022-04-15', '2022-04-16'], 0.04),
        ])
        ref, cand = window_observations(ReflectanceDataset.from_frame(df), window)
        assert [str(d) for d in ref.dates] == ['2013-02-12']
        assert [str(d) for d in cand.dates] == ['2022-04-15']

    def test_compute_handoff(self, make_frame, make_dates):
        window = get_window('LS7_LS8')
        values = np.linspace(0.0, 0.1, 150)
        df = make_frame([
            (LANDSAT_7, make_dates('2013-02-11', '2022-04-16', 150), values),
            (LANDSAT_8, make_dates('2013-02-11', '2022-04-16', 150), values * 0.9),
            (LANDSAT_8, ['2010-01-01'], 0.19),
        ])
        fit = compute_handoff(ReflectanceDataset.from_frame(df), window, 'Nir')
        assert fit.mission == LANDSAT_8
        assert len(fit.x) == 99
        a, b, c = fit.coeffs
        assert abs(a) < 1e-6
        assert abs(b - 1 / 0.9) < 1e-4
        assert abs(c) < 1e-3
        assert fit.counts[LANDSAT_8] == {'scenes': 150, 'rows': 150}
        assert fit.counts[LANDSAT_7] == {'scenes': 150, 'rows': 150}
        assert fit.r2 > 0.9999
        assert fit.as_row() == {'band': 'Nir', 'intercept': a, 'B1': b, 'B2': c, 'SatCorr': LANDSAT_8}

    def test_grid_is_pair_specific(self, make_frame, make_dates):
        window = get_window('LS7_LS9')
        rng = np.random.default_rng(1)
        df = make_frame([
            (LANDSAT_7, make_dates('2021-09-27', '2022-04-16', 1200), rng.uniform(0, 0.1, 1200)),
            (LANDSAT_9, make_dates('2021-09-27', '2022-04-16', 1200), rng.uniform(0, 0.1, 1200)),
        ])
        fit = compute_handoff(ReflectanceDataset.from_frame(df), window, 'Blue')
        assert len(fit.x) == 19
        assert len(fit.y) == 19

    def test_empty_window(self, make_frame, make_dates):
        window = get_window('LS7_LS9')
        df = make_frame([
            (LANDSAT_7, make_dates('2021-09-27', '2022-04-16', 50), 0.05),
            (LANDSAT_9, ['2023-01-01'], 0.05),
        ])
        with pytest.raises(InsufficientOverlapData) as info:
            compute_handoff(ReflectanceDataset.from_frame(df), window, 'Red')
        assert info.value.mission == LANDSAT_9
        assert str(info.value.last_date) == '2023-01-01'

    def test_degenerate_grid(self, make_frame, make_dates):
        window = MissionPairWindow('coarse', LANDSAT_7, LANDSAT_9, '2021-09-27', '2022-04-16', 1 / 3)
        df = make_frame([
            (LANDSAT_7, make_dates('2021-09-27', '2022-04-16', 20), np.linspace(0, 0.1, 20)),
            (LANDSAT_9, make_dates('2021-09-27', '2022-04-16', 20), np.linspace(0, 0.1, 20)),
        ])
        with pytest.raises(DegenerateFit) as info:
            compute_handoff(ReflectanceDataset.from_frame(df), window, 'Red')
        assert info.value.band == 'Red'
        assert info.value.window == 'coarse'

    def test_constant_candidate(self):
        with pytest.raises(DegenerateFit):
            fit_handoff([0.04] * 19, np.linspace(0.01, 0.09, 19))
