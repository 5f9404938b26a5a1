import os

import numpy as np
import pytest

from lshandoff.config import CFG
from lshandoff.constants import (BANDS, COEFFICIENT_FIELDS, LANDSAT_4, LANDSAT_5, LANDSAT_7,
                                 LANDSAT_8, LANDSAT_9)
from lshandoff.exceptions import KeysMismatch
from lshandoff.observer.dataset import ReflectanceDataset
from lshandoff.observer.mission import get_window, MissionPairWindow
from lshandoff.retrieval import interface
from lshandoff.retrieval.coefficient import compute_handoff
from lshandoff.retrieval.interface import compute_coefficients, HandoffRunner
from lshandoff.utils.io import read_coefficients


@pytest.fixture
def full_dataset(make_frame, make_dates):
    """ LS4 before LS7 launch, then overlapping LS5/LS7, LS7/LS8 and LS7/LS9 data
    """
    values = np.linspace(0.0, 0.1, 200)
    df = make_frame([
        (LANDSAT_4, make_dates('1985-01-01', '1993-12-14', 40), values[::5]),
        (LANDSAT_5, make_dates('1999-04-15', '2012-01-01', 200), values),
        (LANDSAT_7, make_dates('1999-04-15', '2013-06-05', 200), values),
        (LANDSAT_8, make_dates('2013-06-05', '2022-04-16', 200), values * 1.05 + 0.002),
        (LANDSAT_7, make_dates('2013-06-05', '2021-09-27', 200), values),
        (LANDSAT_9, make_dates('2021-09-27', '2022-04-16', 40), values[::5] * 0.98),
        (LANDSAT_7, make_dates('2021-09-27', '2022-04-16', 40), values[::5]),
    ])
    return ReflectanceDataset.from_frame(df)


class TestInterfaceClass:

    def test_identity_end_to_end(self, make_frame, make_dates):
        values = np.random.default_rng(3).uniform(0, 0.1, 200)
        df = make_frame([
            (LANDSAT_7, make_dates('1999-04-15', '2013-06-05', 200), values),
            (LANDSAT_5, make_dates('1999-04-15', '2013-06-05', 200), values),
        ])
        result = compute_coefficients(ReflectanceDataset.from_frame(df),
                                      windows=[get_window('LS5_LS7')], num_workers=1)
        assert len(result.table) == len(BANDS)
        for row in result.table.itertuples(index=False):
            assert abs(row.intercept) < 0.05
            assert abs(row.B1 - 1) < 0.05
            assert abs(row.B2) < 0.05
            assert row.SatCorr == LANDSAT_5

    def test_all_windows(self, full_dataset):
        result = compute_coefficients(full_dataset, num_workers=1)
        table = result.table
        assert list(table.columns) == COEFFICIENT_FIELDS
        assert len(table) == 18
        assert not table.duplicated(subset=['band', 'SatCorr']).any()
        assert set(table['band']) == set(BANDS)
        assert set(table['SatCorr']) == {LANDSAT_5, LANDSAT_8, LANDSAT_9}
        assert LANDSAT_4 not in set(table['SatCorr'])
        assert not result.failures
        assert [s.window for s in result.skipped] == ['LS4_LS7']
        assert result.skipped[0].mission == LANDSAT_4
        assert str(result.skipped[0].last_date) < '1993-12-14'
        assert len(result.get_fit('LS7_LS9', 'Red').x) == 19
        assert len(result.get_fit('LS7_LS8', 'Red').x) == 99

    def test_skip_on_empty_candidate(self, make_frame, make_dates):
        values = np.linspace(0.0, 0.1, 100)
        df = make_frame([
            (LANDSAT_7, make_dates('1999-04-15', '2022-04-16', 300), np.tile(values, 3)),
            (LANDSAT_5, make_dates('1999-04-15', '2013-06-05', 100), values),
        ])
        result = compute_coefficients(ReflectanceDataset.from_frame(df), num_workers=1)
        assert set(result.table['SatCorr']) == {LANDSAT_5}
        assert len(result.table) == 6
        assert sorted(s.window for s in result.skipped) == ['LS4_LS7', 'LS7_LS8', 'LS7_LS9']
        assert result.skipped[1].last_date is None

    def test_failures_are_isolated(self, full_dataset):
        coarse = MissionPairWindow('coarse', LANDSAT_7, LANDSAT_9, '2021-09-27', '2022-04-16', 1 / 3)
        result = compute_coefficients(full_dataset, windows=[coarse, get_window('LS5_LS7')],
                                      num_workers=1)
        assert len(result.failures) == len(BANDS)
        assert {f.band for f in result.failures} == set(BANDS)
        assert all(f.window == 'coarse' and f.kind == 'DegenerateFit' for f in result.failures)
        assert len(result.table) == len(BANDS)
        assert set(result.table['SatCorr']) == {LANDSAT_5}

    def test_single_candidate_row(self, make_frame, make_dates):
        df = make_frame([
            (LANDSAT_7, make_dates('2021-09-27', '2022-04-16', 60), np.linspace(0.01, 0.09, 60)),
            (LANDSAT_9, ['2022-01-01'], 0.05),
        ])
        result = compute_coefficients(ReflectanceDataset.from_frame(df),
                                      windows=[get_window('LS7_LS9')], num_workers=1)
        assert len(result.table) == 0
        assert len(result.failures) == len(BANDS)
        assert all(f.kind == 'DegenerateFit' for f in result.failures)

    def test_constant_candidate_band(self, make_frame, make_dates):
        values = np.linspace(0.01, 0.09, 60)
        df = make_frame([
            (LANDSAT_7, make_dates('2021-09-27', '2022-04-16', 60), values),
            (LANDSAT_9, make_dates('2021-09-27', '2022-04-16', 60),
             {b: (np.full(60, 0.03) if b == 'Nir' else values) for b in BANDS}),
        ])
        result = compute_coefficients(ReflectanceDataset.from_frame(df),
                                      windows=[get_window('LS7_LS9')], num_workers=1)
        assert [(f.band, f.kind) for f in result.failures] == [('Nir', 'DegenerateFit')]
        assert len(result.table) == len(BANDS) - 1
        assert 'Nir' not in set(result.table['band'])

    def test_unexpected_error_is_isolated(self, full_dataset, monkeypatch):
        def broken(dataset, window, band):
            if band == 'Red':
                raise TypeError('bad reflectance column')
            return compute_handoff(dataset, window, band)

        monkeypatch.setattr(interface, 'compute_handoff', broken)
        result = compute_coefficients(full_dataset, windows=[get_window('LS5_LS7')], num_workers=1)
        assert [(f.band, f.kind) for f in result.failures] == [('Red', 'TypeError')]
        assert len(result.table) == len(BANDS) - 1

    def test_duplicated_rows(self, full_dataset):
        with pytest.raises(KeysMismatch):
            compute_coefficients(full_dataset, windows=[get_window('LS5_LS7'), get_window('LS5_LS7')],
                                 num_workers=1)

    def test_parallel_matches_serial(self, full_dataset):
        serial = compute_coefficients(full_dataset, num_workers=1)
        parallel = compute_coefficients(full_dataset, num_workers=2)
        key = ['SatCorr', 'band']
        a = serial.table.sort_values(key).reset_index(drop=True)
        b = parallel.table.sort_values(key).reset_index(drop=True)
        assert a[key].equals(b[key])
        np.testing.assert_allclose(a[['intercept', 'B1', 'B2']].to_numpy(),
                                   b[['intercept', 'B1', 'B2']].to_numpy())

    def test_runner(self, full_dataset, tmp_path):
        input_file = str(tmp_path / 'filtered.csv')
        df = full_dataset.to_frame().rename(columns={b: CFG['band_columns'][b] for b in BANDS})
        df.to_csv(input_file, index=False)
        config = dict(CFG)
        config.update({
            'input_file': input_file,
            'output_dir': str(tmp_path / 'out'),
            'log_level': None,
            'num_workers': 1,
            'plot': True,
        })
        runner = HandoffRunner(config)
        result = runner.run()
        table = read_coefficients(runner.coefficient_file)
        assert len(table) == 18
        np.testing.assert_allclose(table['B1'].to_numpy(), result.table['B1'].to_numpy())
        report = os.path.join(config['output_dir'], config['report_file'])
        with open(report, encoding='utf-8') as f:
            text = f.read()
        assert 'SKIPPED LS4_LS7' in text
        assert '18 coefficient rows' in text
        figures = os.listdir(os.path.join(config['output_dir'], config['figure_dir']))
        assert len(figures) == 18
