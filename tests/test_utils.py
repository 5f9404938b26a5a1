import logging

import pytest

from lshandoff.config import get_config, logging_on, logging_off, get_logger, NullHandler
from lshandoff.exceptions import ParameterException, assert_required_keywords_provided
from lshandoff.utils.algorithm import parallel_exec
from lshandoff.utils.io import ensure_dir
from lshandoff.utils.timer import Timer


class TestUtilsClass:

    def test_builtin_config(self):
        cfg = get_config()
        assert cfg['band_columns']['Swir2'] == 'med_Swir2'
        assert cfg['output_dir']

    def test_user_config(self, tmp_path):
        user = tmp_path / 'user.yaml'
        user.write_text("output_dir: '/tmp/handoff'\nband_columns:\n  Blue: 'sr_blue'\n")
        cfg = get_config(str(user))
        assert cfg['output_dir'] == '/tmp/handoff'
        assert cfg['band_columns']['Blue'] == 'sr_blue'
        assert cfg['band_columns']['Red'] == 'med_Red'

    def test_logging(self):
        logging_on('DEBUG')
        assert logging.getLogger('').level == logging.DEBUG
        logging_off()
        assert isinstance(logging.getLogger('').handlers[0], NullHandler)
        assert get_logger('lshandoff.test').handlers

    def test_required_keywords(self):
        assert_required_keywords_provided(['a'], a=1)
        with pytest.raises(ParameterException):
            assert_required_keywords_provided(['a', 'b'], a=1, b=None)

    def test_parallel_exec(self):
        assert parallel_exec(abs, [-1, 2, -3, 4], max_workers=2) == [1, 2, 3, 4]

    def test_parallel_exec_failures(self):
        assert parallel_exec(abs, [-1, 'x', 3], max_workers=2,
                             on_error=lambda item, e: None) == [1, None, 3]
        with pytest.raises(TypeError):
            parallel_exec(abs, [-1, 'x', 3], max_workers=2)

    def test_timer(self):
        Timer(enabled=True)

        @Timer.timeit(func_name='square')
        def square(x):
            return x * x

        assert square(3) == 9
        assert any(k.endswith('square') for k in Timer.timings)
        Timer.disable()
        assert not Timer.enabled

    def test_ensure_dir(self, tmp_path):
        filename = str(tmp_path / 'a' / 'b' / 'c.csv')
        ensure_dir(filename)
        assert (tmp_path / 'a' / 'b').is_dir()
