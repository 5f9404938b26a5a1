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

""" algorithms utilities"""
import logging
import concurrent.futures
from multiprocessing import freeze_support

LOG = logging.getLogger(__name__)


def parallel_exec(func, lst, max_workers=4, call_back=None, on_error=None):
    """ Run func on every item of lst in a process pool.

    Results keep the order of lst. When on_error is given, an item whose
    future fails (exception in the worker, broken pool) gets
    on_error(item, error) in its place instead of the error propagating.
    """
    freeze_support()
    with concurrent.futures.ProcessPoolExecutor(
            max_workers=max_workers) as executor:
        futures = []
        for item in lst:
            try:
                futures.append(executor.submit(func, item))
            except Exception as e:
                failed = concurrent.futures.Future()
                failed.set_exception(e)
                futures.append(failed)
        if call_back is not None:
            for future in futures:
                future.add_done_callback(call_back)
        concurrent.futures.wait(futures)
    results = []
    for item, future in zip(lst, futures):
        try:
            results.append(future.result())
        except Exception as e:
            if on_error is None:
                raise
            LOG.warning("parallel task failed: %s", e)
            results.append(on_error(item, e))
    return results
