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

import time

import wrapt


class Timer:
    timings = {}
    enabled = False

    def __init__(self, enabled=True):
        Timer.enabled = enabled

    def __str__(self):
        return "Timer"

    __repr__ = __str__

    @classmethod
    def timeit(cls,
               level=0,
               func_name=None,
               prefix="[Method] "):
        @wrapt.decorator
        def wrapper(func, instance, args, kwargs):
            if not cls.enabled:
                return func(*args, **kwargs)
            _prefix = "{:>12s}".format(prefix)
            _name = _prefix + "{:>28}".format(
                func.__name__ if func_name is None else func_name)
            _t = time.time()
            rs = func(*args, **kwargs)
            _t = time.time() - _t
            try:
                cls.timings[_name]["timing"] += _t
                cls.timings[_name]["call_time"] += 1
            except KeyError:
                cls.timings[_name] = {
                    "level": level,
                    "timing": _t,
                    "call_time": 1
                }
            return rs

        return wrapper

    @classmethod
    def show_log(cls, level=2):
        print()
        print("=" * 80 + "\n" + "Timer log\n" + "-" * 80)
        if cls.timings:
            for key in sorted(cls.timings.keys()):
                timing_info = cls.timings[key]
                if level >= timing_info["level"]:
                    print("{:<42s} :  {:12.7} s (Call Time: {:6d})".format(
                        key, timing_info["timing"], timing_info["call_time"]))
        print("-" * 80)

    @classmethod
    def disable(cls):
        cls.enabled = False


