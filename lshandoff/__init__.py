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

"""Landsat cross-mission handoff coefficients.
"""

from lshandoff.constants import BANDS, MISSIONS, REFERENCE_MISSION
from lshandoff.observer.dataset import ReflectanceDataset, read_dataset
from lshandoff.observer.mission import MissionPairWindow, get_window, get_windows
from lshandoff.retrieval.coefficient import fit_handoff, compute_handoff
from lshandoff.retrieval.interface import compute_coefficients, HandoffRunner
from lshandoff.retrieval.correction import apply_handoff

__version__ = '0.1.0'
