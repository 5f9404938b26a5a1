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
All exceptions used within LSHANDOFF. 

"""

class HandoffException(Exception):
    pass

class HandoffFileNotFoundException(HandoffException):
    "Failed to find a file"

class ParameterException(HandoffException):
    "Incorrect parameters passed to function"

class KeysMismatch(HandoffException):
    "Keys do not match expected"

class MismatchedListLengthsException(HandoffException):
    "Two lists had different lengths, when they were supposed to be the same length"

class AttributeTableColumnException(HandoffException):
    "Unable to find specified column"

class WindowNotFoundException(HandoffException):
    """Exception due to an unknown mission pair window."""
    pass


class MalformedInput(HandoffException):
    """A row or column of the input dataset breaks the upstream filtering contract."""
    pass


class InsufficientOverlapData(HandoffException):
    """A mission pair window holds no observations for one of its missions.

    ``mission`` is the mission without data in the window and
    ``last_date`` the last date it has anywhere in the dataset (None when
    the mission is absent altogether).
    """
    def __init__(self, window, mission, last_date=None):
        self.window = window
        self.mission = mission
        self.last_date = last_date
        msg = f"no {mission} observations inside window {window}"
        if last_date is not None:
            msg += f" (last {mission} observation on {last_date:%Y-%m-%d})"
        super().__init__(msg)

    def __reduce__(self):
        return (InsufficientOverlapData, (self.window, self.mission, self.last_date))


class DegenerateFit(HandoffException):
    """Too few quantile points for a polynomial fit."""
    def __init__(self, npoints, degree, window=None, band=None):
        self.npoints = npoints
        self.degree = degree
        self.window = window
        self.band = band
        msg = f"degree {degree} fit needs at least {degree + 1} distinct points, got {npoints}"
        if window is not None or band is not None:
            msg = f"[{window}/{band}] " + msg
        super().__init__(msg)

    def __reduce__(self):
        return (DegenerateFit, (self.npoints, self.degree, self.window, self.band))


def assert_required_keywords_provided(keywords, **kwargs):
    """
    This method checks if all the required keyword arguments to complete a computation
        are provided in **kwargs
    Args:
        keywords ([list[str]], optional): Required keywords.
    Raises:
        ParameterException: custom exception
    """
    for keyword in keywords:
        if keyword not in kwargs or kwargs[keyword] is None:
            message = (
                f"Keyword argument {keyword} must be provided for this computation "
            )
            raise ParameterException(message)
