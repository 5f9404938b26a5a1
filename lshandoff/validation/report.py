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

"""lshandoff.validation.report module. Provides: textual summaries and
quantile-quantile plots of the handoff fits for visual QA.
"""

import os
import logging
import numpy as np
import matplotlib.pyplot as plt

from lshandoff.utils.io import ensure_dir

LOG = logging.getLogger(__name__)

plt.rcParams["font.size"] = 12


def summary_text(fit):
    ''' Fit statistics and sample counts of one handoff fit
    '''
    a, b, c = fit.coeffs
    window = fit.window
    lines = [
        f"{fit.label}: {window.candidate} -> {window.reference}",
        f"  window ({window.start}, {window.end}), {len(window.probabilities)} quantiles",
    ]
    for mission, count in fit.counts.items():
        lines.append(f"  {mission}: {count['scenes']} scenes, {count['rows']} rows")
    lines.append(f"  {window.reference} = {a:.6f} + {b:.6f} * x + {c:.6f} * x^2")
    lines.append(f"  R2={fit.r2:.5f}  RMSE={fit.rmse:.6f}  N={len(fit.x)}")
    return '\n'.join(lines)


def result_text(result):
    ''' Full report of a handoff run, fits, skipped windows then failures
    '''
    blocks = [summary_text(fit) for fit in result.fits]
    for skipped in result.skipped:
        blocks.append(f"SKIPPED {skipped.window}: {skipped}")
    for failure in result.failures:
        blocks.append(f"FAILED {failure}")
    blocks.append(f"{len(result.table)} coefficient rows")
    return '\n\n'.join(blocks)


def plot_fit(fit, filename=None):
    ''' Scatter the quantile pairs and overlay the fitted polynomial
    '''
    window = fit.window
    plt.figure(figsize=[7, 6])
    lo = min(np.min(fit.x), np.min(fit.y))
    hi = max(np.max(fit.x), np.max(fit.y))
    plt.plot([lo, hi], [lo, hi], 'black', lw=0.8, ls='--')
    plt.scatter(fit.x, fit.y, c='r', marker='o', s=8)
    xs = np.linspace(np.min(fit.x), np.max(fit.x), num=100)
    plt.plot(xs, fit.predict(xs), 'b', lw=1.2)
    delta_y = (hi - lo) / 18
    a, b, c = fit.coeffs
    plt.text(lo, hi - delta_y, '$N=%.f$' % len(fit.x))
    plt.text(lo, hi - delta_y * 2, '$R^2=%.5f$' % fit.r2)
    plt.text(lo, hi - delta_y * 3, '$RMSE=%.5f$' % fit.rmse)
    plt.text(lo, hi - delta_y * 4, '$y=%.4f%+.4fx%+.4fx^2$' % (a, b, c))
    plt.xlabel(f'{window.candidate} {fit.band} quantile')
    plt.ylabel(f'{window.reference} {fit.band} quantile')
    plt.title(f'{fit.band} handoff: {window.candidate} to {window.reference}')
    if filename is None:
        plt.show()
    else:
        ensure_dir(filename)
        plt.savefig(filename, dpi=150)
    plt.close()
    return filename


def write_report(result, directory, report_file='handoff_report.txt', figure_dir='figures', plot=True):
    ''' Write the text report and, optionally, one figure per fit
    '''
    report_path = os.path.join(directory, report_file)
    ensure_dir(report_path)
    with open(report_path, 'w', encoding='utf-8') as f:
        f.write(result_text(result))
        f.write('\n')
    LOG.info('wrote handoff report to %s', report_path)
    figures = []
    if plot:
        for fit in result.fits:
            filename = os.path.join(directory, figure_dir, f'{fit.label}.png')
            figures.append(plot_fit(fit, filename))
        LOG.info('saved %d handoff figures to %s', len(figures), os.path.join(directory, figure_dir))
    return report_path, figures
