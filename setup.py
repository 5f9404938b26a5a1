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


"""Setup file for lshandoff.
"""
from setuptools import setup, find_packages

NAME = 'lshandoff'
with open('README.md', 'r', encoding='utf-8') as readme:
    README = readme.read()


requires = [
    'numpy>=1.22',
    'pandas>=1.3',
    'scikit-learn>=1.0',
    'matplotlib>=3.4.1',
    'PyYAML>=5.4.1',
    'appdirs>=1.4.4',
    'wrapt>=1.12',
]

test_requires = ['pytest']

extras_require = {
    'doc': ['sphinx'],
    'test': test_requires,
}
all_extras = []
for extra_deps in extras_require.values():
    all_extras.extend(extra_deps)
extras_require['all'] = list(set(all_extras))

setup(
    name=NAME,
    version='0.1.0',
    keywords='landsat handoff surface-reflectance quantile-matching',
    description='Landsat cross-mission handoff coefficients',
    long_description=README,
    long_description_content_type="text/markdown",
    license='GPLv3 License',
    author='Jinshun Zhu',
    author_email='tirzhu@gmail.com',
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    package_data={
        '': ['*.yml', '*.yaml', 'etc/*.yaml'],
    },
    platforms='any',
    zip_safe=False,
    install_requires=requires,
    tests_require=test_requires,
    python_requires='>=3.8',
    extras_require=extras_require,
    )
