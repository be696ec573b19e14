# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""Setup script for installing featuregrid."""

from setuptools import find_packages, setup

setup(
    name='featuregrid',
    version='0.1.0',
    description='Partition vector features into a regular grid of cells by centroid or cropping.',
    license='Apache-2.0',
    python_requires='>=3.8',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=[
        'numpy',
        'pandas',
        'geopandas',
        'shapely>=2.0',
        'xarray',
        'pyyaml',
        'tqdm'
    ],
    extras_require={
        'test': ['pytest']
    }
)
