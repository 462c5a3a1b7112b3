#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

requirements = [
    'Jinja2',
    'PyYAML',
    'netaddr',
    'mach.py',
]

test_requirements = ['pytest', ]

setup(
    name='keto',
    version='0.1.0',
    description='Render the cloud-config user data of keto clusters',
    long_description=readme,
    packages=find_packages(include=['keto', 'keto.*']),
    install_requires=requirements,
    tests_require=test_requirements,
    extras_require={'test': test_requirements},
    entry_points={
        'console_scripts': ['keto=keto.keto:main'],
    },
    python_requires='>=3.8',
)
