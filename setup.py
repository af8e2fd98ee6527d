#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
from os.path import join, dirname

exec(open(join(dirname(__file__), 'dynamicproxy', 'release.py'), 'rb').read())
lib_name = 'dynamicproxy'

setup(
    name='dynamicproxy',
    version=version,
    description=description,
    long_description=long_desc,
    url=url,
    author=author,
    author_email=author_email,
    classifiers=[c for c in classifiers.split('\n') if c],
    license=license,
    scripts=['setup/dynamicproxy'],
    packages=find_packages(include=[lib_name, lib_name + '.*']),
    package_dir={'%s' % lib_name: 'dynamicproxy'},
    include_package_data=True,
    install_requires=[
        'decorator >= 5.0',
    ],
    python_requires='>=3.10',
    extras_require={
        'test': ['pytest'],
    },
)
