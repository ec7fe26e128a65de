#!/usr/bin/env python
# -*-coding: utf-8 -*-
from setuptools import setup
import io
import logging
import os

import omrhythm

here = os.path.abspath(os.path.dirname(__file__))


def read(*filenames, **kwargs):
    encoding = kwargs.get('encoding', 'utf-8')
    sep = kwargs.get('sep', '\n')
    buf = []
    for filename in filenames:
        with io.open(filename, encoding=encoding) as f:
            buf.append(f.read())
    return sep.join(buf)


def get_long_description():
    readme = os.path.join(here, 'README.md')
    changes = os.path.join(here, 'CHANGES.md')

    if os.path.isfile(readme) and os.path.isfile(changes):
        long_description = read(readme, changes)
    else:
        logging.warning('Could not find README.md and CHANGES.md file'
                        ' in directory {0}. Contents:'
                        ' {1}'.format(here, os.listdir(here)))
        long_description = 'Rhythm reconstruction for optical music' \
                           ' recognition: time slots and voices.' \
                           ' [README.md and CHANGES.md not found]'
    return long_description

setup(
    name='omrhythm',
    version=omrhythm.__version__,
    license='MIT Software License',
    author='omrhythm contributors',
    install_requires=['numpy>=1.11.1',
                      'scipy>=1.4.0'],
    description='Rhythm reconstruction for optical music recognition:'
                ' time slots and voices.',
    long_description=get_long_description(),
    long_description_content_type='text/markdown',
    packages=['omrhythm'],
    include_package_data=True,
    platforms='any',
    python_requires='>=3.6',
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Natural Language :: English',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Topic :: Multimedia :: Sound/Audio :: Analysis',
        ],
)
