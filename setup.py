#!/usr/bin/env python
from setuptools import setup
setup(
    name='potionobjects',
    version='1.0',
    description='live Python objects for Potion-style JSON REST APIs',
    author='Six Apart Ltd.',
    author_email='python@sixapart.com',

    packages=['potionobjects'],
    python_requires='>=3.8',
    install_requires=['simplejson>=3.3.0', 'httplib2>=0.9'],
    extras_require={
        'test': ['mock>=4.0'],
    },
)
