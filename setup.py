#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup

from email.utils import parseaddr
import flask_oauthflow

author, author_email = parseaddr(flask_oauthflow.__author__)


def fread(filename):
    with open(filename) as f:
        return f.read()


setup(
    name='Flask-OAuthFlow',
    version=flask_oauthflow.__version__,
    author=author,
    author_email=author_email,
    url=flask_oauthflow.__homepage__,
    packages=[
        "flask_oauthflow",
    ],
    description="OAuth 1.0a authorization flows for Flask and the CLI",
    zip_safe=False,
    include_package_data=True,
    platforms='any',
    long_description=fread('README.rst'),
    license='BSD',
    install_requires=[
        'Flask>=2.2',
        'blinker',
        'cachelib',
        'oauthlib>=3.0',
        'requests',
        'requests-oauthlib>=1.0',
    ],
    extras_require={
        'test': ['pytest', 'mock'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved',
        'License :: OSI Approved :: BSD License',
        'Operating System :: MacOS',
        'Operating System :: POSIX',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ]
)
