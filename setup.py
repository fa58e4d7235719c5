#!/usr/bin/env python3

from os import path

from setuptools import setup

from git_ff import __version__

this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, 'README.md'), mode="r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name='git-ff',
    version=__version__,
    description='Fast-forward many branches at once and list branches by recency',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='MIT',
    keywords='git',
    packages=['git_ff', 'git_ff.client'],
    entry_points={
        'console_scripts': [
            'git-ff = git_ff.bin:main_ff',
            'git-recent = git_ff.bin:main_recent'
        ]
    },
    python_requires='>=3.6, <4',
    extras_require={
        'test': ['pytest', 'pytest-mock']
    },
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent'
    ],
    # This is a pure-Python but NOT universal wheel:
    # https://realpython.com/python-wheels/#different-types-of-wheels
    options={'bdist_wheel': {'universal': False}},
)
