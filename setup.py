#!/usr/bin/env python3
from __future__ import annotations

import re
import setuptools
import pathlib
import sys
import toml

__minver__ = '3.8'
__author__ = 'Gary Hammock'
__slogan__ = 'A command-line, multiple hash algorithm file integrity checking program.'
__topics__ = [
    'Development Status :: 5 - Production/Stable',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Security :: Cryptography',
    'Topic :: System :: Archiving',
    'Topic :: Utilities',
]

__build_only__ = {'setuptools', 'wheel', 'toml'}


def get_config():
    sys.path.insert(0, str(pathlib.Path(__file__).parent.absolute()))

    import gash

    def get_setup_readme(filename: str | pathlib.Path | None = None):
        if filename is None:
            filename = pathlib.Path(__file__).parent.joinpath('README.md')
        with open(filename, 'r', encoding='UTF8') as README:
            return README.read()

    def requirement_name(requirement: str) -> str:
        return re.split(R'[\s<>=!~;\[]', requirement, maxsplit=1)[0].lower()

    ppcfg: dict[str, dict[str, list[str]]] = toml.load('pyproject.toml')
    requirements = [
        r for r in ppcfg['build-system']['requires'] if requirement_name(r) not in __build_only__]
    extras = {
        'test': ['pycryptodomex', 'pytest'],
        'lint': ['flake8'],
    }
    extras['all'] = sorted({dep for deps in extras.values() for dep in deps})

    return dict(
        name=gash.__distribution__,
        version=gash.__version__,
        long_description=get_setup_readme(),
        long_description_content_type='text/markdown',
        author=__author__,
        description=__slogan__,
        license='MIT',
        python_requires=F'>={__minver__}',
        classifiers=__topics__,
        packages=setuptools.find_packages(include=('gash*',)),
        install_requires=requirements,
        extras_require=extras,
        entry_points={'console_scripts': ['gash=gash.cli:run']},
    )


if __name__ == '__main__':
    setuptools.setup(**get_config())
