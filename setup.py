# encoding: utf-8

import os
from setuptools import setup, find_packages

from kioskdir import (__version__, __description__, __long_description__,
                      __license__)

HERE = os.path.dirname(__file__)


def _requirements(filepath):
    with open(os.path.join(HERE, filepath), "r") as f:
        return [
            line.strip() for line in f
            if line.strip() and not line.startswith("#")
        ]


extras_require = {}
_extras_groups = [
    ("dev", "dev-requirements.txt"),
]

for group, filepath in _extras_groups:
    extras_require[group] = _requirements(filepath)

setup(
    name="kioskdir",
    version=__version__,
    description=__description__,
    long_description=__long_description__,
    license=__license__,
    python_requires=">=3.9",
    packages=find_packages(include=["kioskdir", "kioskdir.*"]),
    include_package_data=True,
    package_data={
        "kioskdir.migration": ["alembic.ini", "script.py.mako"],
    },
    install_requires=_requirements("requirements.txt"),
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "kioskdir = kioskdir.cli.cli:kioskdir",
        ],
    },
)
