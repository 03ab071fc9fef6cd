version = '0.1.0'

import sys
from setuptools import setup, find_packages

with open("README.md") as f:
    long_description = f.read()

with open("requirements.txt") as f:
    requirements = list(filter(None,f.read().split('\n')))

setup(
    name = 'ephdb',
    description = 'ID counters and schema provisioning for the Ephenation MongoDB database.',
    long_description = long_description,
    long_description_content_type = "text/markdown",
    version = version,
    license = 'GPL-3.0-only',
    packages = find_packages(exclude=['tests']),
    package_data = {'ephdb': ['schemas/counter.schema.json']},
    test_suite = 'tests',
    install_requires = requirements,
    extras_require = {
        'test': ['pytest']
    },
    python_requires = '>=3.9',
    entry_points = {
        'console_scripts': [
            'init-db=ephdb.scripts.init_db:run',
            'init-indexes=ephdb.scripts.init_indexes:run',
            'repair-counters=ephdb.scripts.repair_counters:run'
        ]
    }
)
