#
# Copyright 2017 Sangoma Technologies Inc.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
#
import setuptools


install_requires = [
    'cliff',
    'colorlog',
    'py',
    'pyyaml',
]


setuptools.setup(
    name='dhcpsniff',
    version='0.1.0',
    description='Passive BOOTP/DHCPv4 datagram decoder and listener',
    packages=setuptools.find_packages(exclude=('unittests', 'unittests.*')),
    install_requires=install_requires,
    tests_require=['pytest'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.6',
    entry_points={
        'console_scripts': [
            'dhcpsniff=sniffer.app.__main__:main',
        ],
    },
)
