#
# Copyright 2017 Sangoma Technologies Inc.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
"""
Passive DHCP server port listener.
"""
from .config import load_yaml_config
from .listener import DHCPListener

VERSION = '0.1.0'
