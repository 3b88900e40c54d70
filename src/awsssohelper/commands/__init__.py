# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
awsssohelper Commands Package.

This package contains all awsssohelper CLI commands organized as separate
modules for better maintainability and modularity.
"""

from .credentials import credentials
from .cache import status, logout
from .config import config_app

__all__ = ["credentials", "status", "logout", "config_app"]
