# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""UI helper exports for the awsssohelper CLI."""

from .components import console, render_card, render_status
from .pickers import InteractivePicker, Picker, ScriptedPicker
from .theme import THEME, style, inquirer_style

__all__ = [
    "console",
    "render_card",
    "render_status",
    "Picker",
    "InteractivePicker",
    "ScriptedPicker",
    "THEME",
    "style",
    "inquirer_style",
]
