# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""Color theme shared by rich output and InquirerPy prompts."""

from InquirerPy import get_style


THEME = {
    "accent": "#f59e0b",
    "accent_alt": "#38bdf8",
    "text_primary": "#e5e7eb",
    "text_muted": "#9ca3af",
    "border": "#4b5563",
    "success": "#22c55e",
    "warning": "#eab308",
    "error": "#ef4444",
}


def style(name: str) -> str:
    """Return the color for a theme slot, defaulting to the primary text color."""
    return THEME.get(name, THEME["text_primary"])


def inquirer_style():
    """Build the InquirerPy style matching the rich theme."""
    return get_style(
        {
            "questionmark": THEME["accent"],
            "answermark": THEME["accent"],
            "pointer": THEME["accent_alt"],
            "fuzzy_prompt": THEME["accent_alt"],
            "fuzzy_match": THEME["accent"],
            "marker": THEME["success"],
            "instruction": THEME["text_muted"],
        },
        style_override=False,
    )
