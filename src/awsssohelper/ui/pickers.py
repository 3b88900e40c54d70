# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""Selection prompts used when an account or role has to be chosen.

``Picker.choose_one`` returns the selected candidate, or ``None`` when the
user dismissed the prompt. A dismissed prompt is not an error: the caller
simply produces no credential for that selection.
"""

import sys
from collections import deque
from typing import Callable, Iterable, Optional, Protocol, Sequence, TypeVar, Union

from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from prompt_toolkit.application import create_app_session
from prompt_toolkit.output import create_output

from .theme import inquirer_style

T = TypeVar("T")


class Picker(Protocol):
    def choose_one(
        self,
        message: str,
        candidates: Sequence[T],
        label: Callable[[T], str] = str,
    ) -> Optional[T]:
        ...


class InteractivePicker:
    """Fuzzy-search picker backed by InquirerPy.

    Escape skips the prompt and Ctrl-C aborts it; both count as a cancel.
    The prompt is drawn on stderr so stdout only carries credentials.
    """

    def choose_one(
        self,
        message: str,
        candidates: Sequence[T],
        label: Callable[[T], str] = str,
    ) -> Optional[T]:
        if not candidates:
            return None

        choices = [Choice(value=index, name=label(candidate)) for index, candidate in enumerate(candidates)]
        try:
            with create_app_session(output=create_output(stdout=sys.stderr)):
                index = inquirer.fuzzy(
                    message=message,
                    choices=choices,
                    mandatory=False,
                    keybindings={"skip": [{"key": "escape"}]},
                    instruction="(type to filter, esc to cancel)",
                    style=inquirer_style(),
                ).execute()
        except KeyboardInterrupt:
            return None

        if index is None:
            return None
        return candidates[index]


Answer = Union[int, str, None]


class ScriptedPicker:
    """Non-interactive picker that replays prepared answers.

    Each answer is a candidate index, a candidate label, or ``None`` to
    cancel. Once the answers run out every further prompt is cancelled, so
    ``ScriptedPicker()`` never selects anything. Every prompt is recorded in
    ``prompts`` as ``(message, labels)``.
    """

    def __init__(self, answers: Iterable[Answer] = ()):
        self._answers = deque(answers)
        self.prompts: list[tuple[str, list[str]]] = []

    def choose_one(
        self,
        message: str,
        candidates: Sequence[T],
        label: Callable[[T], str] = str,
    ) -> Optional[T]:
        labels = [label(candidate) for candidate in candidates]
        self.prompts.append((message, labels))

        if not self._answers:
            return None
        answer = self._answers.popleft()

        if answer is None:
            return None
        if isinstance(answer, int):
            return candidates[answer] if 0 <= answer < len(candidates) else None
        if answer in labels:
            return candidates[labels.index(answer)]
        return None
