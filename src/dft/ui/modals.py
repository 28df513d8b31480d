"""Modal dialogs as a tagged union.

New/Edit carry an input buffer, an inline error and a button cursor; Delete
only a button cursor; Help nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

PRIMARY = 0
CANCEL = 1


@dataclass
class _ButtonModal:
    selected_button: int = PRIMARY

    def toggle_button(self) -> None:
        self.selected_button = CANCEL if self.selected_button == PRIMARY else PRIMARY

    @property
    def cancel_selected(self) -> bool:
        return self.selected_button == CANCEL


@dataclass
class _InputModal(_ButtonModal):
    input_buffer: str = ""
    error: str | None = None

    def type_char(self, char: str) -> None:
        self.input_buffer += char
        self.error = None

    def backspace(self) -> None:
        self.input_buffer = self.input_buffer[:-1]
        self.error = None


@dataclass
class NewModal(_InputModal):
    title: ClassVar[str] = "New Task"
    primary_label: ClassVar[str] = "Create"


@dataclass
class EditModal(_InputModal):
    title: ClassVar[str] = "Edit Task"
    primary_label: ClassVar[str] = "Save"


@dataclass
class DeleteModal(_ButtonModal):
    # Destructive: Cancel is preselected
    selected_button: int = CANCEL

    title: ClassVar[str] = "Delete Task?"
    primary_label: ClassVar[str] = "Delete"


@dataclass
class HelpModal:
    title: ClassVar[str] = "Key Bindings"


Modal = NewModal | EditModal | DeleteModal | HelpModal
