"""Interactive session controller.

Turns keystrokes into navigation moves and tree operations, owns the modal
and feedback state, and saves after every mutation. It knows nothing about
the terminal: ``ui.interactive`` feeds it keys and ``ui.render`` draws it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import readchar

from dft import navigation as nav
from dft.errors import DftError
from dft.models import Node, Project
from dft.navigation import NavigationState, NavResult
from dft.operations import add_child_node, delete_child, edit_node_title, toggle_status
from dft.storage import ProjectStore
from dft.ui.feedback import Feedback
from dft.ui.modals import DeleteModal, EditModal, HelpModal, Modal, NewModal
from dft.validation import validate_title

logger = logging.getLogger("dft.session")

VIEW_LIST = "list"
VIEW_ZEN = "zen"

BACKSPACE_KEYS = ("\x7f", "\x08", readchar.key.BACKSPACE)
ENTER_KEYS = ("\r", "\n", readchar.key.ENTER)

MSG_CREATED = "Created task"
MSG_UPDATED = "Updated"
MSG_DELETED = "Deleted"
MSG_DONE = "Done"
MSG_REOPENED = "Marked open"
MSG_SAVE_FAILED = "Failed to save"


class Session:
    """State of one interactive session on one project."""

    def __init__(
        self,
        project: Project,
        store: ProjectStore,
        *,
        feedback_timeout: float = 1.5,
        view: str = VIEW_LIST,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.project = project
        self._store = store
        self.nav = NavigationState()
        self.modal: Modal | None = None
        self.feedback = Feedback(feedback_timeout, clock)
        self.view = view if view in (VIEW_LIST, VIEW_ZEN) else VIEW_LIST
        self.running = True

        self._nav_keys: dict[str, Callable[[], None]] = {}
        for keys, action in (
            ((readchar.key.UP, "k"), lambda: self._navigate(nav.move_up)),
            ((readchar.key.DOWN, "j"), lambda: self._navigate(nav.move_down)),
            (
                (readchar.key.RIGHT, "l", " ", *ENTER_KEYS),
                lambda: self._navigate(nav.dive_in),
            ),
            ((readchar.key.LEFT, "h"), lambda: self._navigate(nav.go_back)),
            (("n",), self.open_new_modal),
            (("e",), self.open_edit_modal),
            (("d",), self.toggle_done),
            (("x",), self.open_delete_modal),
            (("?",), self.open_help_modal),
            (("m",), self.toggle_view),
            (("r",), lambda: None),  # redraw happens after every key
            (("q", readchar.key.CTRL_C), self.quit),
        ):
            for key in keys:
                self._nav_keys[key] = action

    # --- Queries used by the renderer ---

    @property
    def root(self) -> Node:
        return self.project.root

    @property
    def current_list(self) -> list[Node]:
        return nav.get_current_list(self.nav, self.root)

    @property
    def selected_node(self) -> Node | None:
        return nav.get_selected_node(self.nav, self.root)

    @property
    def breadcrumb(self) -> list[Node]:
        return nav.get_breadcrumb_path(self.nav, self.root)

    @property
    def feedback_message(self) -> str | None:
        return self.feedback.current()

    def parent_for_new_item(self) -> Node:
        """Where a new node goes: the viewed parent, or the root."""
        return nav.get_current_parent(self.nav, self.root) or self.root

    # --- Input ---

    def handle_key(self, key: str) -> None:
        """Process one keystroke to completion."""
        self.feedback.expire()
        if self.modal is not None:
            self._handle_modal_key(key)
        else:
            action = self._nav_keys.get(key)
            if action is not None:
                action()
        nav.ensure_valid_selection(self.nav, self.root)

    def _navigate(self, move: Callable[[NavigationState, Node], NavResult]) -> None:
        result = move(self.nav, self.root)
        if not result.success and result.feedback:
            self.show_feedback(result.feedback)

    def _handle_modal_key(self, key: str) -> None:
        modal = self.modal
        if isinstance(modal, HelpModal):
            self.close_modal()
            return

        if key == readchar.key.ESC:
            self.close_modal()
        elif key == readchar.key.TAB:
            modal.toggle_button()
        elif key in ENTER_KEYS:
            self.submit_modal()
        elif isinstance(modal, (NewModal, EditModal)):
            if key in BACKSPACE_KEYS:
                modal.backspace()
            elif len(key) == 1 and key.isprintable():
                modal.type_char(key)

    # --- Modals ---

    def open_new_modal(self) -> None:
        self.modal = NewModal()

    def open_edit_modal(self) -> None:
        selected = self.selected_node
        if selected is None:
            self.show_feedback(nav.NOTHING_SELECTED)
            return
        self.modal = EditModal(input_buffer=selected.title)

    def open_delete_modal(self) -> None:
        if self.selected_node is None:
            self.show_feedback(nav.NOTHING_SELECTED)
            return
        self.modal = DeleteModal()

    def open_help_modal(self) -> None:
        self.modal = HelpModal()

    def close_modal(self) -> None:
        self.modal = None

    def submit_modal(self) -> None:
        modal = self.modal
        if modal is None or isinstance(modal, HelpModal):
            return
        if modal.cancel_selected:
            self.close_modal()
            return

        if isinstance(modal, (NewModal, EditModal)):
            result = validate_title(modal.input_buffer)
            if not result.is_valid:
                modal.error = result.error
                return

        try:
            if isinstance(modal, NewModal):
                self._submit_new(modal)
            elif isinstance(modal, EditModal):
                self._submit_edit(modal)
            else:
                self._submit_delete()
        except DftError as e:
            self.close_modal()
            self.show_feedback(str(e))

    def _submit_new(self, modal: NewModal) -> None:
        add_child_node(self.parent_for_new_item(), modal.input_buffer)
        self.close_modal()
        self._persist(MSG_CREATED)

    def _submit_edit(self, modal: EditModal) -> None:
        selected = self.selected_node
        self.close_modal()
        if selected is None:
            return
        edit_node_title(selected, modal.input_buffer)
        self._persist(MSG_UPDATED)

    def _submit_delete(self) -> None:
        selected = self.selected_node
        self.close_modal()
        if selected is None:
            return
        deleted_index = self.nav.selected_index
        delete_child(self.parent_for_new_item(), selected.id)
        nav.adjust_selection_after_delete(self.nav, self.root, deleted_index)
        self._persist(MSG_DELETED)

    # --- Other actions ---

    def toggle_done(self) -> None:
        selected = self.selected_node
        if selected is None:
            self.show_feedback(nav.NOTHING_SELECTED)
            return
        was_done = selected.is_done
        toggle_status(selected)
        self._persist(MSG_REOPENED if was_done else MSG_DONE)

    def toggle_view(self) -> None:
        self.view = VIEW_ZEN if self.view == VIEW_LIST else VIEW_LIST
        self.show_feedback("Zen Mode" if self.view == VIEW_ZEN else "List Mode")

    def show_feedback(self, message: str) -> None:
        self.feedback.show(message)

    def quit(self) -> None:
        """Final save (always attempted), then stop the loop."""
        self.save()
        self.running = False

    # --- Persistence ---

    def save(self) -> bool:
        """Save the project. Failures become feedback; the in-memory tree is kept."""
        try:
            self._store.save(self.project)
        except (DftError, OSError) as e:
            logger.warning("Save of %s failed: %s", self.project.project_name, e)
            self.show_feedback(MSG_SAVE_FAILED)
            return False
        return True

    def _persist(self, success_message: str) -> None:
        if self.save():
            self.show_feedback(success_message)
