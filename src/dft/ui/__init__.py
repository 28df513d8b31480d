"""UI module."""

from .feedback import Feedback
from .modals import DeleteModal, EditModal, HelpModal, Modal, NewModal
from .session import Session

__all__ = [
    "DeleteModal",
    "EditModal",
    "Feedback",
    "HelpModal",
    "Modal",
    "NewModal",
    "Session",
]
