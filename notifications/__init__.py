from .modal import MessageModal, ModalState, acknowledge, show_message

__all__ = ["MessageModal", "ModalState", "acknowledge", "show_message"]
