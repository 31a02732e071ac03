"""Keyboard dispatch: message keys first, then the map for the active focus."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..actions import DialogState, Focus
from ..app import PickerApp
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = logging.getLogger(__name__)

PAGE_STEP = 20

DISMISS_KEYS = frozenset({"ENTER", "ESC"})
ACTION_MENU_KEYS = ("CTRL_O", "F4", "ALT_ENTER")


def is_text_key(key: str) -> bool:
    """Printable characters are typed; multi-character tokens are keys."""
    return len(key) == 1 and key.isprintable()


def handle_master_key(app: PickerApp, key: str) -> bool:
    """Keys that apply regardless of focus; return True when consumed."""
    if key == "CTRL_C":
        app.quit()
        return True
    if app.message is None:
        return False
    if key in DISMISS_KEYS:
        app.clear_message()
        return True
    if app.has_info():
        if key == "UP":
            app.navigator.move_cursor(-1)
            return True
        if key == "DOWN":
            app.navigator.move_cursor(1)
            return True
        if key in {"LEFT", "RIGHT"}:
            return True
    return False


def _tree_bindings(app: PickerApp) -> KeyComboRegistry:
    navigator = app.navigator
    dispatcher = app.dispatcher

    def escape() -> None:
        if navigator.filter_text:
            navigator.clear_filter_text()
        else:
            app.quit()

    def jump_home() -> None:
        navigator.set_cursor(0)

    def jump_end() -> None:
        navigator.set_cursor(len(navigator.tree_nodes) - 1)

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("ESC",), escape),
        KeyComboBinding(("UP",), lambda: navigator.move_cursor(-1)),
        KeyComboBinding(("DOWN",), lambda: navigator.move_cursor(1)),
        KeyComboBinding(("PAGE_UP",), lambda: navigator.move_cursor(-PAGE_STEP)),
        KeyComboBinding(("PAGE_DOWN",), lambda: navigator.move_cursor(PAGE_STEP)),
        KeyComboBinding(("HOME",), jump_home),
        KeyComboBinding(("END",), jump_end),
        KeyComboBinding(("LEFT",), navigator.go_up),
        KeyComboBinding(("RIGHT", "TAB"), navigator.go_into),
        KeyComboBinding(("ENTER",), app.enter_selected_node),
        KeyComboBinding(ACTION_MENU_KEYS, dispatcher.open_action_menu),
        KeyComboBinding((">",), app.pick_current_dir),
        KeyComboBinding(("F2", "CTRL_R"), dispatcher.rename_selected),
        KeyComboBinding(("CTRL_D",), dispatcher.delete_selected_with_confirm),
        KeyComboBinding(("F5",), app.reload),
        KeyComboBinding(("CTRL_U",), navigator.clear_filter_text),
        KeyComboBinding(("BACKSPACE", "CTRL_W", "CTRL_BACKSPACE"), navigator.backspace_filter_text),
    )


def _action_menu_bindings(app: PickerApp) -> KeyComboRegistry:
    dispatcher = app.dispatcher
    size = len(dispatcher.catalog)

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("ESC",), dispatcher.close),
        KeyComboBinding(("UP",), lambda: dispatcher.move_menu_cursor(-1)),
        KeyComboBinding(("DOWN",), lambda: dispatcher.move_menu_cursor(1)),
        KeyComboBinding(("PAGE_UP",), lambda: dispatcher.move_menu_cursor(-PAGE_STEP)),
        KeyComboBinding(("PAGE_DOWN",), lambda: dispatcher.move_menu_cursor(PAGE_STEP)),
        KeyComboBinding(("HOME",), lambda: dispatcher.move_menu_cursor(-size)),
        KeyComboBinding(("END",), lambda: dispatcher.move_menu_cursor(size)),
        KeyComboBinding(("ENTER",), dispatcher.execute_selected_action),
    )


def _dialog_bindings(app: PickerApp) -> KeyComboRegistry:
    dispatcher = app.dispatcher

    def edit(operation: Callable[[DialogState], None]) -> Callable[[], None]:
        """Bind ``operation`` to whichever dialog is open when the key arrives."""

        def run() -> None:
            if dispatcher.dialog is not None:
                operation(dispatcher.dialog)

        return run

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("ESC",), dispatcher.close),
        KeyComboBinding(("ENTER",), dispatcher.submit_dialog),
        KeyComboBinding(("CTRL_U",), edit(DialogState.clear_backwards)),
        KeyComboBinding(("CTRL_K",), edit(DialogState.clear_forwards)),
        KeyComboBinding(("CTRL_W", "CTRL_BACKSPACE", "ALT_BACKSPACE"), edit(DialogState.backspace_word)),
        KeyComboBinding(("CTRL_DELETE",), edit(DialogState.delete_word)),
        KeyComboBinding(("BACKSPACE",), edit(DialogState.backspace)),
        KeyComboBinding(("DELETE",), edit(DialogState.delete)),
        KeyComboBinding(("CTRL_LEFT", "ALT_LEFT"), edit(DialogState.left_word)),
        KeyComboBinding(("CTRL_RIGHT", "ALT_RIGHT"), edit(DialogState.right_word)),
        KeyComboBinding(("LEFT",), edit(DialogState.left)),
        KeyComboBinding(("RIGHT",), edit(DialogState.right)),
        KeyComboBinding(("HOME", "CTRL_A"), edit(DialogState.home)),
        KeyComboBinding(("END", "CTRL_E"), edit(DialogState.end)),
    )


class PickerKeyHandler:
    """Key handler bound to one ``PickerApp``; its key maps are built once."""

    def __init__(self, app: PickerApp) -> None:
        self.app = app
        self._registries = {
            Focus.TREE: _tree_bindings(app),
            Focus.ACTION_MENU: _action_menu_bindings(app),
            Focus.ACTION_MENU_STEP2: _dialog_bindings(app),
        }

    def registry_for(self, focus: Focus) -> KeyComboRegistry:
        return self._registries[focus]

    def handle(self, key: str) -> None:
        """Apply one key token to the app."""
        app = self.app
        if handle_master_key(app, key):
            return

        focus = app.focus
        if focus is Focus.TREE and key == "/" and not app.navigator.filter_text:
            app.navigator.go_to_root()
            return
        if self._registries[focus].dispatch(key):
            return
        if is_text_key(key):
            if focus is Focus.TREE:
                app.navigator.type_filter_text(key)
                return
            if focus is Focus.ACTION_MENU_STEP2 and app.dispatcher.dialog is not None:
                app.dispatcher.dialog.insert(key)
                return
        logger.debug("unhandled key %r in %s", key, focus.value)


__all__ = [
    "PAGE_STEP",
    "PickerKeyHandler",
    "handle_master_key",
    "is_text_key",
]
