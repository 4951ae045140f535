"""Input-layer public API: raw key decoding and key-to-action mapping."""

from .keymap import SELECTION_PASTE_KEYS, Keymap, action_for_key, build_menu_keymap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, PASTE_PREFIX, UNKNOWN_KEY, _PENDING_BYTES, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Keymap",
    "PASTE_PREFIX",
    "SELECTION_PASTE_KEYS",
    "UNKNOWN_KEY",
    "_PENDING_BYTES",
    "action_for_key",
    "build_menu_keymap",
    "read_key",
]
