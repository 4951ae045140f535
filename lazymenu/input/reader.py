"""Low-level terminal input decoding.

Reads raw bytes from the terminal and translates them into normalized key
tokens. Handles ESC-sequence timing, multi-byte UTF-8 characters, CSI
navigation keys, and bracketed paste. A lone ESC is only reported when no
further bytes follow; other unrecognised sequences decode to ``UNKNOWN_KEY``
and Alt-prefixed characters to ``ALT_<char>``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
PASTE_TIMEOUT_MS = 250
PASTE_END = b"\x1b[201~"
MAX_CSI_LENGTH = 32
_PENDING_BYTES: list[bytes] = []

PASTE_PREFIX = "PASTE:"
# Recognised escape sequence with no key meaning (F-keys, unmapped SS3/CSI codes).
UNKNOWN_KEY = "UNKNOWN"

_CONTROL_KEYS: dict[bytes, str] = {
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "CTRL_J",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "HOME",
    "2": "INSERT",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}

_CSI_FINAL_KEYS: dict[str, str] = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

_SS3_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"M": "ENTER",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    raw = bytearray(lead)
    for _ in range(_utf8_sequence_length(lead[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        if (part[0] & 0xC0) != 0x80:
            _PENDING_BYTES.append(part)
            break
        raw.extend(part)
    return bytes(raw).decode("utf-8", errors="replace")


def _read_bracketed_paste(fd: int) -> str:
    payload = bytearray()
    while not payload.endswith(PASTE_END):
        part = _read_ready_byte(fd, PASTE_TIMEOUT_MS)
        if part is None:
            break
        payload.extend(part)
    if payload.endswith(PASTE_END):
        del payload[-len(PASTE_END) :]
    return PASTE_PREFIX + payload.decode("utf-8", errors="replace")


def _alt_token(fd: int, lead: bytes) -> str:
    """Token for an Alt-modified key: ``ALT_<char>``, or unknown for Alt+control."""
    if lead[0] < 0x20 or lead[0] == 0x7F:
        return UNKNOWN_KEY
    return f"ALT_{_read_utf8_char(fd, lead)}"


def _decode_csi(params: str, final: str) -> str:
    """Map a CSI parameter string and final byte onto a key token."""
    if final == "~":
        fields = params.split(";")
        if fields[0] == "200":
            return "PASTE_START"
        # xterm modifyOtherKeys: CSI 27 ; modifier ; code ~
        if len(fields) == 3 and fields[0] == "27" and fields[2] == "13":
            return "SHIFT_ENTER" if fields[1] == "2" else "ENTER"
        return _CSI_TILDE_KEYS.get(fields[0], UNKNOWN_KEY)
    if final == "u":
        # kitty keyboard protocol: CSI code ; modifier u
        fields = params.split(";")
        if fields[0] == "13":
            return "SHIFT_ENTER" if len(fields) > 1 and fields[1] == "2" else "ENTER"
        return UNKNOWN_KEY
    token = _CSI_FINAL_KEYS.get(final)
    if token is None:
        return UNKNOWN_KEY
    if params.endswith(";2") and token in {"LEFT", "RIGHT", "UP", "DOWN"}:
        return f"SHIFT_{token}"
    return token


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; return ``""`` on timeout or EOF."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]
    if ch != b"\x1b":
        code = ch[0]
        if code < 0x20:
            return f"CTRL_{chr(code + 0x40)}"
        return _read_utf8_char(fd, ch)

    # Escape, Alt-prefixed, SS3 and CSI sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in {b"\r", b"\n"}:
        return "ALT_ENTER"
    if seq == b"O":
        seq2 = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq2 is None:
            return "ALT_O"
        return _SS3_KEYS.get(seq2, UNKNOWN_KEY)
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return "ESC"
    if seq != b"[":
        return _alt_token(fd, seq)

    params: list[bytes] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_KEY
        if 0x40 <= part[0] <= 0x7E:
            break
        params.append(part)
        if len(params) > MAX_CSI_LENGTH:
            return UNKNOWN_KEY
    token = _decode_csi(b"".join(params).decode("ascii", errors="replace"), part.decode("ascii"))
    if token == "PASTE_START":
        return _read_bracketed_paste(fd)
    return token
