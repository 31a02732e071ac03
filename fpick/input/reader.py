"""Low-level terminal input decoding.

Reads raw bytes from the terminal and translates them into normalized key
tokens. Printable input (including multi-byte UTF-8) comes back as the
character itself; everything else is an upper-case token such as ``UP`` or
``CTRL_W``. An empty string means "nothing read".
"""

from __future__ import annotations

import os
import select
import termios

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_CSI_LENGTH = 16

_CSI_LETTER_KEYS = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "7": "HOME",
    "4": "END",
    "8": "END",
    "3": "DELETE",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "12": "F2",
    "14": "F4",
    "15": "F5",
}

_SS3_KEYS = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
    "Q": "F2",
    "S": "F4",
}

# xterm modifier parameter: 1 + (shift=1 | alt=2 | ctrl=4)
_MODIFIER_PREFIX = {
    "2": "SHIFT_",
    "3": "ALT_",
    "5": "CTRL_",
    "9": "ALT_",
}

_SINGLE_BYTE_KEYS = {
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
    b"\x7f": "BACKSPACE",
    b"\x08": "CTRL_BACKSPACE",
}


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """Decodes key tokens from ``fd``.

    Bytes read ahead while deciding what an ESC means are kept per reader and
    returned by the next ``read_key`` call.
    """

    def __init__(self, fd: int, esc_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.fd = fd
        self.esc_timeout_ms = esc_timeout_ms
        self.eof = False
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int | None) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        if timeout_ms is not None:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        ch = os.read(self.fd, 1)
        if not ch:
            self.eof = True
            return None
        return ch

    def discard_pending_input(self) -> None:
        """Drop anything typed while another program owned the terminal."""
        self._pending.clear()
        try:
            termios.tcflush(self.fd, termios.TCIFLUSH)
        except termios.error:
            # Not a terminal (pipe in tests): drain what is already buffered.
            while self._read_ready_byte(0) is not None:
                pass

    def read_key(self, timeout_ms: int | None = None) -> str:
        ch = self._read_ready_byte(timeout_ms)
        if ch is None:
            return ""

        if ch == b"\x1b":
            return self._read_escape()
        if ch in _SINGLE_BYTE_KEYS:
            return _SINGLE_BYTE_KEYS[ch]

        code = ch[0]
        if code < 0x20:
            return f"CTRL_{chr(code + 0x40)}"
        if code < 0x80:
            return ch.decode("ascii")
        return self._read_utf8(ch)

    def _read_utf8(self, lead: bytes) -> str:
        data = bytearray(lead)
        for _ in range(_utf8_length(lead[0]) - 1):
            nxt = self._read_ready_byte(self.esc_timeout_ms)
            if nxt is None:
                break
            if nxt[0] & 0xC0 != 0x80:
                self._pending.insert(0, nxt)
                break
            data += nxt
        return bytes(data).decode("utf-8", errors="replace")

    def _read_escape(self) -> str:
        seq = self._read_ready_byte(self.esc_timeout_ms)
        if seq is None:
            return "ESC"
        if seq in {b"\r", b"\n"}:
            return "ALT_ENTER"
        if seq in {b"\x7f", b"\x08"}:
            return "ALT_BACKSPACE"
        if seq in {b"b", b"B"}:
            return "ALT_LEFT"
        if seq in {b"f", b"F"}:
            return "ALT_RIGHT"
        if seq == b"O":
            final = self._read_ready_byte(self.esc_timeout_ms)
            if final is None:
                return "ESC"
            return _SS3_KEYS.get(final.decode("latin-1"), "ESC")
        if seq != b"[":
            self._pending.append(seq)
            return "ESC"
        return self._read_csi()

    def _read_csi(self) -> str:
        params = bytearray()
        while True:
            part = self._read_ready_byte(self.esc_timeout_ms)
            if part is None:
                return "ESC"
            if 0x40 <= part[0] <= 0x7E:
                final = part.decode("ascii")
                break
            params += part
            if len(params) > MAX_CSI_LENGTH:
                return "ESC"

        fields = params.decode("ascii", errors="replace").split(";")
        modifier = _MODIFIER_PREFIX.get(fields[1], "") if len(fields) > 1 else ""
        if final == "~":
            key = _CSI_TILDE_KEYS.get(fields[0])
        else:
            key = _CSI_LETTER_KEYS.get(final)
        if key is None:
            return "ESC"
        return modifier + key


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyReader",
]
