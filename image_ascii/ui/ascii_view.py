"""Панель вывода ASCII-арта: моноширинный текст только для чтения."""
from __future__ import annotations

import customtkinter as ctk

DEFAULT_FONT_SIZE = 8


class AsciiView(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._font = ctk.CTkFont(family="Courier", size=DEFAULT_FONT_SIZE)
        self._text = ctk.CTkTextbox(self, font=self._font, wrap="none", activate_scrollbars=True)
        self._text.grid(row=0, column=0, sticky="nsew")
        self._text.configure(state="disabled")

    # ---- Public API ----
    def set_text(self, text: str) -> None:
        """Заменяет содержимое панели."""
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.insert("1.0", text)
        self._text.configure(state="disabled")

    def set_font_size(self, size: int) -> None:
        self._font.configure(size=max(4, min(32, int(size))))
