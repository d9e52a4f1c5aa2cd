from __future__ import annotations
import tkinter as tk
from tkinter import ttk, messagebox

from PIL import ImageTk

from core.helpers import date_time_helper as dt
from ..exceptions.errors import InvalidImageDataError, SignaturePersistenceError
from ..logic.signature_codec import data_uri_to_image
from ..logic.signature_renderer import (
    FallbackRendering,
    ImageRendering,
    RenderedSignature,
    TextRendering,
)
from ..logic.signature_service import SignatureListEntry, SignatureService

THUMB_H = 48


class SignatureListView(ttk.Frame):
    """
    Audit list of all signatures on one RAMS document, newest first.

    Each row shows signer, email, local signing time and the signature
    rebuilt from its stored string. Rows are rendered independently; a
    corrupt value shows the grey fallback label and nothing else.
    """

    def __init__(self, parent, *, service: SignatureService, document_id: str, **kwargs):
        super().__init__(parent, **kwargs)
        self._service = service
        self._document_id = document_id
        self._images: list[ImageTk.PhotoImage] = []  # keep references alive
        self.columnconfigure(0, weight=1)
        self.refresh()

    def refresh(self) -> None:
        for child in self.winfo_children():
            child.destroy()
        self._images.clear()

        try:
            entries = self._service.list_signatures(self._document_id)
        except SignaturePersistenceError as ex:
            messagebox.showerror("Error", str(ex), parent=self)
            entries = []

        if not entries:
            ttk.Label(self, text="No signatures yet", font=("TkDefaultFont", 12, "bold"))\
                .grid(row=0, column=0, pady=(20, 4))
            ttk.Label(self, text="This document hasn't been signed by anyone")\
                .grid(row=1, column=0)
            return

        for row, entry in enumerate(entries):
            self._make_row(entry).grid(row=row, column=0, sticky="ew", padx=8, pady=4)

    # ------------------------------------------------------------------ rows
    def _make_row(self, entry: SignatureListEntry) -> ttk.Frame:
        rec = entry.record
        box = ttk.Frame(self, padding=8, relief="groove")
        box.columnconfigure(0, weight=1)

        ttk.Label(box, text=rec.signer_name or "Unknown User", font=("TkDefaultFont", 10, "bold"))\
            .grid(row=0, column=0, sticky="w")
        ttk.Label(box, text=dt.format_local(rec.signed_at), foreground="#6b7280")\
            .grid(row=0, column=1, sticky="e")
        ttk.Label(box, text=rec.signer_email or "", foreground="#4b5563")\
            .grid(row=1, column=0, sticky="w")
        ttk.Label(box, text="Signature:").grid(row=2, column=0, sticky="w", pady=(6, 0))
        self._signature_widget(box, entry.rendering).grid(row=3, column=0, columnspan=2, sticky="w")
        return box

    def _signature_widget(self, parent: tk.Misc, rendering: RenderedSignature) -> tk.Widget:
        if isinstance(rendering, TextRendering):
            if rendering.style is None:
                return tk.Label(parent, text=rendering.text, font=("TkDefaultFont", 11, "bold underline"))
            return tk.Label(parent, text=rendering.text, font=rendering.style.tk_font,
                            fg=rendering.style.color)
        if isinstance(rendering, ImageRendering):
            try:
                img = data_uri_to_image(rendering.source)
            except InvalidImageDataError:
                return self._fallback(parent, FallbackRendering(raw=rendering.source))
            ratio = THUMB_H / max(1, img.height)
            img = img.resize((max(1, int(img.width * ratio)), THUMB_H))
            photo = ImageTk.PhotoImage(img)
            self._images.append(photo)
            return tk.Label(parent, image=photo, borderwidth=1, relief="solid", bg="white")
        return self._fallback(parent, rendering)

    @staticmethod
    def _fallback(parent: tk.Misc, rendering: FallbackRendering) -> tk.Widget:
        return tk.Label(parent, text=rendering.label, fg="#6b7280")
