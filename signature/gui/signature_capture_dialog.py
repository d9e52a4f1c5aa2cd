# signature/gui/signature_capture_dialog.py
from __future__ import annotations
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from ..exceptions.errors import SignaturePersistenceError
from ..logic.drawing_surface import CANVAS_H, CANVAS_W
from ..logic.signature_service import SignatureService
from ..models.signature_enums import CaptureMode, StrokeState
from ..models.signature_record import SignatureRecord

PREVIEW_FONT = ("Segoe Script", 22, "italic")


class SignatureCaptureDialog(tk.Toplevel):
    """
    Modal dialog to sign one RAMS document: typed name, styled name or
    freehand drawing.

    All state lives in a SignatureCaptureSession; this class only forwards
    widget events to it. The Sign button is enabled only while
    session.is_ready() holds. After closing, `result` is the stored
    SignatureRecord or None if the user cancelled.
    """
    _TABS = (
        (CaptureMode.TYPED, "Type Name"),
        (CaptureMode.DRAWN, "Draw Signature"),
        (CaptureMode.STYLED, "Signature Styles"),
    )

    def __init__(self, parent: tk.Misc, *, service: SignatureService,
                 document_id: str, user_id: str) -> None:
        super().__init__(parent)
        self.title("Sign Document")
        self.transient(parent)
        self.grab_set()
        self.resizable(False, False)

        self._service = service
        self._document_id = document_id
        self._user_id = user_id
        self._session = service.new_session()
        self.result: Optional[SignatureRecord] = None
        self._last: tuple[int, int] = (0, 0)

        self._name_var = tk.StringVar(value="")
        self._style_var = tk.IntVar(value=0)
        self._name_var.trace_add("write", self._on_name_changed)

        self.columnconfigure(0, weight=1)

        self._notebook = ttk.Notebook(self)
        self._notebook.grid(row=0, column=0, sticky="nsew", padx=10, pady=(10, 4))
        self._notebook.add(self._build_typed_tab(), text=self._TABS[0][1])
        self._notebook.add(self._build_drawn_tab(), text=self._TABS[1][1])
        self._notebook.add(self._build_styled_tab(), text=self._TABS[2][1])
        self._notebook.bind("<<NotebookTabChanged>>", self._on_tab_changed)

        # Footer
        btns = ttk.Frame(self)
        btns.grid(row=1, column=0, sticky="e", padx=10, pady=(4, 10))
        ttk.Button(btns, text="Cancel", command=self._cancel).pack(side="right", padx=(6, 0))
        self._sign_btn = ttk.Button(btns, text="Sign Document", command=self._sign)
        self._sign_btn.pack(side="right")

        self.protocol("WM_DELETE_WINDOW", self._cancel)
        self._refresh_ready()

    # ------------------------------------------------------------------ tabs
    def _build_typed_tab(self) -> ttk.Frame:
        tab = ttk.Frame(self._notebook, padding=10)
        ttk.Label(tab, text="Enter your full name:").pack(anchor="w")
        ttk.Entry(tab, textvariable=self._name_var, width=50).pack(fill="x", pady=(4, 8))
        ttk.Label(tab, text="Preview:").pack(anchor="w")
        self._typed_preview = tk.Label(tab, textvariable=self._name_var, font=PREVIEW_FONT)
        self._typed_preview.pack(anchor="w")
        return tab

    def _build_drawn_tab(self) -> ttk.Frame:
        tab = ttk.Frame(self._notebook, padding=10)
        ttk.Label(tab, text="Draw your signature:").pack(anchor="w")
        self.canvas = tk.Canvas(
            tab, width=CANVAS_W, height=CANVAS_H, bg="white", cursor="crosshair",
            highlightthickness=1, highlightbackground="#888"
        )
        self.canvas.pack(pady=4)
        # Mouse, pen and touch all arrive as button-1 events in Tk
        self.canvas.bind("<ButtonPress-1>", self._on_down)
        self.canvas.bind("<B1-Motion>", self._on_move)
        self.canvas.bind("<ButtonRelease-1>", self._on_up)
        self.canvas.bind("<Leave>", self._on_up)
        self.canvas.bind("<MouseWheel>", self._block_while_stroking)
        self.canvas.bind("<Button-4>", self._block_while_stroking)
        self.canvas.bind("<Button-5>", self._block_while_stroking)

        row = ttk.Frame(tab)
        row.pack(fill="x")
        ttk.Label(row, text="Sign above using your mouse or touch screen").pack(side="left")
        ttk.Button(row, text="Clear", command=self._clear).pack(side="right")
        return tab

    def _build_styled_tab(self) -> ttk.Frame:
        tab = ttk.Frame(self._notebook, padding=10)
        ttk.Label(tab, text="Enter your name:").pack(anchor="w")
        ttk.Entry(tab, textvariable=self._name_var, width=50).pack(fill="x", pady=(4, 8))
        ttk.Label(tab, text="Choose a signature style:").pack(anchor="w")
        for style in self._service.catalog:
            tk.Radiobutton(
                tab, textvariable=self._name_var, value=style.index, variable=self._style_var,
                font=style.tk_font, fg=style.color, anchor="w", indicatoron=True,
                command=self._on_style_selected,
            ).pack(fill="x")
        return tab

    # ------------------------------------------------------------------ events
    def _on_tab_changed(self, _e=None):
        mode, _label = self._TABS[self._notebook.index("current")]
        self._session.select_mode(mode)
        self._refresh_ready()

    def _on_name_changed(self, *_args):
        self._session.set_typed_name(self._name_var.get())
        self._refresh_ready()

    def _on_style_selected(self):
        self._session.select_style(int(self._style_var.get()))
        self._refresh_ready()

    def _on_down(self, e):
        self._last = (e.x, e.y)
        self._session.begin_stroke((e.x, e.y))
        self.canvas.create_oval(e.x - 1, e.y - 1, e.x + 1, e.y + 1, fill="black", outline="black")
        self._refresh_ready()
        return "break"

    def _on_move(self, e):
        if not self._stroking():
            return None
        self._session.extend_stroke((e.x, e.y))
        self.canvas.create_line(*self._last, e.x, e.y, fill="black", width=2, capstyle="round")
        self._last = (e.x, e.y)
        return "break"

    def _on_up(self, _e):
        if not self._stroking():
            return None
        self._session.end_stroke()
        self._refresh_ready()
        return "break"

    def _block_while_stroking(self, _e):
        return "break" if self._stroking() else None

    def _stroking(self) -> bool:
        return self._session.surface.state is StrokeState.STROKING

    # ------------------------------------------------------------------ actions
    def _clear(self):
        self.canvas.delete("all")
        self._session.clear_drawing()
        self._refresh_ready()

    def _refresh_ready(self):
        self._sign_btn.state(["!disabled"] if self._session.is_ready() else ["disabled"])

    def _cancel(self):
        self._session.discard()
        self.destroy()

    def _sign(self):
        if not self._session.is_ready():
            return
        self._sign_btn.state(["disabled"])
        try:
            self.result = self._service.submit(
                self._session, document_id=self._document_id, user_id=self._user_id
            )
        except SignaturePersistenceError as ex:
            messagebox.showerror(title="Error", message=str(ex), parent=self)
            self._refresh_ready()
            return
        self.canvas.delete("all")
        messagebox.showinfo(title="Signed", message="Document signed successfully!", parent=self)
        self.destroy()
