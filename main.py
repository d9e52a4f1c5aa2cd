import logging
import sys
import tkinter as tk
from tkinter import Frame, Label, X, LEFT, RIGHT, ttk

from core.common.app_context import AppContext
from core.config.config_service import config_service
from core.models.user import User
from compliance.logic.compliance_service import ComplianceService
from compliance.models.compliance_models import RamsDocumentRef
from signature.gui.signature_capture_dialog import SignatureCaptureDialog
from signature.gui.signature_list_view import SignatureListView
from signature.logic.repository.sqlite.signature_repository_sqlite import SQLiteSignatureRepository
from signature.logic.signature_service import SignatureService


class MainWindow(tk.Tk):
    """Document page: sign button, compliance line and the signature audit list."""

    def __init__(self, document: RamsDocumentRef, repository: SQLiteSignatureRepository):
        super().__init__()

        self.title(f"{config_service.general.app_name} - {document.title}")
        self.geometry("760x560")
        self.document = document
        self.repository = repository
        self.service = SignatureService(repository)
        self.compliance = ComplianceService(repository)

        # Top bar
        self.nav_frame = Frame(self, height=40, bg="#dddddd")
        self.nav_frame.pack(side="top", fill=X)
        Label(self.nav_frame, text=document.title, bg="#dddddd",
              font=("TkDefaultFont", 12, "bold")).pack(side=LEFT, padx=10, pady=5)
        self.sign_button = ttk.Button(self.nav_frame, text="Sign Document", command=self.open_signing)
        self.sign_button.pack(side=RIGHT, padx=10, pady=5)

        # Signature list (middle)
        self.list_view = SignatureListView(self, service=self.service, document_id=document.id)
        self.list_view.pack(fill="both", expand=True)

        # Status bar (bottom)
        self.status_bar = Label(self, text="", anchor="w", bg="#eeeeee")
        self.status_bar.pack(side="bottom", fill=X)

        self.refresh()

    def refresh(self):
        user = AppContext.get_current_user()
        signed = bool(user) and self.service.has_signed(self.document.id, user.id)
        self.sign_button.config(text="Signed" if signed else "Sign Document")
        self.sign_button.state(["disabled"] if signed or not user else ["!disabled"])

        report = self.compliance.per_document([self.document], max(1, self.repository.count_profiles()))[0]
        self.status_bar.config(
            text=f"{report.signatures_count}/{report.expected_signatures} signatures, "
                 f"{report.compliance_percentage:.0f}% complete ({report.status.value})"
        )
        self.list_view.refresh()

    def open_signing(self):
        user = AppContext.get_current_user()
        if user is None:
            return
        dlg = SignatureCaptureDialog(self, service=self.service,
                                     document_id=self.document.id, user_id=user.id)
        self.wait_window(dlg)
        if dlg.result is not None:
            self.refresh()


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    argv = list(sys.argv[1:] if argv is None else argv)
    doc_id = argv[0] if argv else "RAMS-001"

    repo = SQLiteSignatureRepository()
    user = User(id="local-user", username="site.worker", email="worker@example.com",
                full_name="Site Worker")
    repo.save_profile(user.id, user.full_name, user.email)
    AppContext.set_current_user(user, reason="startup")

    app = MainWindow(RamsDocumentRef(id=doc_id, title=f"RAMS {doc_id}"), repo)
    app.mainloop()
    repo.close()


if __name__ == "__main__":
    main()
