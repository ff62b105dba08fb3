"""
Selection info panel.

Floats over the map and shows the current selection payload. For a file
node it offers "Go to File", which asks the GraphVM to open the file.
"""

from typing import Any, Dict, Optional

from PyQt6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout
from PyQt6.QtCore import Qt

from ..viewmodels.graph_vm import GraphVM


class InfoPanel(QFrame):
    """Overlay card bound to GraphVM.selection_changed."""

    def __init__(self, vm: GraphVM, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._payload: Optional[Dict[str, Any]] = None

        self.setObjectName("infoPanel")
        self.setFixedWidth(280)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(6)

        self.title = QLabel()
        self.title.setObjectName("infoTitle")
        self.title.setWordWrap(True)
        layout.addWidget(self.title)

        self.meta = QLabel()
        self.meta.setObjectName("infoMeta")
        self.meta.setWordWrap(True)
        self.meta.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(self.meta)

        self.open_btn = QPushButton("Go to File")
        self.open_btn.clicked.connect(self._on_open_clicked)
        layout.addWidget(self.open_btn)

        self._vm.selection_changed.connect(self.show_payload)
        self.hide()

    @property
    def payload(self) -> Optional[Dict[str, Any]]:
        return self._payload

    def show_payload(self, payload: Optional[Dict[str, Any]]):
        self._payload = payload
        if not payload:
            self.hide()
            return

        self.title.setText(payload.get("label") or "")
        lines = [f"dir: {payload.get('directory')}"]
        if payload.get("description"):
            lines.append(payload["description"])
        if payload.get("path"):
            lines.append(payload["path"])
        self.meta.setText("\n".join(lines))

        self.open_btn.setVisible(payload.get("type") == "node" and bool(payload.get("path")))
        self.adjustSize()
        self.show()
        self.raise_()

    def _on_open_clicked(self):
        if self._payload and self._payload.get("path"):
            self._vm.request_open_file(self._payload["path"])
