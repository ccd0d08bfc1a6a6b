from PyQt6.QtWidgets import (
    QFrame, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QSizePolicy, QPushButton, QButtonGroup
)
from PyQt6.QtCore import Qt


class Panel(QFrame):
    def __init__(self, title: str):
        super().__init__()
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setFrameShadow(QFrame.Shadow.Raised)

        # Title
        self.titleLabel = QLabel(title)
        self.titleLabel.setContentsMargins(4, 4, 4, 4)
        self.titleLabel.setFixedHeight(20)
        self.titleLabel.setAlignment(Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft)

        # Toolbar
        self.toolbar = QWidget()
        self.toolbar.setFixedHeight(50)
        self._tbLayout = QHBoxLayout(self.toolbar)
        self._tbLayout.setContentsMargins(8, 4, 8, 4)
        self._tbLayout.setSpacing(8)
        self._tbLayout.addStretch(1)

        # Content
        self.contentArea = QWidget()
        self.contentArea.setObjectName("contentArea")
        self.contentArea.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        # Build the panel layout
        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)
        v.addWidget(self.titleLabel)
        v.addWidget(self.toolbar)
        v.addWidget(self.contentArea)

        # All buttons are stored in a dictionary and can be accessed later as objects
        self.toolbarButtons: dict[str, QPushButton] = {}
        self._groups: list[QButtonGroup] = []

    # ---------- Public API ---------
    def add_toolbar_buttons(self, buttons: dict[str, QPushButton], *, exclusive: bool = False):
        # Buttons are added to the dict. exclusive=True turns them into a checkable radio group.

        # The last item of the layout is the stretch - take away
        stretch_item = self._tbLayout.takeAt(self._tbLayout.count() - 1)

        group = None
        if exclusive:
            group = QButtonGroup(self)
            group.setExclusive(True)
            self._groups.append(group)

        # add buttons
        for key, btn in buttons.items():
            if btn.minimumHeight() < 36:
                btn.setMinimumHeight(36)
            if group is not None:
                btn.setCheckable(True)
                group.addButton(btn)
            self._tbLayout.addWidget(btn)
            self.toolbarButtons[key] = btn

        # re-add the stretch
        self._tbLayout.addItem(stretch_item)

    def add_toolbar_widget(self, widget: QWidget):
        stretch_item = self._tbLayout.takeAt(self._tbLayout.count() - 1)
        self._tbLayout.addWidget(widget)
        self._tbLayout.addItem(stretch_item)

    def add_separator(self):
        line = QFrame()
        line.setFrameShape(QFrame.Shape.VLine)
        line.setFrameShadow(QFrame.Shadow.Sunken)
        self.add_toolbar_widget(line)

    def set_content(self, widget: QWidget):
        # Replaces the content through own widget
        layout = self.layout()
        layout.removeWidget(self.contentArea)
        self.contentArea.deleteLater()
        self.contentArea = widget
        self.contentArea.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        layout.addWidget(self.contentArea)
