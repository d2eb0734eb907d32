from typing import Callable, List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QApplication, QLabel
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QFont

from live_subtitles.subtitle_tracker import SubtitleTracker, caption_line


class OverlayWindow(QWidget):
    """Frameless always-on-top subtitle bar. Drag anywhere to move it."""

    def __init__(self, tracker: SubtitleTracker, participants: Callable[[], List[int]]):
        super().__init__()
        self.tracker = tracker
        self.participants = participants

        self.setWindowFlags(Qt.WindowStaysOnTopHint | Qt.FramelessWindowHint | Qt.Tool)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setAttribute(Qt.WA_ShowWithoutActivating)

        self.layout = QVBoxLayout()
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(self.layout)

        self.people_label = QLabel(self)
        self.people_label.setFont(QFont("Arial", 11))
        self.people_label.setStyleSheet("color: #AAAAAA; background-color: transparent;")

        self.subtitle_label = QLabel(self)
        self.subtitle_label.setFont(QFont("Arial", 22))
        self.subtitle_label.setTextFormat(Qt.PlainText)
        self.subtitle_label.setWordWrap(True)
        self.subtitle_label.setAlignment(Qt.AlignCenter)
        self.subtitle_label.setStyleSheet("""
            color: #FFFFFF;
            background-color: rgba(0, 0, 0, 200);
            border-radius: 10px;
            padding: 10px;
        """)

        self.layout.addWidget(self.people_label)
        self.layout.addWidget(self.subtitle_label)

        screen = QApplication.primaryScreen().geometry()
        width = 900
        height = 160
        x = (screen.width() - width) // 2
        y = screen.height() - height - 80
        self.setGeometry(x, y, width, height)

        self.drag_pos = None

        self.timer = QTimer()
        self.timer.timeout.connect(self.update_content)
        self.timer.start(100) # 100ms

        self.last_text = None
        self.last_people = None

    def update_content(self):
        text = caption_line(*self.tracker.snapshot())
        if text != self.last_text:
            self.subtitle_label.setText(text)
            self.subtitle_label.setVisible(bool(text))
            self.last_text = text

        people = self.participants()
        if people != self.last_people:
            label = ", ".join(str(uid) for uid in people)
            self.people_label.setText(f"In call: {label}" if people else "")
            self.last_people = people

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.drag_pos = event.globalPosition().toPoint() - self.frameGeometry().topLeft()
            event.accept()

    def mouseMoveEvent(self, event):
        if event.buttons() == Qt.LeftButton and self.drag_pos is not None:
            self.move(event.globalPosition().toPoint() - self.drag_pos)
            event.accept()

    def mouseReleaseEvent(self, event):
        self.drag_pos = None
        super().mouseReleaseEvent(event)
