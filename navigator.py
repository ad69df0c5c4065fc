"""
navigator.py
Screen stack for transient screens (add note, edit note) pushed over the main screen.

A pushed screen may define a `closed` signal; emitting it dismisses the screen.
The on_dismissed callback passed to push() runs after the screen is removed,
which is how callers wait for a transient screen to finish.
"""

import logging
from typing import Callable, List, Optional

from PyQt5 import QtWidgets
from PyQt5.QtCore import QEasingCurve, QPoint, QPropertyAnimation

logger = logging.getLogger(__name__)

TRANSITION_DURATION_MS = 400
TRANSITION_PLAIN = "plain"
TRANSITION_SLIDE = "slide"


class _Entry:
    __slots__ = ("screen", "transition", "on_dismissed", "closing")

    def __init__(self, screen, transition, on_dismissed):
        self.screen = screen
        self.transition = transition
        self.on_dismissed = on_dismissed
        self.closing = False


class StackNavigator(QtWidgets.QStackedWidget):
    """QStackedWidget whose first widget is the root screen; later widgets are transient."""

    def __init__(self, root: Optional[QtWidgets.QWidget] = None, parent=None):
        super().__init__(parent)
        self._entries: List[_Entry] = []
        self._animation = None
        if root is not None:
            self.addWidget(root)

    @property
    def depth(self) -> int:
        return len(self._entries)

    def top(self) -> Optional[QtWidgets.QWidget]:
        return self._entries[-1].screen if self._entries else None

    def push(
        self,
        screen: QtWidgets.QWidget,
        transition: str = TRANSITION_PLAIN,
        on_dismissed: Optional[Callable[[], None]] = None,
    ):
        entry = _Entry(screen, transition, on_dismissed)
        self._entries.append(entry)
        self.addWidget(screen)
        self.setCurrentWidget(screen)
        closed = getattr(screen, "closed", None)
        if closed is not None:
            closed.connect(lambda: self._dismiss(entry))
        logger.debug("Pushed %s (%s), depth %d", type(screen).__name__, transition, self.depth)
        if transition == TRANSITION_SLIDE:
            self._slide(screen, QPoint(self.width(), 0), QPoint(0, 0))

    def pop(self):
        if self._entries:
            self._dismiss(self._entries[-1])

    def _slide(self, screen, start: QPoint, end: QPoint, on_finished=None):
        if self._animation is not None:
            self._animation.stop()
        anim = QPropertyAnimation(screen, b"pos", self)
        anim.setDuration(TRANSITION_DURATION_MS)
        anim.setStartValue(start)
        anim.setEndValue(end)
        anim.setEasingCurve(QEasingCurve.InOutQuad)
        if on_finished is not None:
            anim.finished.connect(on_finished)
        self._animation = anim
        anim.start()

    def _dismiss(self, entry: _Entry):
        if entry.closing or entry not in self._entries:
            return
        entry.closing = True
        # No input reaches a screen while it slides out
        entry.screen.setEnabled(False)
        if entry.transition == TRANSITION_SLIDE and self.isVisible():
            self._slide(entry.screen, entry.screen.pos(), QPoint(self.width(), 0), lambda: self._finish(entry))
        else:
            self._finish(entry)

    def _finish(self, entry: _Entry):
        if entry not in self._entries:
            return
        self._entries.remove(entry)
        self.removeWidget(entry.screen)
        self.setCurrentIndex(self.count() - 1)
        entry.screen.deleteLater()
        logger.debug("Dismissed %s, depth %d", type(entry.screen).__name__, self.depth)
        if entry.on_dismissed is not None:
            entry.on_dismissed()
