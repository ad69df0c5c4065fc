from PyQt5 import QtCore, QtWidgets

_STYLES = {
    "info": "rgba(33, 33, 33, 220)",
    "error": "rgba(176, 0, 32, 230)",
}


def show_toast(parent: QtWidgets.QWidget, text: str, kind: str = "info", duration_ms: int = 2500):
    """
    Show a short-lived message at the bottom center of parent's window.

    - kind: "info" (dark) or "error" (red)
    Returns the label, or None when there is no window to attach to.
    """
    if not isinstance(parent, QtWidgets.QWidget):
        return None
    window = parent.window()

    label = QtWidgets.QLabel(text, window)
    label.setObjectName("toast")
    label.setAlignment(QtCore.Qt.AlignCenter)
    label.setWordWrap(True)
    label.setAttribute(QtCore.Qt.WA_TransparentForMouseEvents, True)
    label.setStyleSheet(
        "QLabel#toast { background-color: %s; color: #ffffff; border-radius: 8px;"
        " padding: 8px 12px; font-size: 11pt; }" % _STYLES.get(kind, _STYLES["info"])
    )
    label.setMaximumWidth(max(200, window.width() - 48))
    label.adjustSize()

    # Child label: position in window coordinates, above the nav bar area
    margin = 72
    x = max(0, (window.width() - label.width()) // 2)
    y = max(0, window.height() - label.height() - margin)
    label.move(x, y)
    label.raise_()
    label.show()

    QtCore.QTimer.singleShot(duration_ms, label.deleteLater)
    return label
