"""
main_screen.py
The main shell: Home and Settings tabs behind a bottom navigation bar, an Add
Note button on Home, and the flows that push the add/edit note screens.

State owned here:
- selected_index: 0 (Home) or 1 (Settings)
- nav_bar_visible: False only while a transient screen is pushed

The tabs are built the first time the notes source delivers data; until then
the body shows a loading indicator or the loading error.
"""
import logging
from typing import Callable, Optional

from PyQt5 import QtWidgets, sip
from PyQt5.QtCore import QEasingCurve, QPropertyAnimation, Qt, QTimer, pyqtSignal

from add_note_screen import AddNoteScreen
from edit_note_screen import EditNoteScreen
from home_screen import HomeScreen
from navigator import TRANSITION_DURATION_MS, TRANSITION_PLAIN, TRANSITION_SLIDE
from note_model import Note
from settings_screen import SettingsScreen

logger = logging.getLogger(__name__)

HOME_INDEX = 0
SETTINGS_INDEX = 1
TAB_LABELS = ("Home", "Settings")


class NavBar(QtWidgets.QFrame):
    """Bottom tab bar with always-visible labels."""

    destinationSelected = pyqtSignal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("navBar")
        self.setFrameShape(QtWidgets.QFrame.StyledPanel)
        self._group = QtWidgets.QButtonGroup(self)
        self._group.setExclusive(True)
        icons = (QtWidgets.QStyle.SP_DirHomeIcon, QtWidgets.QStyle.SP_FileDialogDetailedView)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        for index, (label, icon) in enumerate(zip(TAB_LABELS, icons)):
            button = QtWidgets.QToolButton(self)
            button.setObjectName(f"nav{label}Button")
            button.setText(label)
            button.setIcon(self.style().standardIcon(icon))
            button.setToolButtonStyle(Qt.ToolButtonTextUnderIcon)
            button.setCheckable(True)
            button.setAutoRaise(True)
            button.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Preferred)
            self._group.addButton(button, index)
            layout.addWidget(button)
        self._group.buttonClicked[int].connect(self.destinationSelected.emit)

    def button(self, index: int) -> QtWidgets.QToolButton:
        return self._group.button(index)

    def set_selected_index(self, index: int):
        button = self._group.button(index)
        if button is not None and not button.isChecked():
            button.setChecked(True)

    def selected_index(self) -> int:
        return self._group.checkedId()


class MainScreen(QtWidgets.QWidget):
    selectedIndexChanged = pyqtSignal(int)

    def __init__(
        self,
        source,
        navigator=None,
        initial_index: int = HOME_INDEX,
        add_screen_factory: Optional[Callable[[], QtWidgets.QWidget]] = None,
        edit_screen_factory: Optional[Callable[[int, str], QtWidgets.QWidget]] = None,
        save_prompt=None,
        open_prompt=None,
        parent=None,
    ):
        super().__init__(parent)
        self.setObjectName("mainScreen")
        self.source = source
        self.navigator = navigator
        self._selected_index = initial_index if initial_index in (HOME_INDEX, SETTINGS_INDEX) else HOME_INDEX
        self._nav_bar_visible = True
        self._add_screen_factory = add_screen_factory or (lambda: AddNoteScreen(self.source))
        self._edit_screen_factory = edit_screen_factory or (
            lambda note_id, hero_tag: EditNoteScreen(self.source, note_id, hero_tag)
        )
        self._save_prompt = save_prompt
        self._open_prompt = open_prompt
        self._nav_animation = None

        self.home_screen: Optional[HomeScreen] = None
        self.settings_screen: Optional[SettingsScreen] = None
        self.tabs: Optional[QtWidgets.QStackedWidget] = None

        # Takes focus after a tab switch so no text field keeps it
        self._focus_sink = QtWidgets.QWidget(self)
        self._focus_sink.setObjectName("focusSink")
        self._focus_sink.setFocusPolicy(Qt.StrongFocus)
        self._focus_sink.setFixedSize(0, 0)

        self.body = QtWidgets.QStackedWidget(self)
        self.loading_page = QtWidgets.QWidget(self.body)
        self.loading_page.setObjectName("loadingPage")
        spinner = QtWidgets.QProgressBar(self.loading_page)
        spinner.setRange(0, 0)
        spinner.setTextVisible(False)
        spinner.setMaximumWidth(160)
        loading_layout = QtWidgets.QVBoxLayout(self.loading_page)
        loading_layout.addStretch(1)
        loading_layout.addWidget(spinner, 0, Qt.AlignCenter)
        loading_layout.addStretch(1)

        self.error_label = QtWidgets.QLabel(self.body)
        self.error_label.setObjectName("errorLabel")
        self.error_label.setAlignment(Qt.AlignCenter)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #b00020;")

        self.body.addWidget(self.loading_page)
        self.body.addWidget(self.error_label)

        self.add_button = QtWidgets.QPushButton("+", self)
        self.add_button.setObjectName("addNoteButton")
        self.add_button.setToolTip("Add Note")
        self.add_button.setFixedSize(48, 48)
        self.add_button.clicked.connect(lambda: self.navigate_to_add_note())

        self.nav_bar = NavBar(self)
        self.nav_bar.destinationSelected.connect(self.on_item_tapped)
        self._nav_bar_height = self.nav_bar.sizeHint().height()

        fab_row = QtWidgets.QHBoxLayout()
        fab_row.addStretch(1)
        fab_row.addWidget(self.add_button)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.body, 1)
        layout.addLayout(fab_row)
        layout.addWidget(self.nav_bar)

        self._apply_selection()
        self.source.stateChanged.connect(self.render_state)
        self.render_state(self.source.state)
        logger.debug("MainScreen created")

    # --- state ---
    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def nav_bar_visible(self) -> bool:
        return self._nav_bar_visible

    def set_nav_bar_visible(self, visible: bool):
        visible = bool(visible)
        if visible == self._nav_bar_visible:
            return
        self._nav_bar_visible = visible
        if self._nav_animation is not None:
            self._nav_animation.stop()
        anim = QPropertyAnimation(self.nav_bar, b"maximumHeight", self)
        anim.setDuration(TRANSITION_DURATION_MS)
        anim.setStartValue(min(self.nav_bar.maximumHeight(), self._nav_bar_height))
        anim.setEndValue(self._nav_bar_height if visible else 0)
        anim.setEasingCurve(QEasingCurve.InOutQuad)
        if visible:
            # Let the bar grow to its natural height once the slide is done
            anim.finished.connect(lambda: self.nav_bar.setMaximumHeight(16777215))
        self._nav_animation = anim
        anim.start()

    def _apply_selection(self):
        self.nav_bar.set_selected_index(self._selected_index)
        if self.tabs is not None:
            self.tabs.setCurrentIndex(self._selected_index)
        self.add_button.setVisible(self._selected_index == HOME_INDEX)

    # --- navigation ---
    def on_item_tapped(self, index: int):
        if index == self._selected_index or index not in (HOME_INDEX, SETTINGS_INDEX):
            self.nav_bar.set_selected_index(self._selected_index)
            return
        logger.debug("Navigation item tapped: index %d", index)
        self._clear_focus()
        self._selected_index = index
        self._apply_selection()
        self.selectedIndexChanged.emit(index)
        QTimer.singleShot(0, self._request_empty_focus)

    def _clear_focus(self):
        focused = QtWidgets.QApplication.focusWidget()
        if focused is not None:
            focused.clearFocus()

    def _request_empty_focus(self):
        if sip.isdeleted(self._focus_sink):
            return
        self._focus_sink.setFocus(Qt.OtherFocusReason)
        logger.debug("Moved focus to the empty focus sink after tab switch.")

    def _require_navigator(self):
        if self.navigator is None:
            raise RuntimeError("MainScreen has no navigator to push screens on")
        return self.navigator

    def navigate_to_add_note(self):
        logger.info("Navigating to Add Note screen")
        navigator = self._require_navigator()
        self._clear_focus()
        self.set_nav_bar_visible(False)
        navigator.push(self._add_screen_factory(), TRANSITION_SLIDE, on_dismissed=self._on_transient_dismissed)

    def navigate_to_edit_note(self, note: Note):
        logger.info("Navigating to Edit Note screen for ID: %s", note.id)
        navigator = self._require_navigator()
        self._clear_focus()
        self.set_nav_bar_visible(False)
        navigator.push(
            self._edit_screen_factory(note.id, note.hero_tag),
            TRANSITION_PLAIN,
            on_dismissed=self._on_transient_dismissed,
        )

    def _on_transient_dismissed(self):
        if sip.isdeleted(self):
            return
        self.set_nav_bar_visible(True)

    # --- rendering ---
    def render_state(self, state):
        state.when(data=self._show_data, loading=self._show_loading, error=self._show_error)

    def _show_loading(self):
        logger.debug("Displaying loading indicator.")
        self.body.setCurrentWidget(self.loading_page)

    def _show_error(self, error):
        logger.error("Error loading notes: %s", error)
        self.error_label.setText(f"Error loading notes:\n{error}")
        self.body.setCurrentWidget(self.error_label)

    def _show_data(self, notes):
        logger.debug("Notes data received: %d notes.", len(notes))
        if self.tabs is None:
            self.tabs = QtWidgets.QStackedWidget(self.body)
            self.tabs.setObjectName("tabs")
            self.home_screen = HomeScreen(notes, on_note_tap=self.navigate_to_edit_note)
            self.settings_screen = SettingsScreen(
                self.source, save_prompt=self._save_prompt, open_prompt=self._open_prompt
            )
            self.tabs.addWidget(self.home_screen)
            self.tabs.addWidget(self.settings_screen)
            self.body.addWidget(self.tabs)
            self._apply_selection()
        else:
            self.home_screen.set_notes(notes)
        self.body.setCurrentWidget(self.tabs)
