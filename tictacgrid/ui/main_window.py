import logging

from ..game_logic import (
    SUPPORTED_SIZES, IllegalMoveError, Phase, phase, winner,
)
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QComboBox, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

logger = logging.getLogger(__name__)


def status_text(snapshot):
    """
    status line for a snapshot: (text, style key)
    """
    state = phase(snapshot)
    if state is Phase.WON:
        win = winner(snapshot).value
        lose = snapshot.turn.value
        return (f"{win} wins! {lose} gets a participation trophy... "
                "and a strong urge to reconsider life choices.", "success")
    if state is Phase.DRAW:
        return "It's a draw!", "success"
    return f"Player {snapshot.turn.value}'s turn", "turn"


class TicTacToeWindow(QMainWindow):
    """
    main window UI and game flow
    """
    def __init__(self, store):
        """
        init ui widgets, hook up to the moves store
        """
        super().__init__()
        self.store = store
        self.board_widget = BoardWidget(self.store, parent=self)
        self._setup_ui()
        self._unsubscribe = self.store.subscribe(self._on_snapshot)
        self._on_snapshot(self.store.last())

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("QMainWindow { background-color: #222; }")
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self._create_size_controls()       # board size selector
        self.main_layout.addWidget(self.size_controls_widget)
        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self._create_bottom_controls()     # status + rematch
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        new_action = QAction("New Game", self)
        new_action.triggered.connect(self.reset_game)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        game_menu.addAction(new_action)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_size_controls(self):
        '''size selector row'''
        self.size_controls_widget = QWidget()
        hl = QHBoxLayout(self.size_controls_widget)
        hl.addWidget(QLabel("Board size:"))
        self.size_combo = QComboBox()
        for size in SUPPORTED_SIZES:
            self.size_combo.addItem(f"{size}x{size}", size)
        self.size_combo.currentIndexChanged.connect(self._on_size_selected)
        hl.addWidget(self.size_combo); hl.addStretch(1)

    def _create_bottom_controls(self):
        # status label + rematch button
        self.controls_bottom_widget = QWidget()
        hl = QHBoxLayout(self.controls_bottom_widget)
        self.controls_bottom_widget.setStyleSheet("background: transparent;")
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.rematch_button = QPushButton("Rematch?")
        self.rematch_button.clicked.connect(self.reset_game)
        hl.addWidget(self.message_label); hl.addStretch(1)
        hl.addWidget(self.rematch_button)

    def _update_message(self, text, is_error=False,
                        is_success=False, is_turn=False):
        # set message text + style
        style = "color: #eee;"
        if is_error:   style = "color: #ff8a8a; font-weight: bold;"
        elif is_success: style = "color: lime; font-weight: bold;"
        elif is_turn:    style = "color: #8acaff; font-weight: bold;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    def _on_snapshot(self, snapshot):
        # store published a new snapshot, redraw everything
        text, kind = status_text(snapshot)
        self._update_message(text, is_success=kind == "success",
                             is_turn=kind == "turn")
        self.board_widget.set_accept_clicks(not snapshot.finished)
        # keep selector in sync without re-triggering a reset
        pos = self.size_combo.findData(snapshot.size)
        if pos >= 0 and pos != self.size_combo.currentIndex():
            self.size_combo.blockSignals(True)
            self.size_combo.setCurrentIndex(pos)
            self.size_combo.blockSignals(False)
        self.board_widget.update()

    @Slot(int)
    def _on_cell_clicked(self, index):
        try:
            self.store.make_move(index)
        except IllegalMoveError as e:
            logger.info("rejected move on cell %d: %s", index, e)
            self._update_message(str(e), is_error=True)

    @Slot(int)
    def _on_size_selected(self, pos):
        size = self.size_combo.itemData(pos)
        if size is not None:
            self.store.reset(size)

    @Slot()
    def reset_game(self):
        # same size, fresh board
        self.store.reset()

    def closeEvent(self, event):
        # stop listening to the store
        self._unsubscribe()
        event.accept()
