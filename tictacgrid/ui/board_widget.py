from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen

from ..game_logic import Cell, cell_index, row_col, winning_cells

X_COLOR = "#8acaff"
O_COLOR = "#ff8a8a"
GRID_COLOR = "#555"
BACKGROUND_COLOR = "#333"
HIGHLIGHT_COLOR = "#2e5e2e"  # cells on a completed line


class BoardWidget(QWidget):
    """
    custom widget to draw and click on an N x N board
    """
    cell_clicked = Signal(int)  # emits row-major cell index on click

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self.store = store  # source of the snapshot to draw
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        # square drawing area centered in the widget
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side

    def paintEvent(self, event):
        """
        draw grid, highlighted winning cells, X/O marks
        """
        snapshot = self.store.last()
        size = snapshot.size
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            offset_x, offset_y, side = self._geometry()
            painter.fillRect(self.rect(), QColor(BACKGROUND_COLOR))
            cell_size = side / size
            # winning lines first so marks stay on top
            for i in winning_cells(snapshot):
                r, c = row_col(i, size)
                painter.fillRect(
                    QRectF(offset_x + c * cell_size, offset_y + r * cell_size,
                           cell_size, cell_size),
                    QColor(HIGHLIGHT_COLOR))
            # grid lines
            painter.setPen(QPen(QColor(GRID_COLOR), 2))
            for i in range(1, size):
                x = offset_x + i * cell_size
                painter.drawLine(int(x), int(offset_y), int(x), int(offset_y + side))
                y = offset_y + i * cell_size
                painter.drawLine(int(offset_x), int(y), int(offset_x + side), int(y))
            # marks
            rad = cell_size / 2 * 0.7
            for i, value in enumerate(snapshot.board):
                if value is Cell.EMPTY:
                    continue
                r, c = row_col(i, size)
                cx = offset_x + c * cell_size + cell_size / 2
                cy = offset_y + r * cell_size + cell_size / 2
                if value is Cell.X:
                    painter.setPen(QPen(QColor(X_COLOR), 4))
                    # two crossing lines
                    painter.drawLine(QPointF(cx - rad, cy - rad), QPointF(cx + rad, cy + rad))
                    painter.drawLine(QPointF(cx + rad, cy - rad), QPointF(cx - rad, cy + rad))
                else:
                    painter.setPen(QPen(QColor(O_COLOR), 4))
                    painter.drawEllipse(QPointF(cx, cy), rad, rad)
        finally:
            painter.end()

    def index_at(self, x, y):
        """
        map widget coords to a cell index, None outside the grid
        """
        offset_x, offset_y, side = self._geometry()
        if not (offset_x <= x < offset_x + side and offset_y <= y < offset_y + side):
            return None
        size = self.store.last().size
        cell = side / size
        if cell <= 0:
            return None
        col = int((x - offset_x) // cell); row = int((y - offset_y) // cell)
        # clamp to valid range
        row = max(0, min(row, size - 1)); col = max(0, min(col, size - 1))
        return cell_index(row, col, size)

    def mouseReleaseEvent(self, event):
        """
        handle clicks: forward only open cells while the game runs
        """
        snapshot = self.store.last()
        if not self._accept_clicks or snapshot.finished:
            return
        pos = event.position()
        index = self.index_at(pos.x(), pos.y())
        if index is None or snapshot.board[index] is not Cell.EMPTY:
            return
        self.cell_clicked.emit(index)  # notify main window
