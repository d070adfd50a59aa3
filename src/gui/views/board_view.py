"""Board view: horizontally laid out, draggable columns.

Presentation only. Every decision about order lives in ``BoardViewModel``;
this module translates Qt drag & drop and key events into board events:

 - Column headers start a ``QDrag`` whose mime data (``COLUMN_MIME_TYPE``)
   carries the column id and the board instance id as JSON; the dragged
   column's content is dimmed to ``DRAGGING_OPACITY`` until the drag ends
 - ``ColumnWidget`` accepts drops only from its own board, draws a drop
   indicator on the closest left/right edge while hovered, and publishes
   ``BoardEvent.DROP`` with the edge attached to the target data
 - Drops on the board background publish a payload with no targets
 - ``Ctrl+Left/Right/Home/End`` on a focused column moves it by keyboard
 - A ``QLabel`` mirrors the live region announcer for assistive tech
"""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from PyQt6.QtCore import QByteArray, QMimeData, QPoint, QRect, Qt
from PyQt6.QtGui import QColor, QDrag, QKeyEvent, QMouseEvent, QPainter, QPaintEvent, QPen
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from config import settings
from domain.models import BoardState, ColumnRecord, DropPayload, SourceData, TargetDescriptor
from gui.design.accessible_reorder import interpret_key_command
from gui.design.hitbox import Edge, Rect, attach_closest_edge, extract_closest_edge
from gui.services.drag_coordinator import COLUMN_SOURCE_TYPE
from gui.services.event_bus import BoardEvent, Event
from gui.viewmodels.board_viewmodel import BoardViewModel, StateChange

__all__ = ["BoardView", "ColumnWidget", "encode_source_data", "decode_source_data"]

_logger = logging.getLogger(__name__)

_ALLOWED_EDGES = (Edge.LEFT, Edge.RIGHT)
_INDICATOR_COLOR = "#1D7AFC"
DRAGGING_OPACITY = 0.4
_KEY_NAMES = {
    Qt.Key.Key_Left.value: "ctrl+left",
    Qt.Key.Key_Right.value: "ctrl+right",
    Qt.Key.Key_Home.value: "ctrl+home",
    Qt.Key.Key_End.value: "ctrl+end",
}


def encode_source_data(source: SourceData) -> QMimeData:
    mime = QMimeData()
    raw = json.dumps(
        {"type": source.type, "columnId": source.column_id, "instanceId": source.instance_id}
    )
    mime.setData(settings.COLUMN_MIME_TYPE, QByteArray(raw.encode("utf-8")))
    return mime


def decode_source_data(mime: Optional[QMimeData]) -> Optional[SourceData]:
    """Read drag source data back; None for foreign or corrupt mime data."""
    if mime is None or not mime.hasFormat(settings.COLUMN_MIME_TYPE):
        return None
    try:
        data = json.loads(bytes(mime.data(settings.COLUMN_MIME_TYPE)).decode("utf-8"))
        return SourceData(
            type=str(data["type"]),
            column_id=str(data["columnId"]),
            instance_id=str(data["instanceId"]),
        )
    except (ValueError, KeyError, TypeError):
        _logger.warning("Unreadable column drag data", exc_info=True)
        return None


class ColumnWidget(QFrame):
    def __init__(self, column: ColumnRecord, viewmodel: BoardViewModel, parent: QWidget | None = None):
        super().__init__(parent)
        self.column = column
        self._vm = viewmodel
        self._press_pos: Optional[QPoint] = None
        self.closest_edge: Optional[Edge] = None
        self.setObjectName(f"column-{column.column_id}")
        self.setAccessibleName(column.title)
        self.setFixedWidth(settings.COLUMN_WIDTH_PX)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAcceptDrops(True)

        # dragging dim goes on the body, the post-move flash on the frame
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        self.body = QWidget(self)
        outer.addWidget(self.body)
        layout = QVBoxLayout(self.body)
        self.header = QLabel(column.title, self.body)
        self.header.setObjectName(f"column-header-{column.column_id}")
        self.header.setCursor(Qt.CursorShape.OpenHandCursor)
        layout.addWidget(self.header)
        layout.addStretch(1)

        self._cleanup = viewmodel.register_column(column.column_id, self)

    def unmount(self) -> None:
        self._cleanup()

    # Drag source ------------------------------------------------------
    def source_data(self) -> SourceData:
        return SourceData(
            type=COLUMN_SOURCE_TYPE,
            column_id=self.column.column_id,
            instance_id=self._vm.instance_id,
        )

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt API
        pos = event.position().toPoint()
        header_rect = QRect(self.header.mapTo(self, QPoint(0, 0)), self.header.size())
        if event.button() == Qt.MouseButton.LeftButton and header_rect.contains(pos):
            self._press_pos = pos
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt API
        if self._press_pos is not None and event.buttons() & Qt.MouseButton.LeftButton:
            distance = (event.position().toPoint() - self._press_pos).manhattanLength()
            if distance >= QApplication.startDragDistance():
                self._press_pos = None
                self._start_drag()
                return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt API
        self._press_pos = None
        super().mouseReleaseEvent(event)

    def _start_drag(self) -> None:
        drag = QDrag(self)
        drag.setMimeData(encode_source_data(self.source_data()))
        drag.setPixmap(self.grab())
        self._set_dragging(True)
        try:
            drag.exec(Qt.DropAction.MoveAction)
        finally:
            self._set_dragging(False)

    def _set_dragging(self, dragging: bool) -> None:
        if dragging:
            effect = QGraphicsOpacityEffect(self.body)
            effect.setOpacity(DRAGGING_OPACITY)
            self.body.setGraphicsEffect(effect)
        else:
            self.body.setGraphicsEffect(None)

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.body.graphicsEffect(), QGraphicsOpacityEffect)

    # Drop target ------------------------------------------------------
    def _accepts(self, source: Optional[SourceData]) -> bool:
        return (
            source is not None
            and source.instance_id == self._vm.instance_id
            and source.type == COLUMN_SOURCE_TYPE
        )

    def _target_data(self, x: float, y: float) -> dict:
        return attach_closest_edge(
            {"columnId": self.column.column_id},
            x=x,
            y=y,
            rect=Rect(0, 0, self.width(), self.height()),
            allowed_edges=_ALLOWED_EDGES,
        )

    def _set_closest_edge(self, edge: Optional[Edge]) -> None:
        # skip repaint if edge is not changing
        if edge != self.closest_edge:
            self.closest_edge = edge
            self.update()

    def dragEnterEvent(self, event) -> None:  # noqa: N802 - Qt API
        if not self._accepts(decode_source_data(event.mimeData())):
            event.ignore()
            return
        pos = event.position()
        self._set_closest_edge(extract_closest_edge(self._target_data(pos.x(), pos.y())))
        event.acceptProposedAction()

    def dragMoveEvent(self, event) -> None:  # noqa: N802 - Qt API
        if not self._accepts(decode_source_data(event.mimeData())):
            event.ignore()
            return
        pos = event.position()
        self._set_closest_edge(extract_closest_edge(self._target_data(pos.x(), pos.y())))
        event.acceptProposedAction()

    def dragLeaveEvent(self, event) -> None:  # noqa: N802 - Qt API
        self._set_closest_edge(None)
        super().dragLeaveEvent(event)

    def dropEvent(self, event) -> None:  # noqa: N802 - Qt API
        self._set_closest_edge(None)
        source = decode_source_data(event.mimeData())
        if not self._accepts(source):
            event.ignore()
            return
        pos = event.position()
        target = TargetDescriptor(self.column.column_id, self._target_data(pos.x(), pos.y()))
        event.acceptProposedAction()
        self._vm.bus.publish(
            BoardEvent.DROP, DropPayload(source_data=source, dropped_on_targets=(target,))
        )

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802 - Qt API
        super().paintEvent(event)
        if self.closest_edge is None:
            return
        painter = QPainter(self)
        painter.setPen(QPen(QColor(_INDICATOR_COLOR), 3))
        x = 1 if self.closest_edge == Edge.LEFT else self.width() - 2
        painter.drawLine(x, 0, x, self.height())
        painter.end()

    # Keyboard ---------------------------------------------------------
    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 - Qt API
        name = _KEY_NAMES.get(int(event.key()))
        if name and event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            verb = interpret_key_command(name)
            if self._vm.move_column(self.column.column_id, verb):
                self.setFocus()
            event.accept()
            return
        super().keyPressEvent(event)


class BoardView(QWidget):
    """Top-level board widget; mounts the view-model for its own lifetime."""

    def __init__(self, viewmodel: BoardViewModel, parent: QWidget | None = None):
        super().__init__(parent)
        self._vm = viewmodel
        self.setObjectName("board")
        self.setAcceptDrops(True)

        outer = QVBoxLayout(self)
        row = QHBoxLayout()
        self._columns_layout = QHBoxLayout()
        row.addLayout(self._columns_layout)
        row.addStretch(1)
        outer.addLayout(row, 1)

        self.live_region = QLabel("", self)
        self.live_region.setObjectName("live-region")
        self.live_region.setAccessibleName("Board announcements")
        outer.addWidget(self.live_region)

        self.columns: Dict[str, ColumnWidget] = {}
        for column in viewmodel.get_columns():
            self.columns[column.column_id] = ColumnWidget(column, viewmodel, self)

        viewmodel.mount()
        self._remove_listener = viewmodel.announcer.add_listener(self._on_announcement)
        self._state_sub = viewmodel.bus.subscribe(
            BoardEvent.STATE_CHANGED, self._on_state_changed, can_monitor=self._is_own_state
        )
        self._mounted = True
        self._layout_columns(viewmodel.state)

    @property
    def viewmodel(self) -> BoardViewModel:
        return self._vm

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        self._vm.bus.unsubscribe(self._state_sub)
        self._remove_listener()
        for widget in self.columns.values():
            widget.unmount()
        self._vm.unmount()

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt API
        self.unmount()
        super().closeEvent(event)

    def ordered_column_widgets(self) -> list[ColumnWidget]:
        widgets = []
        for i in range(self._columns_layout.count()):
            w = self._columns_layout.itemAt(i).widget()
            if isinstance(w, ColumnWidget):
                widgets.append(w)
        return widgets

    # State ------------------------------------------------------------
    def _is_own_state(self, event: Event) -> bool:
        payload = event.payload
        return isinstance(payload, StateChange) and payload.instance_id == self._vm.instance_id

    def _on_state_changed(self, event: Event) -> None:
        self._layout_columns(event.payload.state)

    def _layout_columns(self, state: BoardState) -> None:
        for widget in self.columns.values():
            self._columns_layout.removeWidget(widget)
        for column_id in state.ordered_column_ids:
            self._columns_layout.addWidget(self.columns[column_id])

    def _on_announcement(self, text: str) -> None:
        self.live_region.setText(text)

    # Background drops -------------------------------------------------
    def dragEnterEvent(self, event) -> None:  # noqa: N802 - Qt API
        source = decode_source_data(event.mimeData())
        if source is not None and source.instance_id == self._vm.instance_id:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event) -> None:  # noqa: N802 - Qt API
        source = decode_source_data(event.mimeData())
        if source is None or source.instance_id != self._vm.instance_id:
            event.ignore()
            return
        event.acceptProposedAction()
        # dropped on empty space: no targets
        self._vm.bus.publish(BoardEvent.DROP, DropPayload(source_data=source))
