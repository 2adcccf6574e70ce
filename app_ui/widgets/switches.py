from __future__ import annotations

from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from module_registry.types import GroupState

ON_COLOR = "#0EA567"
OFF_COLOR = "#E53935"
PARTIAL_COLOR = "#F59E0B"

_TRACK_W = 44
_TRACK_H = 24
_KNOB = 20


def _paint_switch(widget: QtWidgets.QWidget, color: str, knob_x: float) -> None:
    painter = QtGui.QPainter(widget)
    painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
    if not widget.isEnabled():
        painter.setOpacity(0.5)
    track = QtCore.QRectF(0, (widget.height() - _TRACK_H) / 2, _TRACK_W, _TRACK_H)
    painter.setPen(QtCore.Qt.PenStyle.NoPen)
    painter.setBrush(QtGui.QColor(color))
    painter.drawRoundedRect(track, _TRACK_H / 2, _TRACK_H / 2)
    knob = QtCore.QRectF(knob_x, track.top() + (_TRACK_H - _KNOB) / 2, _KNOB, _KNOB)
    painter.setBrush(QtGui.QColor("#FFFFFF"))
    painter.drawEllipse(knob)
    painter.end()


class ToggleSwitch(QtWidgets.QAbstractButton):
    """Binary switch used for leaf rows (green on, red off)."""

    def __init__(self, checked: bool = True, *, label: str = "", parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setCheckable(True)
        self.setChecked(checked)
        self.setCursor(QtCore.Qt.CursorShape.PointingHandCursor)
        if label:
            self.setAccessibleName(label)
            self.setToolTip(label)

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(_TRACK_W, _TRACK_H)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        checked = self.isChecked()
        _paint_switch(self, ON_COLOR if checked else OFF_COLOR, 22 if checked else 2)


class TriStateSwitch(QtWidgets.QAbstractButton):
    """Group switch showing on/off/partial.

    A click requests ``False`` when the group is fully on and ``True``
    otherwise; the owner applies the change and pushes the new state back
    through :meth:`set_state`.
    """

    toggle_requested = QtCore.pyqtSignal(bool)

    _KNOB_X = {GroupState.ON: 22, GroupState.OFF: 2, GroupState.PARTIAL: 12}
    _COLORS = {GroupState.ON: ON_COLOR, GroupState.OFF: OFF_COLOR, GroupState.PARTIAL: PARTIAL_COLOR}

    def __init__(
        self,
        state: GroupState = GroupState.ON,
        *,
        label: str = "",
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._state = state
        self.setCursor(QtCore.Qt.CursorShape.PointingHandCursor)
        if label:
            self.setAccessibleName(label)
            self.setToolTip(label)
        self.clicked.connect(self._on_clicked)

    def state(self) -> GroupState:
        return self._state

    def set_state(self, state: GroupState) -> None:
        if state is self._state:
            return
        self._state = state
        self.update()

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(_TRACK_W, _TRACK_H)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        _paint_switch(self, self._COLORS[self._state], self._KNOB_X[self._state])

    def _on_clicked(self) -> None:
        self.toggle_requested.emit(self._state is not GroupState.ON)
