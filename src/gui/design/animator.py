"""Post-move flash animation.

Bridges the ``FLASH_DURATION_MS`` setting with PyQt6
``QPropertyAnimation`` to briefly tint a column after it moves:

 - A ``QGraphicsColorizeEffect`` is installed on the widget
 - Its ``strength`` animates from ``FLASH_START_STRENGTH`` down to 0
 - The effect is removed once the animation finishes

``create_post_move_flash_animation`` returns the configured (not started)
animation so tests can inspect duration and values without an event loop.
With reduced motion enabled no animation is created.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QAbstractAnimation, QByteArray, QEasingCurve, QPropertyAnimation
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QGraphicsColorizeEffect, QWidget

from config import settings

__all__ = [
    "FLASH_COLOR",
    "FLASH_START_STRENGTH",
    "create_post_move_flash_animation",
    "trigger_post_move_flash",
]

FLASH_COLOR = "#579DFF"
FLASH_START_STRENGTH = 0.6


def create_post_move_flash_animation(
    widget: QWidget, *, duration_ms: int | None = None
) -> Optional[QPropertyAnimation]:
    if settings.REDUCED_MOTION:
        return None
    effect = QGraphicsColorizeEffect(widget)
    effect.setColor(QColor(FLASH_COLOR))
    effect.setStrength(FLASH_START_STRENGTH)
    widget.setGraphicsEffect(effect)

    anim = QPropertyAnimation(effect, QByteArray(b"strength"), widget)
    anim.setStartValue(FLASH_START_STRENGTH)
    anim.setEndValue(0.0)
    anim.setDuration(max(0, duration_ms if duration_ms is not None else settings.FLASH_DURATION_MS))
    anim.setEasingCurve(QEasingCurve.Type.InOutCubic)

    def _clear_effect() -> None:
        # Another flash may have replaced the effect meanwhile
        if widget.graphicsEffect() is effect:
            widget.setGraphicsEffect(None)

    anim.finished.connect(_clear_effect)
    return anim


def trigger_post_move_flash(widget: QWidget) -> Optional[QPropertyAnimation]:
    """Start a flash on ``widget``; fire-and-forget."""
    anim = create_post_move_flash_animation(widget)
    if anim is not None:
        anim.start(QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)
    return anim
