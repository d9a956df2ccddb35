from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from PySide6.QtCore import QRectF, Qt, QTimer
from PySide6.QtGui import QColor, QGuiApplication, QImage, QPainter
from PySide6.QtWidgets import QApplication, QWidget

from tiledswirl.core.animator import Animator
from tiledswirl.core.colors import background_color
from tiledswirl.core.config import SwirlConfig
from tiledswirl.core.errors import MissingSurface
from tiledswirl.utils.surface import parse_color

FRAME_MS = 16


def _qcolor(color: str) -> QColor:
    r, g, b = parse_color(color)
    return QColor(r, g, b)


class PainterSurface:
    """Render surface backed by an offscreen QImage.

    A painter is opened on the first call of a frame and closed by
    ``present``, which then hands the finished image to ``on_present``.
    """

    def __init__(self, width: int, height: int, background: str, on_present: Optional[Callable[[], None]] = None):
        self.background = background
        self.on_present = on_present
        self.factor = 1.0
        self.image: Optional[QImage] = None
        self._painter: Optional[QPainter] = None
        self.resize(width, height)

    @property
    def available(self) -> bool:
        return self.image is not None and not self.image.isNull()

    @property
    def width(self) -> int:
        return self.image.width() if self.image is not None else 0

    @property
    def height(self) -> int:
        return self.image.height() if self.image is not None else 0

    def resize(self, width: int, height: int) -> None:
        self._end()
        image = QImage(max(1, int(width)), max(1, int(height)), QImage.Format_RGB32)
        if image.isNull():
            raise MissingSurface(f"could not allocate a {width}x{height} image")
        image.fill(_qcolor(self.background))
        self.image = image

    def scale(self, factor: float) -> None:
        self._end()
        self.factor = float(factor)

    def _begin(self) -> QPainter:
        if self._painter is None:
            self._painter = QPainter(self.image)
            self._painter.scale(self.factor, self.factor)
        return self._painter

    def _end(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None

    def clear(self, x, y, width, height) -> None:
        self._begin().fillRect(QRectF(x, y, width, height), _qcolor(self.background))

    def fill_rect(self, x, y, width, height, color: str) -> None:
        self._begin().fillRect(QRectF(x, y, width, height), _qcolor(color))

    def present(self) -> None:
        self._end()
        if self.on_present is not None:
            self.on_present()


def _prefers_dark() -> bool:
    hints = QGuiApplication.styleHints()
    return hints.colorScheme() == Qt.ColorScheme.Dark


class SwirlWidget(QWidget):
    # Full-window swirl; feeds viewport, theme and frame ticks to an Animator
    def __init__(self, config: SwirlConfig | None = None, parent=None):
        super().__init__(parent)
        self.config = config or SwirlConfig()
        self.setAttribute(Qt.WA_OpaquePaintEvent, True)
        self.resize(960, 540)
        ratio = self.devicePixelRatioF()
        w, h = self._device_size()
        dark = _prefers_dark()
        self.animator = Animator(self.config, w, h, pixel_ratio=ratio, is_dark=dark)
        self.surface = PainterSurface(w, h, background_color(dark), on_present=self.update)
        self._hints = QGuiApplication.styleHints()
        self._hints.colorSchemeChanged.connect(self._on_scheme_changed)
        self.running = self.animator.start(self.surface, self._schedule_next_frame)

    def _device_size(self):
        ratio = self.devicePixelRatioF()
        return max(1, round(self.width() * ratio)), max(1, round(self.height() * ratio))

    def _schedule_next_frame(self, callback) -> None:
        QTimer.singleShot(FRAME_MS, callback)

    def _on_scheme_changed(self, scheme) -> None:
        dark = scheme == Qt.ColorScheme.Dark
        self.animator.set_dark(dark)
        self.surface.background = background_color(dark)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if getattr(self, "animator", None) is None:
            return
        w, h = self._device_size()
        self.surface.resize(w, h)
        self.animator.resize(w, h, self.devicePixelRatioF())

    def paintEvent(self, event):
        painter = QPainter(self)
        if self.surface.available:
            painter.drawImage(self.rect(), self.surface.image)
        else:
            painter.fillRect(self.rect(), _qcolor(self.surface.background))
        painter.end()

    def keyPressEvent(self, e):
        if e.key() in (Qt.Key_F, Qt.Key_F11):
            if self.isFullScreen():
                self.showNormal()
            else:
                self.showFullScreen()
        elif e.key() == Qt.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(e)

    def closeEvent(self, event):
        self.animator.stop()
        try:
            self._hints.colorSchemeChanged.disconnect(self._on_scheme_changed)
        except (RuntimeError, TypeError):
            pass
        super().closeEvent(event)


def main():
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    try:
        QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)
        app = QApplication(sys.argv)
        w = SwirlWidget()
        w.setWindowTitle("Tiled Swirl")
        w.show()
        sys.exit(app.exec())
    except Exception as e:
        import traceback
        print(f"Fatal error:\n\n{e}\n\n{traceback.format_exc()}")
        sys.exit(1)
