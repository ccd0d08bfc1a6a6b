from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal, QThreadPool, QRunnable, QTimer
from PyQt6.QtGui import QImage

from config import Config
from Controller.drag_controller import DragController
from Controller.enums import Mode
from Model.frame import ratio_label
from Model.image_ops import numpy_rgb_to_qimage
from Model.lens_state import LensState
from Model.video_source import CameraUnavailableError, VideoSource
from View.compositor import Compositor

logger = logging.getLogger(__name__)

# Worker infrastructure: camera I/O (opening, switching, grabbing) runs in the QThreadPool so
# the GUI thread never waits on the device. Results come back via queued signals; everything
# touching annotations stays on the GUI thread.


class _CameraSignals(QObject):
    # generation, camera usable, camera changed, message
    opened = pyqtSignal(int, bool, bool, str)
    # generation, rgb frame (or None)
    grabbed = pyqtSignal(int, object)


class _OpenCameraTask(QRunnable):
    def __init__(self, source: VideoSource, generation: int, sig: _CameraSignals, *, switch: bool = False):
        super().__init__()
        self.source = source
        self.generation = generation
        self.sig = sig
        self.switch = switch

    def run(self):
        try:
            if self.switch:
                changed = self.source.switch()
                # No other camera: the current one (if any) keeps running
                ok = self.source.is_open
                msg = f"Camera {self.source.device_index}" if changed else "No other camera found"
            else:
                idx = self.source.acquire()
                ok, changed, msg = True, True, f"Camera {idx}"
        except CameraUnavailableError as e:
            ok, changed, msg = False, True, str(e)
        except Exception as e:
            logger.exception("Camera task failed")
            ok, changed, msg = False, True, f"Camera error: {e}"
        self.sig.opened.emit(self.generation, ok, changed, msg)


class _GrabTask(QRunnable):
    def __init__(self, source: VideoSource, generation: int, sig: _CameraSignals):
        super().__init__()
        self.source = source
        self.generation = generation
        self.sig = sig

    def run(self):
        try:
            rgb = self.source.read()
        except Exception:
            logger.exception("Frame grab failed")
            rgb = None
        self.sig.grabbed.emit(self.generation, rgb)


# --- Controller ---
class LensController(QObject):
    def __init__(self, view, source: VideoSource | None = None):
        super().__init__()
        self.view = view
        self.pool = QThreadPool.globalInstance()

        self.state = LensState()
        self.drag = DragController(self.state.store, self.state.frame)
        self.compositor = Compositor()

        # Camera: one job at a time (open/switch/grab share the capture object)
        self.source = source or VideoSource()
        self._camera_busy = False
        self._pending_switch: Optional[bool] = None
        self._camera_generation = 0
        self.sig = _CameraSignals()
        self.sig.opened.connect(self._on_camera_opened)
        self.sig.grabbed.connect(self._on_frame_grabbed)

        # Render loop - redraws from current state on every tick, independent of input
        self._render_timer = QTimer(self)
        self._render_timer.setInterval(Config.RENDER_INTERVAL_MS)
        self._render_timer.timeout.connect(self._on_tick)

        self._wire_view()
        self.view.canvas.set_scene(self.state.frame, self.state.store)
        self._apply_ratio(Config.DEFAULT_RATIO)

        self._render_timer.start()
        self._start_camera()

    # Wiring - connecting the view (widgets, buttons) with the logic
    def _wire_view(self):
        v = self.view
        c = v.canvas

        c.pointerDown.connect(self._pointer_down)
        c.pointerMove.connect(self._pointer_move)
        c.pointerUp.connect(self._pointer_up)
        c.viewportResized.connect(self._viewport_resized)
        c.deleteRequested.connect(self.delete_selected)

        buttons = v.lensPanel.toolbarButtons
        buttons["Dot"].clicked.connect(lambda: self.set_mode(Mode.DOT))
        buttons["Vertical"].clicked.connect(lambda: self.set_mode(Mode.VERTICAL))
        buttons["Horizontal"].clicked.connect(lambda: self.set_mode(Mode.HORIZONTAL))
        buttons["Slant"].clicked.connect(lambda: self.set_mode(Mode.SLANT))
        buttons["Select"].clicked.connect(lambda: self.set_mode(Mode.SELECT))

        buttons["Delete"].clicked.connect(self.delete_selected)
        buttons["Capture"].clicked.connect(self.capture)
        buttons["Switch"].clicked.connect(self.switch_camera)

        v.ratioCombo.currentIndexChanged.connect(
            lambda i: self._apply_ratio(float(v.ratioCombo.itemData(i))))

    # ---- Modes / ratio / resize ----
    def set_mode(self, mode: Mode):
        self.drag.set_mode(mode)
        logger.debug("Mode -> %s", mode.name)

    def _apply_ratio(self, ratio: float):
        frame = self.state.set_ratio(ratio)
        self._frame_changed(frame)
        self.view.set_ratio_label(ratio_label(ratio))

    def _viewport_resized(self, w: int, h: int):
        # Ratio is kept, the drag in progress is not touched
        self._frame_changed(self.state.resize(w, h))

    def _frame_changed(self, frame):
        self.drag.set_frame(frame)
        self.view.canvas.set_scene(frame, self.state.store)

    # ---- Pointer input ----
    def _pointer_down(self, x: float, y: float):
        self.drag.pointer_down(x, y)
        self._sync_selection()

    def _pointer_move(self, x: float, y: float):
        self.drag.pointer_move(x, y)

    def _pointer_up(self, x: float, y: float):
        self.drag.pointer_up()

    def delete_selected(self):
        if self.drag.delete_selected():
            self._sync_selection()

    def _sync_selection(self):
        self.view.set_delete_visible(self.state.store.selected is not None)

    # ---- Render loop ----
    def _on_tick(self):
        self._request_frame()
        self.view.canvas.update()

    # ---- Camera ----
    def _start_camera(self, *, switch: bool = False):
        if self._camera_busy:
            # A grab is in flight - run the open/switch as soon as it is back
            self._pending_switch = switch
            return
        self._pending_switch = None
        self._camera_busy = True
        self._camera_generation += 1
        self.pool.start(_OpenCameraTask(self.source, self._camera_generation, self.sig, switch=switch))

    def switch_camera(self):
        self._start_camera(switch=True)

    def _request_frame(self):
        if self._camera_busy or not self.source.is_open:
            return
        self._camera_busy = True
        self.pool.start(_GrabTask(self.source, self._camera_generation, self.sig))

    def _on_camera_opened(self, generation: int, ok: bool, changed: bool, message: str):
        self._camera_busy = False
        if self._pending_switch is not None:
            self._start_camera(switch=self._pending_switch)
        if generation != self._camera_generation:
            return
        if changed:
            self.view.canvas.set_raster(None)
        if ok:
            logger.info("%s ready", message)
            self._set_status_text(message, kind="info")
        else:
            # Non-fatal: the guides keep working without an image layer
            logger.warning("Camera unavailable: %s", message)
            self._set_status_text(message, kind="error")

    def _on_frame_grabbed(self, generation: int, rgb):
        self._camera_busy = False
        if self._pending_switch is not None:
            self._start_camera(switch=self._pending_switch)
        # Ignore frames of an old camera
        if generation != self._camera_generation or rgb is None:
            return
        self.view.canvas.set_raster(numpy_rgb_to_qimage(rgb))

    # ---- Capture / export ----
    def capture(self) -> QImage:
        canvas = self.view.canvas
        img = self.compositor.render_export(
            self.source.current_raster(), canvas.width(), canvas.height(), self.state.frame, self.state.store)

        target = self._capture_path()
        try:
            shown = self.view.show_capture(img, str(target))
        except Exception:
            logger.exception("Could not present capture, saving instead")
            shown = False

        if not shown:
            self._save_capture(img, target)
        return img

    def _save_capture(self, img: QImage, target: Path):
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create %s: %s", target.parent, e)
            self._set_status_text(f"Could not save capture: {e}", kind="error")
            return
        if img.save(str(target), "PNG"):
            logger.info("Capture saved to %s", target)
            self._set_status_text(f"Capture saved to {target}", kind="ok")
        else:
            logger.error("Saving capture to %s failed", target)
            self._set_status_text(f"Could not save capture to {target}", kind="error")

    @staticmethod
    def _capture_path() -> Path:
        target = Config.CAPTURE_DIR / Config.CAPTURE_FILENAME
        if target.exists():
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            target = target.with_name(f"{target.stem}_{stamp}{target.suffix}")
        return target

    # ---- Shutdown / status ----
    def shutdown(self):
        self._render_timer.stop()
        self._pending_switch = None
        self._camera_generation += 1  # late results are dropped
        self.pool.waitForDone(2000)
        self.source.release()

    def _set_status_text(self, msg: str, *, kind: str = "info"):
        # Colors: error = orange, info = light grey, ok = green
        colors = {
            "error": "#ff9f1a",
            "info": "#d8d8d8",
            "ok": "#6bd66b",
        }
        col = colors.get(kind, "#d8d8d8")
        self.view.statusLine.setStyleSheet(
            f"QLineEdit {{ background:#1e1e1e; color:{col}; padding:2px 6px; }}"
        )
        self.view.statusLine.setText(msg)
