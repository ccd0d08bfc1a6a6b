import numpy as np
import pytest

from config import Config
from Controller.enums import Mode
from Model.frame import compute_frame
from Model.video_source import CameraUnavailableError

W, H = 200, 100


class FakeSource:
    """Stands in for VideoSource: no device, optional still frame."""

    def __init__(self):
        self.is_open = False
        self.device_index = None
        self.raster = None

    def acquire(self):
        raise CameraUnavailableError("Camera error")

    def switch(self):
        return False

    def read(self):
        return None

    def current_raster(self):
        return self.raster

    def release(self):
        pass


class FakeView:
    """The widgets LensController talks to, without the main window around them."""

    def __init__(self):
        from PyQt6.QtWidgets import QComboBox, QLineEdit, QPushButton

        from View.lens_canvas import LensCanvas
        from View.panel import Panel

        self.canvas = LensCanvas()
        self.canvas.resize(W, H)
        self.lensPanel = Panel("Lens")
        self.lensPanel.add_toolbar_buttons({key: QPushButton(key) for key in (
            "Dot", "Vertical", "Horizontal", "Slant", "Select", "Delete", "Capture", "Switch")})
        self.ratioCombo = QComboBox()
        for label, value in Config.RATIO_PRESETS:
            self.ratioCombo.addItem(label, value)
        self.statusLine = QLineEdit()

        self.ratio_text = None
        self.delete_visible = False
        self.fail_show = False
        self.shown = []

    def set_ratio_label(self, text):
        self.ratio_text = text

    def set_delete_visible(self, visible):
        self.delete_visible = visible

    def show_capture(self, qimg, default_path):
        if self.fail_show:
            raise RuntimeError("no display for dialogs")
        self.shown.append((qimg, default_path))
        return True


@pytest.fixture
def controller(qapp, monkeypatch, tmp_path):
    from Controller.LensController import LensController

    monkeypatch.setattr(Config, "CAPTURE_DIR", tmp_path)
    ctl = LensController(FakeView(), source=FakeSource())
    ctl._viewport_resized(W, H)
    yield ctl
    ctl.shutdown()


def test_ratio_change_recomputes_frame_and_label(controller):
    controller._apply_ratio(16 / 9)
    expected = compute_frame(W, H, 16 / 9)
    assert controller.state.frame == expected
    assert controller.drag.frame == expected
    assert controller.view.ratio_text == "1.778"


def test_camera_error_is_reported_and_guides_keep_working(controller):
    controller._on_camera_opened(controller._camera_generation, False, True, "Camera error")

    assert controller.view.statusLine.text() == "Camera error"
    assert "#ff9f1a" in controller.view.statusLine.styleSheet()

    controller.set_mode(Mode.DOT)
    controller._pointer_down(W / 2, H / 2)
    assert len(controller.state.store.dots) == 1


def test_switch_without_other_camera_keeps_current_image(controller):
    from PyQt6.QtGui import QImage

    still = QImage(4, 4, QImage.Format.Format_RGB888)
    still.fill(0)
    controller.view.canvas.set_raster(still)

    controller._on_camera_opened(controller._camera_generation, True, False, "No other camera found")

    assert controller.view.canvas._raster is not None
    assert controller.view.statusLine.text() == "No other camera found"
    assert "#ff9f1a" not in controller.view.statusLine.styleSheet()


def test_stale_camera_result_is_ignored(controller):
    controller.view.statusLine.setText("before")
    controller._on_camera_opened(controller._camera_generation - 1, False, True, "Camera error")
    assert controller.view.statusLine.text() == "before"


def test_capture_is_shown_without_writing_a_file(controller, tmp_path):
    img = controller.capture()

    assert (img.width(), img.height()) == (W, H)
    assert len(controller.view.shown) == 1
    assert controller.view.shown[0][1] == str(tmp_path / Config.CAPTURE_FILENAME)
    assert list(tmp_path.iterdir()) == []


def test_capture_falls_back_to_saving_when_dialog_fails(controller, tmp_path):
    controller.view.fail_show = True
    controller.source.raster = np.full((10, 20, 3), 255, dtype=np.uint8)

    img = controller.capture()

    target = tmp_path / Config.CAPTURE_FILENAME
    assert target.exists()
    assert controller.view.statusLine.text() == f"Capture saved to {target}"
    # the still comes from the video source
    assert img.pixelColor(W // 2, H // 2).red() == 255


def test_capture_path_gets_timestamp_when_file_exists(controller, tmp_path):
    from Controller.LensController import LensController

    first = LensController._capture_path()
    assert first == tmp_path / Config.CAPTURE_FILENAME

    first.write_bytes(b"")
    second = LensController._capture_path()
    assert second != first
    assert second.parent == tmp_path
    assert second.name.startswith("viewfinder_") and second.suffix == ".png"
