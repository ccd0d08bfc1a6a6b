import numpy as np
import pytest

import Model.video_source as video_source
from Model.video_source import CameraUnavailableError, VideoSource


class FakeCapture:
    available = set()
    opened_with = []

    def __init__(self, idx):
        self.idx = idx
        self._open = idx in FakeCapture.available
        self.props = {}
        FakeCapture.opened_with.append(idx)

    def isOpened(self):
        return self._open

    def release(self):
        self._open = False

    def set(self, prop, value):
        self.props[prop] = value
        return True

    def read(self):
        if not self._open:
            return False, None
        bgr = np.zeros((4, 6, 3), dtype=np.uint8)
        bgr[..., 2] = 255  # red in BGR order
        return True, bgr


@pytest.fixture
def cameras(monkeypatch):
    FakeCapture.available = set()
    FakeCapture.opened_with = []
    monkeypatch.setattr(video_source.cv2, "VideoCapture", FakeCapture)
    return FakeCapture


def test_acquire_prefers_configured_device(cameras):
    cameras.available = {0, 1}
    src = VideoSource(preferred_index=1, max_scan=3)
    assert src.acquire() == 1
    assert src.is_open
    assert src.devices == [0, 1]


def test_acquire_falls_back_to_default_device(cameras):
    cameras.available = {0}
    src = VideoSource(preferred_index=2, max_scan=3)
    assert src.acquire() == 0
    assert src.device_index == 0


def test_acquire_raises_when_no_camera(cameras):
    src = VideoSource(preferred_index=1, max_scan=2)
    with pytest.raises(CameraUnavailableError):
        src.acquire()
    assert not src.is_open


def test_read_converts_to_rgb_and_keeps_latest(cameras):
    cameras.available = {0}
    src = VideoSource(preferred_index=0, max_scan=1)
    assert src.current_raster() is None
    src.acquire()
    rgb = src.read()
    assert rgb.shape == (4, 6, 3)
    assert tuple(rgb[0, 0]) == (255, 0, 0)
    assert src.current_raster() is rgb


def test_switch_cycles_through_devices(cameras):
    cameras.available = {0, 2}
    src = VideoSource(preferred_index=0, max_scan=3)
    src.acquire()
    assert src.switch() is True
    assert src.device_index == 2
    assert src.switch() is True
    assert src.device_index == 0


def test_switch_without_devices_is_noop(cameras):
    src = VideoSource(max_scan=2)
    assert src.switch() is False


def test_release_closes_and_forgets_frame(cameras):
    cameras.available = {0}
    src = VideoSource(preferred_index=0, max_scan=1)
    src.acquire()
    src.read()
    src.release()
    assert not src.is_open
    assert src.current_raster() is None
    assert src.read() is None


def test_switch_with_single_camera_keeps_stream(cameras):
    cameras.available = {0}
    src = VideoSource(preferred_index=0, max_scan=3)
    src.acquire()
    cameras.opened_with = []

    assert src.switch() is False
    assert src.is_open
    assert src.device_index == 0
    # the open stream is not reopened
    assert 0 not in cameras.opened_with
