# Model/video_source.py
from __future__ import annotations
import logging
from typing import List, Optional

import cv2
import numpy as np

from config import Config
from Model.image_ops import bgr_to_rgb

logger = logging.getLogger(__name__)


class CameraUnavailableError(RuntimeError):
    """Raised when neither the preferred nor the generic camera could be opened."""


class VideoSource:
    """
    Wraps a cv2.VideoCapture. Acquisition is a two-attempt sequence: the preferred device
    with a resolution hint first, then the generic default device. Only `current_raster()`
    is of interest to the overlay - it is None until the first frame arrived.
    """

    def __init__(self, preferred_index: int = Config.PREFERRED_CAMERA_INDEX,
                 resolution: tuple[int, int] = Config.PREFERRED_RESOLUTION,
                 max_scan: int = Config.MAX_CAMERA_SCAN):
        self.preferred_index = preferred_index
        self.resolution = resolution
        self.max_scan = max_scan
        self.devices: List[int] = []
        self.device_index: Optional[int] = None  # the camera index currently open
        self._position = 0  # position inside self.devices
        self._cap: Optional[cv2.VideoCapture] = None
        self._latest: Optional[np.ndarray] = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    # ---- Acquisition ----
    def acquire(self) -> int:
        # 1) preferred device with the resolution hint
        cap = self._open(self.preferred_index, hint=True)
        if cap is not None:
            self._attach(cap, self.preferred_index)
            self.enumerate_devices()
            return self.preferred_index

        logger.info("Preferred camera %d unavailable, trying default device", self.preferred_index)
        # 2) generic default device
        cap = self._open(0, hint=False)
        if cap is not None:
            self._attach(cap, 0)
            self.enumerate_devices()
            return 0

        raise CameraUnavailableError("Camera error")

    def enumerate_devices(self) -> List[int]:
        found = []
        for idx in range(self.max_scan):
            if idx == self.device_index and self.is_open:
                found.append(idx)
                continue
            cap = cv2.VideoCapture(idx)
            try:
                if cap.isOpened():
                    found.append(idx)
            finally:
                cap.release()
        self.devices = found
        if self.device_index in found:
            self._position = found.index(self.device_index)
        logger.debug("Cameras found: %s", found)
        return found

    def switch(self) -> bool:
        """
        Cycles to the next enumerated camera. Falls back to acquire() if that fails.
        Returns False when there is no other camera; the current stream is left untouched.
        """
        self.enumerate_devices()
        if not self.devices:
            return False

        self._position = (self._position + 1) % len(self.devices)
        idx = self.devices[self._position]
        if idx == self.device_index and self.is_open:
            logger.info("No other camera to switch to")
            return False
        cap = self._open(idx, hint=False)
        if cap is not None:
            self._attach(cap, idx)
            logger.info("Switched to camera %d", idx)
            return True

        logger.warning("Could not open camera %d, re-acquiring", idx)
        self.acquire()
        return True

    # ---- Frames ----
    def read(self) -> Optional[np.ndarray]:
        if not self.is_open:
            return None
        ok, bgr = self._cap.read()
        if not ok or bgr is None:
            return None
        self._latest = bgr_to_rgb(bgr)
        return self._latest

    def current_raster(self) -> Optional[np.ndarray]:
        return self._latest

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
        self._cap = None
        self.device_index = None
        self._latest = None

    # ---- Helpers ----
    def _open(self, idx: int, *, hint: bool) -> Optional[cv2.VideoCapture]:
        cap = cv2.VideoCapture(idx)
        if not cap.isOpened():
            cap.release()
            return None
        if hint:
            w, h = self.resolution
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
        return cap

    def _attach(self, cap: cv2.VideoCapture, idx: int) -> None:
        # Stop the old stream before the new one takes over
        if self._cap is not None:
            self._cap.release()
        self._cap = cap
        self.device_index = idx
        self._latest = None
