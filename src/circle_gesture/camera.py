from __future__ import annotations
import time
from typing import Any, Optional, Union
import numpy as np
from .config import GestureConfig

try:
    from picamera2 import Picamera2  # type: ignore
except ImportError:  # pragma: no cover
    Picamera2 = None  # type: ignore

try:
    import cv2  # type: ignore
except ImportError:  # pragma: no cover
    cv2 = None

from .logging_utils import log

PICAMERA_SOURCE = 'picamera'


def _init_picamera(cfg: GestureConfig):  # type: ignore
    if Picamera2 is None:
        log('Picamera2 not available.', 'error', cfg_level=cfg.log_level)
        return None
    cam = Picamera2()
    w, h = cfg.frame_size
    try:
        cam.configure(cam.create_video_configuration(main={'size': (w, h), 'format': 'YUV420'}))
        cam.start()
    except Exception as e:  # pragma: no cover
        log(f'Picamera2 start failed: {e}', 'error', cfg_level=cfg.log_level)
        return None
    try:
        frame_duration_us = int(1_000_000 / cfg.target_fps)
        cam.set_controls({'FrameDurationLimits': (frame_duration_us, frame_duration_us)})
    except Exception as e:
        log(f'Setting FrameDurationLimits failed (continuing): {e}', 'warn', cfg_level=cfg.log_level)
    time.sleep(0.2)
    return cam


def init_camera(cfg: GestureConfig, source: Union[int, str] = 0) -> Optional[Any]:
    """Open a frame source: a device index, a video file path, or 'picamera'."""
    if source == PICAMERA_SOURCE:
        return _init_picamera(cfg)
    if cv2 is None:
        log('OpenCV not available; cannot open capture source.', 'error', cfg_level=cfg.log_level)
        return None
    cap = cv2.VideoCapture(source)
    if not cap.isOpened():
        log(f'Could not open capture source {source!r}', 'error', cfg_level=cfg.log_level)
        return None
    if isinstance(source, int):
        w, h = cfg.frame_size
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
        cap.set(cv2.CAP_PROP_FPS, cfg.target_fps)
    return cap


def capture_frame(cam: Any) -> Optional[np.ndarray]:
    """Next grayscale frame, or None at end of stream."""
    if cam is None:
        raise RuntimeError('Camera not initialized (or running in synthetic mode).')
    if Picamera2 is not None and isinstance(cam, Picamera2):
        arr = cam.capture_array('main')
        h = arr.shape[0] * 2 // 3
        return np.ascontiguousarray(arr[:h])  # Y plane of YUV420
    ok, frame = cam.read()
    if not ok or frame is None:
        return None
    if frame.ndim == 3:
        return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    return frame


def release_camera(cam: Any) -> None:
    if cam is None:
        return
    if Picamera2 is not None and isinstance(cam, Picamera2):
        cam.stop()
    else:
        cam.release()
