from __future__ import annotations
from typing import List, Optional
import numpy as np
from .models import Blob, LumaFrame

try:
    import cv2  # type: ignore
except ImportError:  # pragma: no cover
    cv2 = None


class FrameUnreadable(ValueError):
    """The luma plane of a frame cannot be read with the given layout."""


def downsample_luma(frame: LumaFrame, ds: int) -> np.ndarray:
    """Nearest-pixel subsample: every ``ds``-th row and column, no averaging.

    Offsets that fall past the end of the buffer read as 0.
    """
    w, h = frame.width // ds, frame.height // ds
    if w <= 0 or h <= 0:
        raise FrameUnreadable(f'frame {frame.width}x{frame.height} smaller than downsample factor {ds}')
    if frame.row_stride <= 0 or frame.pixel_stride <= 0:
        raise FrameUnreadable(f'invalid strides row={frame.row_stride} pixel={frame.pixel_stride}')
    if isinstance(frame.data, np.ndarray):
        if frame.data.dtype != np.uint8:
            raise FrameUnreadable(f'expected uint8 luma plane, got {frame.data.dtype}')
        buf = frame.data.reshape(-1)
    else:
        try:
            buf = np.frombuffer(frame.data, dtype=np.uint8)
        except (TypeError, ValueError) as e:
            raise FrameUnreadable(f'cannot read luma plane: {e}') from e
    offs = (np.arange(h, dtype=np.int64) * ds * frame.row_stride)[:, None] \
        + (np.arange(w, dtype=np.int64) * ds * frame.pixel_stride)[None, :]
    out = np.zeros((h, w), dtype=np.uint8)
    valid = offs < buf.size
    out[valid] = buf[offs[valid]]
    return out


def motion_mask(prev: np.ndarray, curr: np.ndarray, thresh: int) -> np.ndarray:
    if prev.shape != curr.shape:
        raise ValueError(f'buffer shapes differ: {prev.shape} vs {curr.shape}')
    diff = cv2.absdiff(curr, prev) if cv2 is not None else np.abs(curr.astype(np.int16) - prev.astype(np.int16)).astype(np.uint8)
    return diff >= thresh


def largest_motion_blob(prev: np.ndarray, curr: np.ndarray, thresh: int, min_blob_px: int) -> Optional[Blob]:
    """Centroid of the largest 4-connected region of the frame-difference mask.

    Averaging every moving pixel lets background sway and face movement drag
    the centroid off the fingertip; only the biggest coherent blob is kept.
    Flood fill uses an explicit stack. Ties go to the blob found first in
    row-major order.
    """
    mask = motion_mask(prev, curr, thresh)
    h, w = mask.shape
    flat = mask.reshape(-1).tolist()
    visited = [False] * (w * h)
    best_size = 0
    best_sx = best_sy = 0
    for start in np.flatnonzero(mask).tolist():
        if visited[start]:
            continue
        visited[start] = True
        stack: List[int] = [start]
        size = sx = sy = 0
        while stack:
            idx = stack.pop()
            py, px = divmod(idx, w)
            size += 1
            sx += px
            sy += py
            for nb in (idx - 1 if px > 0 else -1,
                       idx + 1 if px < w - 1 else -1,
                       idx - w if py > 0 else -1,
                       idx + w if py < h - 1 else -1):
                if nb >= 0 and flat[nb] and not visited[nb]:
                    visited[nb] = True
                    stack.append(nb)
        if size > best_size:
            best_size, best_sx, best_sy = size, sx, sy
    if best_size == 0 or best_size < min_blob_px:
        return None
    return Blob(best_size, best_sx / best_size, best_sy / best_size)
