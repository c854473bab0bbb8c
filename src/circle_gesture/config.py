from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
try:
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

@dataclass
class GestureConfig:
    downsample: int = 4
    motion_thresh: int = 18
    min_blob_px: int = 25
    path_buffer_size: int = 90  # ~3.6 s @ 25 fps
    min_fit_points: int = 16
    max_jump_frac: float = 0.20
    max_miss_frames: int = 10
    min_radius_frac: float = 0.07
    max_radius_frac: float = 0.60
    max_residual_ratio: float = 0.32
    min_arc_degrees: float = 260.0
    confirm_streak: int = 3
    hold_seconds: float = 2.0
    frame_size: Tuple[int, int] = (640, 480)
    target_fps: int = 25
    log_level: str = 'info'


def validate_config(cfg: GestureConfig) -> GestureConfig:
    if cfg.downsample < 2:
        raise ValueError(f'downsample must be >= 2 (got {cfg.downsample})')
    if cfg.min_fit_points < 3:
        raise ValueError(f'min_fit_points must be >= 3 (got {cfg.min_fit_points})')
    if cfg.path_buffer_size < cfg.min_fit_points:
        raise ValueError(f'path_buffer_size ({cfg.path_buffer_size}) is smaller than min_fit_points ({cfg.min_fit_points})')
    return cfg

def load_config(path: str) -> GestureConfig:
    if yaml is None:
        raise RuntimeError("Missing dependency 'pyyaml'. Install with: pip install pyyaml")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        data = {}
    d = GestureConfig()
    return validate_config(GestureConfig(
        downsample=int(data.get('downsample', d.downsample)),
        motion_thresh=int(data.get('motion_thresh', d.motion_thresh)),
        min_blob_px=int(data.get('min_blob_px', d.min_blob_px)),
        path_buffer_size=int(data.get('path_buffer_size', d.path_buffer_size)),
        min_fit_points=int(data.get('min_fit_points', d.min_fit_points)),
        max_jump_frac=float(data.get('max_jump_frac', d.max_jump_frac)),
        max_miss_frames=int(data.get('max_miss_frames', d.max_miss_frames)),
        min_radius_frac=float(data.get('min_radius_frac', d.min_radius_frac)),
        max_radius_frac=float(data.get('max_radius_frac', d.max_radius_frac)),
        max_residual_ratio=float(data.get('max_residual_ratio', d.max_residual_ratio)),
        min_arc_degrees=float(data.get('min_arc_degrees', d.min_arc_degrees)),
        confirm_streak=int(data.get('confirm_streak', d.confirm_streak)),
        hold_seconds=float(data.get('hold_seconds', d.hold_seconds)),
        frame_size=tuple(data.get('frame_size', list(d.frame_size))),
        target_fps=int(data.get('target_fps', d.target_fps)),
        log_level=str(data.get('log_level', d.log_level)),
    ))

def save_config(cfg: GestureConfig, path: str):
    if yaml is None:
        raise RuntimeError("Missing dependency 'pyyaml'. Install with: pip install pyyaml")
    data = {
        'downsample': cfg.downsample,
        'motion_thresh': cfg.motion_thresh,
        'min_blob_px': cfg.min_blob_px,
        'path_buffer_size': cfg.path_buffer_size,
        'min_fit_points': cfg.min_fit_points,
        'max_jump_frac': cfg.max_jump_frac,
        'max_miss_frames': cfg.max_miss_frames,
        'min_radius_frac': cfg.min_radius_frac,
        'max_radius_frac': cfg.max_radius_frac,
        'max_residual_ratio': cfg.max_residual_ratio,
        'min_arc_degrees': cfg.min_arc_degrees,
        'confirm_streak': cfg.confirm_streak,
        'hold_seconds': cfg.hold_seconds,
        'frame_size': list(cfg.frame_size),
        'target_fps': cfg.target_fps,
        'log_level': cfg.log_level,
    }
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, sort_keys=False)
