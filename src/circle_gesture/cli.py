from __future__ import annotations
import argparse
import signal
import threading
import time
from typing import Iterator, Optional

import numpy as np

from .camera import capture_frame, init_camera, release_camera
from .config import load_config
from .confirm import GestureConfirmer
from .detector import CircleGestureDetector
from .logging_utils import log
from .models import LumaFrame
from .synthetic import circle_trace_frames


def parse_args(argv=None):
    p = argparse.ArgumentParser(description='Circle Gesture Detector')
    p.add_argument('--config', default='config.yaml')
    p.add_argument('--source', default='0', help="Camera index, video file path, or 'picamera'")
    p.add_argument('--synthetic', action='store_true', help='Feed generated frames of a dot tracing a circle')
    p.add_argument('--run-frames', type=int, default=None, help='Stop after this many frames')
    p.add_argument('--report-every', type=int, default=25, help='Log diagnostics every N frames (0 = never)')
    p.add_argument('--exit-on-gesture', action='store_true', help='Stop at the first confirmed gesture')
    p.add_argument('--require-camera', action='store_true', help='Fail instead of falling back to synthetic when camera unavailable')
    p.add_argument('--log-level', choices=['debug', 'info', 'warn', 'error'], help='Override config log_level')
    return p.parse_args(argv)


def parse_source(source: str):
    return int(source) if source.isdigit() else source


def synthetic_stream(cfg) -> Iterator[np.ndarray]:
    w, h = cfg.frame_size
    return circle_trace_frames(w, h, revolutions=None)


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)
    if getattr(args, 'log_level', None):
        cfg.log_level = args.log_level

    cam = None if args.synthetic else init_camera(cfg, parse_source(args.source))
    if cam is None and not args.synthetic:
        if args.require_camera:
            log('Camera required but not available. Exiting.', 'error', cfg_level=cfg.log_level)
            return 2
        log('Camera unavailable; switching to synthetic mode (pass --synthetic or remove --require-camera).', 'warn', cfg_level=cfg.log_level)
        args.synthetic = True

    frames: Optional[Iterator[np.ndarray]] = None
    if args.synthetic:
        frames = synthetic_stream(cfg)
        if args.run_frames is None:
            args.run_frames = 150

    detector = CircleGestureDetector(cfg)
    confirmer = GestureConfirmer(cfg.confirm_streak, cfg.hold_seconds)

    stop_flag = threading.Event()

    def handle_sigint(sig, frame):  # type: ignore
        stop_flag.set()
    prev_handler = None
    if threading.current_thread() is threading.main_thread():
        prev_handler = signal.signal(signal.SIGINT, handle_sigint)

    log('Starting detection loop', cfg_level=cfg.log_level)
    frame_interval = 1.0 / cfg.target_fps
    t_start = time.perf_counter()
    frame_count = 0
    gestures = 0
    try:
        while not stop_flag.is_set():
            if args.run_frames is not None and frame_count >= args.run_frames:
                break
            if frames is not None:
                gray = next(frames, None)
                ts = frame_count * frame_interval
            else:
                gray = capture_frame(cam)
                ts = time.time()
            if gray is None:
                log('End of stream', cfg_level=cfg.log_level)
                break

            detected = detector.process_frame(LumaFrame.from_gray(gray))
            state = confirmer.update(detected, ts)

            if args.report_every and frame_count % args.report_every == 0:
                cx, cy = detector.center
                log(f'frame={frame_count} path={detector.path_length} center=({cx:.3f},{cy:.3f}) '
                    f'r={detector.radius:.3f} arc={detector.arc_degrees:.0f} res={detector.residual_ratio:.3f} '
                    f'streak={state.streak} hold={state.progress:.0%}', 'debug', cfg_level=cfg.log_level)

            if state.fired:
                gestures += 1
                log(f'Circle gesture confirmed at frame {frame_count} (r={detector.radius:.3f}, '
                    f'arc={detector.arc_degrees:.0f} deg)', cfg_level=cfg.log_level)
                if args.exit_on_gesture:
                    frame_count += 1
                    break
                detector.reset()
                confirmer.reset()
            frame_count += 1
    finally:
        release_camera(cam)
        if prev_handler is not None:
            signal.signal(signal.SIGINT, prev_handler)

    elapsed = max(time.perf_counter() - t_start, 1e-9)
    if frame_count > 0:
        log(f'Processed {frame_count} frames ({frame_count / elapsed:.1f} fps), gestures={gestures}', cfg_level=cfg.log_level)
    return 0


if __name__ == '__main__':  # pragma: no cover
    raise SystemExit(main())
