from .config import GestureConfig, load_config, save_config
from .models import Blob, FitResult, LumaFrame, PathAccumulator
from .processing import FrameUnreadable, downsample_luma, largest_motion_blob, motion_mask
from .fitting import evaluate_path, fit_circle, solve_3x3, unwrapped_sweep_degrees
from .detector import CircleGestureDetector
from .confirm import ConfirmationState, GestureConfirmer
from .cli import main

__all__ = [
    'GestureConfig','load_config','save_config','Blob','FitResult','LumaFrame','PathAccumulator',
    'FrameUnreadable','downsample_luma','largest_motion_blob','motion_mask','evaluate_path','fit_circle',
    'solve_3x3','unwrapped_sweep_degrees','CircleGestureDetector','ConfirmationState','GestureConfirmer','main'
]
