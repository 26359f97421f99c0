"""
Kohonen Tracer - A PyTorch-based one-dimensional Self-Organizing Map that traces the shape of a point cloud.
"""
from .som import (
    ChainSOM,
    annealing_schedule,
    evaluate_distances,
    locate_bmu,
    mean_nearest_sample_distance,
    quantization_error,
    train,
    update_neighborhood,
)
from .config import TracerConfig
from .export import save_2d_data

__version__ = "0.1.0"

__all__ = [
    "ChainSOM",
    "TracerConfig",
    "annealing_schedule",
    "evaluate_distances",
    "locate_bmu",
    "mean_nearest_sample_distance",
    "quantization_error",
    "save_2d_data",
    "train",
    "update_neighborhood",
]
