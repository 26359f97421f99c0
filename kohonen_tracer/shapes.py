"""
Random point clouds for exercising the chain SOM, and the uniform weight
initializer.
"""
import math

import torch


def uniform(low: float, high: float, size, generator: torch.Generator | None = None) -> torch.Tensor:
    """Uniform float64 draws in [low, high)."""
    return low + (high - low) * torch.rand(size, generator=generator, dtype=torch.float64)


def random_weights(num_out: int,
                   num_features: int,
                   low: float = -1.0,
                   high: float = 1.0,
                   generator: torch.Generator | None = None) -> torch.Tensor:
    """Initial weight matrix of shape (num_out, num_features) drawn from [low, high)."""
    if num_out < 1 or num_features < 1:
        raise ValueError(f"Weight matrix needs positive dimensions. Got ({num_out}, {num_features})")
    if low >= high:
        raise ValueError(f"Empty initialization interval [{low}, {high})")
    return uniform(low, high, (num_out, num_features), generator)


def circle(num_points: int,
           radius: float = 0.75,
           spread: float = 0.3,
           generator: torch.Generator | None = None) -> torch.Tensor:
    """
    Points scattered around the circumference of a circle centred at the origin.

    Args:
        num_points (int): Number of points to generate.
        radius (float): Radius of the circle.
        spread (float): Each point's radius is drawn from [radius - spread, radius + spread).
        generator (torch.Generator | None): Source of randomness.

    Returns:
        torch.Tensor: Points of shape (num_points, 2).
    """
    r = uniform(radius - spread, radius + spread, num_points, generator)
    theta = uniform(0.0, 2.0 * math.pi, num_points, generator)
    return torch.stack([r * torch.cos(theta), r * torch.sin(theta)], dim=1)


def lemniscate(num_points: int,
               spread: float = 0.2,
               generator: torch.Generator | None = None) -> torch.Tensor:
    """
    Points scattered around the Lemniscate of Gerono, x = cos(t), y = sin(2t) / 2.

    Only t in [0, pi) is sampled, with independent noise in [-spread, spread)
    added to both coordinates.
    """
    dx = uniform(-spread, spread, num_points, generator)
    dy = uniform(-spread, spread, num_points, generator)
    theta = uniform(0.0, math.pi, num_points, generator)
    return torch.stack([dx + torch.cos(theta), dy + torch.sin(2.0 * theta) / 2.0], dim=1)
