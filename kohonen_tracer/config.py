from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class TracerConfig:
    """Settings for one chain SOM run on a generated point cloud."""
    num_samples: int = 500
    num_nodes: int = 50
    num_features: int = 2
    alpha_min: float = 0.1  # Training stops once alpha drops to this
    init_low: float = -1.0  # Interval for the initial weights
    init_high: float = 1.0
    random_seed: Optional[int] = None
    precision: int = 4  # Significant digits in the CSV dumps
    num_threads: Optional[int] = None  # torch intra-op threads, None keeps the default

    def validate(self):
        if self.num_samples < 1:
            raise ValueError(f"num_samples must be positive. Got {self.num_samples}")
        if self.num_nodes < 1:
            raise ValueError(f"num_nodes must be positive. Got {self.num_nodes}")
        if self.num_features < 1:
            raise ValueError(f"num_features must be positive. Got {self.num_features}")
        if not 0.0 < self.alpha_min < 1.0:
            raise ValueError(f"alpha_min must be in (0, 1). Got {self.alpha_min}")
        if self.init_low >= self.init_high:
            raise ValueError(f"Empty initialization interval [{self.init_low}, {self.init_high})")
        if self.num_threads is not None and self.num_threads < 1:
            raise ValueError(f"num_threads must be positive. Got {self.num_threads}")
        return self

    def with_seed(self, random_seed: Optional[int]) -> "TracerConfig":
        return replace(self, random_seed=random_seed)


CIRCLE_CASE = TracerConfig(num_samples=500, num_nodes=50, alpha_min=0.1)
LEMNISCATE_CASE = TracerConfig(num_samples=500, num_nodes=20, alpha_min=0.01)
