import logging

import torch

from .shapes import random_weights

logger = logging.getLogger(__name__)

# Alpha is stepped in integer hundredths: 1.00, 0.99, ...
ALPHA_STEPS = 100
RADIUS_DECAY_PERIOD = 10


def _check_weights(weights: torch.Tensor):
    if not isinstance(weights, torch.Tensor) or not weights.is_floating_point():
        raise TypeError("Weights must be a floating point torch.Tensor so they can be updated in place.")
    if weights.dim() != 2 or weights.shape[0] < 1:
        raise ValueError(f"Weights must be 2D with at least one node. Got shape {tuple(weights.shape)}")


def _as_sample(x, weights: torch.Tensor) -> torch.Tensor:
    x = torch.as_tensor(x, dtype=weights.dtype, device=weights.device)
    if x.dim() != 1 or x.shape[0] != weights.shape[1]:
        raise ValueError(f"Sample must be 1D with {weights.shape[1]} features. Got shape {tuple(x.shape)}")
    return x


def evaluate_distances(x, weights: torch.Tensor) -> torch.Tensor:
    """
    Squared Euclidean distance from one sample to every node.

    The square root is skipped, only the ordering of the distances is used.

    Args:
        x: Sample of shape (num_features,).
        weights (torch.Tensor): Node weights of shape (num_out, num_features).

    Returns:
        torch.Tensor: Distances of shape (num_out,).
    """
    _check_weights(weights)
    x = _as_sample(x, weights)
    return torch.sum((weights - x) ** 2, dim=1)


def locate_bmu(distances) -> tuple[int, float]:
    """Index and value of the smallest distance. Ties go to the lowest index."""
    distances = torch.as_tensor(distances)
    if distances.dim() != 1 or distances.numel() == 0:
        raise ValueError(f"Distances must be a non-empty 1D vector. Got shape {tuple(distances.shape)}")
    # argmin returns the first occurrence of the minimum
    idx = int(torch.argmin(distances))
    return idx, float(distances[idx])


def update_neighborhood(x, weights: torch.Tensor, bmu: int, radius: int, alpha: float):
    """
    Pulls the BMU and the nodes within `radius` of it (in index space)
    towards the sample. Nodes outside the window are left untouched.

    Args:
        x: Sample of shape (num_features,).
        weights (torch.Tensor): Node weights, updated in place.
        bmu (int): Index of the best matching unit.
        radius (int): Number of nodes on each side of the BMU to update.
        alpha (float): Learning rate, 0 < alpha <= 1.
    """
    _check_weights(weights)
    x = _as_sample(x, weights)
    num_out = weights.shape[0]
    if not 0 <= bmu < num_out:
        raise ValueError(f"BMU index {bmu} is out of range for {num_out} nodes")
    if radius < 0:
        raise ValueError(f"Neighborhood radius must be non-negative. Got {radius}")
    if not 0.0 < alpha <= 1.0:
        raise ValueError(f"Learning rate must be in (0, 1]. Got {alpha}")

    from_node = max(0, bmu - radius)
    to_node = min(num_out, bmu + radius + 1)
    window = weights[from_node:to_node]
    window += alpha * (x - window)


def _check_alpha_min(alpha_min: float):
    if not 0.0 < alpha_min < 1.0:
        raise ValueError(f"alpha_min must be in (0, 1). Got {alpha_min}")


def annealing_schedule(num_out: int, alpha_min: float):
    """
    Yields (iteration, alpha, radius) for every outer training pass.

    Alpha starts at 1.0 and drops by 0.01 per pass while it stays above
    `alpha_min`. The radius starts at num_out // 4 and shrinks by one after
    every 10th pass (counting from pass 0) as long as it is above 1.
    """
    if num_out < 1:
        raise ValueError(f"A chain needs at least one node. Got {num_out}")
    _check_alpha_min(alpha_min)

    radius = num_out >> 2
    iteration = 0
    alpha = 1.0
    while alpha > alpha_min:
        yield iteration, alpha, radius
        if iteration % RADIUS_DECAY_PERIOD == 0 and radius > 1:
            radius -= 1
        iteration += 1
        alpha = (ALPHA_STEPS - iteration) / ALPHA_STEPS


def _check_training_inputs(data, weights: torch.Tensor, alpha_min: float) -> torch.Tensor:
    _check_weights(weights)
    data = torch.as_tensor(data, dtype=weights.dtype, device=weights.device)
    num_features = weights.shape[1]
    if data.dim() != 2 or data.shape[1] != num_features:
        raise ValueError(f"Input data must be 2D with {num_features} features. Got shape {tuple(data.shape)}")
    _check_alpha_min(alpha_min)
    return data


def train(data, weights: torch.Tensor, alpha_min: float):
    """
    Runs the full annealing schedule over `data`, updating `weights` in place.

    Every pass visits the samples in their given order; each sample sees the
    weights already moved by the samples before it.

    Args:
        data: Samples of shape (num_samples, num_features).
        weights (torch.Tensor): Node weights of shape (num_out, num_features).
        alpha_min (float): Training stops once alpha is no longer above this.
    """
    data = _check_training_inputs(data, weights, alpha_min)
    num_out = weights.shape[0]
    logger.info(f"Training chain of {num_out} nodes on {data.shape[0]} samples, alpha_min={alpha_min}")

    passes = 0
    with torch.no_grad():
        for iteration, alpha, radius in annealing_schedule(num_out, alpha_min):
            for x in data:
                distances = evaluate_distances(x, weights)
                bmu, _ = locate_bmu(distances)
                update_neighborhood(x, weights, bmu, radius, alpha)
            logger.debug(f"Pass {iteration}: alpha={alpha:.2f}, radius={radius}")
            passes += 1

    logger.info(f"Training finished after {passes} passes")


def nearest_sample_distances(weights: torch.Tensor, data) -> torch.Tensor:
    """Euclidean distance from each node to its closest sample."""
    data = torch.as_tensor(data, dtype=weights.dtype, device=weights.device)
    # Explicit differences, not the matmul expansion cdist uses for large inputs
    squared = torch.sum((weights[:, None, :] - data[None, :, :]) ** 2, dim=2)
    return torch.sqrt(squared.min(dim=1).values)


def mean_nearest_sample_distance(weights: torch.Tensor, data) -> float:
    return nearest_sample_distances(weights, data).mean().item()


def bmu_indices(data, weights: torch.Tensor) -> torch.Tensor:
    """BMU index of every sample, found the same way training finds it."""
    data = torch.as_tensor(data, dtype=weights.dtype, device=weights.device)
    indices = [locate_bmu(evaluate_distances(x, weights))[0] for x in data]
    return torch.tensor(indices, dtype=torch.long, device=weights.device)


def quantization_error(data, weights: torch.Tensor) -> float:
    """
    Mean Euclidean distance between each sample and its BMU.
    """
    data = torch.as_tensor(data, dtype=weights.dtype, device=weights.device)
    bmu_weights = weights[bmu_indices(data, weights)]
    return torch.linalg.norm(data - bmu_weights, dim=1).mean().item()


class ChainSOM:
    """
    A one-dimensional Self-Organizing Map: an ordered chain of nodes whose
    weights are fitted to an unlabeled point cloud.

    Neighboring indices are neighbors on the map, so after training the chain
    traces the shape of the data.
    """
    def __init__(self,
                 num_nodes: int,
                 input_dim: int,
                 init_range: tuple[float, float] = (-1.0, 1.0),
                 device: str | torch.device = 'cpu',
                 random_seed: int | None = None
                ):
        """
        Initializes the chain with weights drawn uniformly from `init_range`.

        Args:
            num_nodes (int): Number of nodes in the chain.
            input_dim (int): Dimensionality of the input data.
            init_range (tuple[float, float]): Interval for the initial weights.
            device (str | torch.device): Device holding the weights.
            random_seed (int | None): Seed for the weight initialization.
        """
        if num_nodes < 1:
            raise ValueError(f"A chain needs at least one node. Got {num_nodes}")
        if input_dim < 1:
            raise ValueError(f"Input dimension must be positive. Got {input_dim}")

        self.num_nodes = num_nodes
        self.input_dim = input_dim
        self.device = torch.device(device)

        generator = torch.Generator()
        if random_seed is not None:
            generator.manual_seed(random_seed)
        else:
            generator.seed()

        low, high = init_range
        self.weights = random_weights(num_nodes, input_dim, low, high, generator).to(self.device)

    def _prepare(self, data) -> torch.Tensor:
        data = torch.as_tensor(data, dtype=self.weights.dtype, device=self.device)
        if data.dim() != 2 or data.shape[1] != self.input_dim:
            raise ValueError(f"Input data must be 2D with {self.input_dim} features. Got shape {tuple(data.shape)}")
        return data

    def train(self, data, alpha_min: float = 0.1):
        """Runs the annealing schedule on `data` until alpha reaches `alpha_min`."""
        train(self._prepare(data), self.weights, alpha_min)

    def get_weights(self) -> torch.Tensor:
        """Returns a copy of the current chain weights."""
        return self.weights.clone().detach()

    def map_to_bmu_indices(self, data) -> torch.Tensor:
        """
        Maps input data points to the index of their Best Matching Unit.

        Args:
            data: Input data of shape (num_samples, input_dim).

        Returns:
            torch.Tensor: A 1D tensor of node indices, one per sample.
        """
        return bmu_indices(self._prepare(data), self.weights)

    def quantization_error(self, data) -> float:
        return quantization_error(self._prepare(data), self.weights)

    def __repr__(self) -> str:
        return f"ChainSOM(num_nodes={self.num_nodes}, input_dim={self.input_dim}, device='{self.device.type}')"
