import logging
import os

import torch

logger = logging.getLogger(__name__)


def format_matrix(matrix, precision: int = 4) -> str:
    """
    Renders a 2D matrix as comma separated rows.

    Values use `%.{precision}g` formatting. There is no header and no
    newline after the last row.
    """
    matrix = torch.as_tensor(matrix)
    if matrix.dim() != 2:
        raise ValueError(f"Only 2D matrices can be exported. Got shape {tuple(matrix.shape)}")
    fmt = f"%.{precision}g"
    return "\n".join(
        ",".join(fmt % value for value in row)
        for row in matrix.tolist()
    )


def save_2d_data(path, matrix, precision: int = 4) -> str:
    """Writes `matrix` to `path`, overwriting any existing file."""
    path = os.fspath(path)
    with open(path, "w") as fp:
        fp.write(format_matrix(matrix, precision))
    logger.debug(f"Saved matrix of shape {tuple(torch.as_tensor(matrix).shape)} to {path}")
    return path
