"""
K-means vector quantization implemented in PyTorch.

Learns a codebook from frame-level feature vectors (e.g. cepstra) and
maps vectors to the index of their nearest codeword.
"""

from typing import Optional, Sequence, Union

import numpy as np
import torch

from ..errors import DimensionMismatch, EmptyInput
from ..utils.logging import get_logger

logger = get_logger(__name__)

FeatureInput = Union[np.ndarray, torch.Tensor, Sequence[Sequence[float]]]


def as_feature_matrix(features: FeatureInput, what: str = "feature set") -> np.ndarray:
    """Convert features to a (N, D) float64 array, rejecting ragged or empty input."""
    if isinstance(features, torch.Tensor):
        features = features.detach().cpu().numpy()

    if not isinstance(features, np.ndarray):
        rows = list(features)
        if len(rows) == 0:
            raise EmptyInput(what)
        if np.ndim(rows[0]) == 0:
            # Flat list of scalars: a single vector, same as a 1-D array
            if any(np.ndim(v) != 0 for v in rows):
                raise ValueError(f"Mixed scalars and sequences in {what}")
            features = np.array(rows, dtype=np.float64)
        else:
            dim = len(rows[0])
            for row in rows[1:]:
                if np.ndim(row) != 1:
                    raise ValueError(f"Each row of {what} must be a 1-D sequence")
                if len(row) != dim:
                    raise DimensionMismatch(dim, len(row))
            features = np.array(rows, dtype=np.float64)

    X = np.asarray(features, dtype=np.float64)
    if X.ndim == 1:
        X = X[np.newaxis, :] if X.size else X.reshape(0, 0)
    if X.ndim != 2:
        raise ValueError(f"Features must be 2D (n_vectors, dim), got shape {X.shape}")
    if X.shape[0] == 0 or X.shape[1] == 0:
        raise EmptyInput(what)
    return X


def _squared_distances(X: torch.Tensor, centers: torch.Tensor) -> torch.Tensor:
    """Pairwise squared Euclidean distances, shape (n_samples, n_clusters)."""
    # One codeword at a time keeps the working set at (n_samples, n_clusters).
    # Explicit differences rather than cdist's matmul path, so equal
    # distances compare exactly equal
    distances = torch.empty((X.shape[0], centers.shape[0]), dtype=X.dtype, device=X.device)
    for k in range(centers.shape[0]):
        distances[:, k] = ((X - centers[k]) ** 2).sum(dim=1)
    return distances


class VectorQuantizer:
    """
    K-means codebook trainer and nearest-codeword quantizer.

    Codewords are initialised by drawing n_clusters feature vectors
    uniformly at random with replacement. Each iteration assigns every
    vector to its nearest codeword (squared Euclidean distance, ties to
    the lowest index) and moves every codeword to the mean of its
    vectors. Codewords with no vectors stay where they are. Training
    stops once no codeword moves more than tol.
    """

    def __init__(
        self,
        n_clusters: int = 256,
        max_iter: int = 100,
        tol: float = 1e-4,
        random_state: Optional[int] = None,
        generator: Optional[torch.Generator] = None,
        device: str = 'cpu'
    ):
        if n_clusters < 1:
            raise ValueError(f"n_clusters must be >= 1, got {n_clusters}")
        if max_iter < 0:
            raise ValueError(f"max_iter must be >= 0, got {max_iter}")

        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.random_state = random_state
        self.generator = generator
        self.device = device

        self.cluster_centers_: Optional[torch.Tensor] = None
        self.n_iter_ = 0

    def _make_generator(self) -> Optional[torch.Generator]:
        if self.generator is not None:
            return self.generator
        if self.random_state is None:
            # Ambient torch RNG
            return None
        g = torch.Generator(device='cpu')
        g.manual_seed(self.random_state)
        return g

    def fit(self, features: FeatureInput) -> 'VectorQuantizer':
        """
        Train the codebook.

        Args:
            features: Feature vectors of shape (n_samples, n_features)

        Returns:
            self
        """
        X = torch.from_numpy(as_feature_matrix(features)).to(self.device)
        n_samples = X.shape[0]

        g = self._make_generator()
        init_idx = torch.randint(n_samples, (self.n_clusters,), generator=g)
        centers = X[init_idx.to(self.device)].clone()

        self.n_iter_ = 0
        for iteration in range(self.max_iter):
            assignments = torch.argmin(_squared_distances(X, centers), dim=1)

            counts = torch.bincount(assignments, minlength=self.n_clusters)
            sums = torch.zeros_like(centers).index_add_(0, assignments, X)

            occupied = counts > 0
            new_centers = centers.clone()
            new_centers[occupied] = sums[occupied] / counts[occupied].unsqueeze(1).to(X.dtype)

            shift = torch.linalg.norm(new_centers - centers, dim=1)
            centers = new_centers
            self.n_iter_ = iteration + 1

            logger.debug(
                f"k-means iter {self.n_iter_}: max shift {shift.max().item():.3e}, "
                f"empty clusters {int((~occupied).sum().item())}"
            )

            if bool((shift <= self.tol).all()):
                logger.debug(f"k-means converged after {self.n_iter_} iterations")
                break

        self.cluster_centers_ = centers
        return self

    def predict(self, features: FeatureInput) -> np.ndarray:
        """
        Nearest-codeword index for each feature vector.

        Returns:
            int64 array of shape (n_samples,)
        """
        if self.cluster_centers_ is None:
            raise RuntimeError("Model not fitted. Call fit() first.")
        return quantize(self.cluster_centers_, features)

    @property
    def codebook(self) -> np.ndarray:
        if self.cluster_centers_ is None:
            raise RuntimeError("Model not fitted. Call fit() first.")
        return self.cluster_centers_.detach().cpu().numpy().copy()


def train_codebook(
    features: FeatureInput,
    codebook_size: int = 256,
    max_iter: int = 100,
    tol: float = 1e-4,
    seed: Optional[int] = None,
    generator: Optional[torch.Generator] = None,
    device: str = 'cpu'
) -> np.ndarray:
    """
    Train a k-means codebook.

    Pass seed (or an explicit torch.Generator) for reproducible results;
    without either, initialization uses the global torch RNG.

    Returns:
        Codebook of shape (codebook_size, n_features)
    """
    vq = VectorQuantizer(
        n_clusters=codebook_size,
        max_iter=max_iter,
        tol=tol,
        random_state=seed,
        generator=generator,
        device=device
    )
    return vq.fit(features).codebook


def quantize(codebook: FeatureInput, features: FeatureInput) -> np.ndarray:
    """
    Index of the nearest codeword for every feature vector.

    Squared Euclidean distance; ties resolve to the lowest index.
    """
    C = as_feature_matrix(codebook, "codebook")
    X = as_feature_matrix(features)
    if X.shape[1] != C.shape[1]:
        raise DimensionMismatch(C.shape[1], X.shape[1])

    distances = _squared_distances(torch.from_numpy(X), torch.from_numpy(C))
    # argmin returns the first minimal index
    return torch.argmin(distances, dim=1).numpy().astype(np.int64)
