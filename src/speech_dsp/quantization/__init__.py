"""
Vector quantization of speech feature vectors.
"""

from .kmeans import VectorQuantizer, train_codebook, quantize, as_feature_matrix

__all__ = [
    'VectorQuantizer',
    'train_codebook',
    'quantize',
    'as_feature_matrix',
]
