"""A single-layer softmax classifier trained by gradient descent."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .dataset import IMAGE_SIZE, LABELS, MnistDataset


def _scale_pixels(image) -> np.ndarray:
    pixels = np.asarray(image, dtype=np.float32).reshape(-1)
    if pixels.shape != (IMAGE_SIZE,):
        raise ValueError(f"An image must hold {IMAGE_SIZE} pixels, not {pixels.size}")
    return pixels / np.float32(255.0)


def softmax(activations) -> np.ndarray:
    """Numerically stable softmax of a vector of activations."""
    values = np.asarray(activations, dtype=np.float64)
    if values.size == 0:
        raise ValueError("softmax needs at least one activation")
    exps = np.exp(values - values.max())
    return exps / exps.sum()


@dataclass
class Gradient:
    """Accumulated gradients for the bias vector and weight matrix."""

    b_grad: np.ndarray = field(default_factory=lambda: np.zeros(LABELS, dtype=np.float32))
    W_grad: np.ndarray = field(
        default_factory=lambda: np.zeros((LABELS, IMAGE_SIZE), dtype=np.float32)
    )


@dataclass
class NeuralNetwork:
    """Weights ``W`` and biases ``b`` mapping image pixels to label scores."""

    b: np.ndarray = field(default_factory=lambda: np.zeros(LABELS, dtype=np.float32))
    W: np.ndarray = field(
        default_factory=lambda: np.zeros((LABELS, IMAGE_SIZE), dtype=np.float32)
    )

    def random_weights(self, rng: Optional[np.random.Generator] = None) -> None:
        """Fill weights and biases with uniform random values in [0, 1)."""
        rng = np.random.default_rng() if rng is None else rng
        self.b = rng.random(LABELS).astype(np.float32)
        self.W = rng.random((LABELS, IMAGE_SIZE)).astype(np.float32)

    def hypothesis(self, image) -> np.ndarray:
        """Forward-propagate an image and return the softmax activations."""
        pixels = _scale_pixels(image)
        return softmax(self.W @ pixels + self.b)

    def gradient_update(self, image, label: int, gradient: Gradient) -> float:
        """Add one example's contribution to ``gradient``; return its cross-entropy loss."""
        label = int(label)
        if not 0 <= label < LABELS:
            raise ValueError(f"Label must be between 0 and {LABELS - 1}, not {label}")
        pixels = _scale_pixels(image)
        activations = softmax(self.W @ pixels + self.b)
        b_grad = activations.astype(np.float32)
        b_grad[label] -= 1.0
        gradient.W_grad += np.outer(b_grad, pixels)
        gradient.b_grad += b_grad
        return -math.log(activations[label])

    def training_step(self, dataset: MnistDataset, learning_rate: float) -> float:
        """Run one step of gradient descent over ``dataset``; return the total loss."""
        size = len(dataset)
        if size == 0:
            raise ValueError("Cannot train on an empty dataset")
        gradient = Gradient()
        total_loss = sum(
            self.gradient_update(image, label, gradient)
            for image, label in zip(dataset.images, dataset.labels)
        )
        step = np.float32(learning_rate) / np.float32(size)
        self.b = self.b - step * gradient.b_grad
        self.W = self.W - step * gradient.W_grad
        return float(total_loss)