"""Reading MNIST IDX files and slicing them into batches."""

from __future__ import annotations

import struct
import warnings
from dataclasses import dataclass
from os import PathLike
from typing import Union

import numpy as np

LABEL_MAGIC = 0x00000801
IMAGE_MAGIC = 0x00000803
IMAGE_WIDTH = 28
IMAGE_HEIGHT = 28
IMAGE_SIZE = IMAGE_WIDTH * IMAGE_HEIGHT
LABELS = 10

_LABEL_HEADER = struct.Struct(">II")
_IMAGE_HEADER = struct.Struct(">IIII")

PathType = Union[str, "PathLike[str]"]


class MnistFormatError(ValueError):
    """Raised when an MNIST file is malformed or inconsistent."""


@dataclass
class MnistDataset:
    """A set of flattened 28x28 images with one label per image."""

    images: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        self.images = np.asarray(self.images, dtype=np.uint8).reshape(-1, IMAGE_SIZE)
        self.labels = np.asarray(self.labels, dtype=np.uint8).reshape(-1)
        if len(self.images) != len(self.labels):
            raise ValueError(
                f"Number of images does not match number of labels "
                f"({len(self.images)} != {len(self.labels)})"
            )

    def __len__(self) -> int:
        return len(self.labels)

    def batch(self, size: int, number: int) -> "MnistDataset":
        """Return batch ``number`` of ``size`` examples; the last one may be shorter.

        The batch shares its data with this dataset.
        """
        if size <= 0:
            raise ValueError(f"Batch size must be positive, not {size}")
        start = size * number
        if start < 0 or start >= len(self):
            raise IndexError(f"Batch {number} of size {size} is outside the dataset")
        end = start + size
        return MnistDataset(self.images[start:end], self.labels[start:end])


def _read_exact(stream, count: int) -> bytes:
    data = stream.read(count)
    return data if len(data) == count else b""


def read_labels(path: PathType) -> np.ndarray:
    """Read the labels from an IDX1 label file."""
    with open(path, "rb") as stream:
        header = _read_exact(stream, _LABEL_HEADER.size)
        if not header:
            raise MnistFormatError(f"Could not read label file header from: {path}")
        magic, count = _LABEL_HEADER.unpack(header)
        if magic != LABEL_MAGIC:
            raise MnistFormatError(
                f"Invalid header read from label file: {path} "
                f"({magic:08X} not {LABEL_MAGIC:08X})"
            )
        data = stream.read(count)
    if len(data) != count:
        raise MnistFormatError(f"Could not read {count} labels from: {path}")
    return np.frombuffer(data, dtype=np.uint8)


def read_images(path: PathType) -> np.ndarray:
    """Read the images from an IDX3 image file as an ``(n, 784)`` array."""
    with open(path, "rb") as stream:
        header = _read_exact(stream, _IMAGE_HEADER.size)
        if not header:
            raise MnistFormatError(f"Could not read image file header from: {path}")
        magic, count, rows, columns = _IMAGE_HEADER.unpack(header)
        if magic != IMAGE_MAGIC:
            raise MnistFormatError(
                f"Invalid header read from image file: {path} "
                f"({magic:08X} not {IMAGE_MAGIC:08X})"
            )
        if rows != IMAGE_WIDTH:
            warnings.warn(
                f"Invalid number of image rows in image file {path} "
                f"({rows} not {IMAGE_WIDTH})",
                stacklevel=2,
            )
        if columns != IMAGE_HEIGHT:
            warnings.warn(
                f"Invalid number of image columns in image file {path} "
                f"({columns} not {IMAGE_HEIGHT})",
                stacklevel=2,
            )
        expected = count * IMAGE_SIZE
        data = stream.read(expected)
    if len(data) != expected:
        raise MnistFormatError(f"Could not read {count} images from: {path}")
    return np.frombuffer(data, dtype=np.uint8).reshape(count, IMAGE_SIZE)


def load_dataset(image_path: PathType, label_path: PathType) -> MnistDataset:
    """Load a matching pair of image and label files."""
    images = read_images(image_path)
    labels = read_labels(label_path)
    if len(images) != len(labels):
        raise MnistFormatError(
            f"Number of images does not match number of labels "
            f"({len(images)} != {len(labels)})"
        )
    return MnistDataset(images, labels)