"""Command that trains the classifier on MNIST and reports progress."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from .dataset import MnistDataset, MnistFormatError, load_dataset
from .network import NeuralNetwork

TRAIN_IMAGES_FILE = "train-images-idx3-ubyte"
TRAIN_LABELS_FILE = "train-labels-idx1-ubyte"
TEST_IMAGES_FILE = "t10k-images-idx3-ubyte"
TEST_LABELS_FILE = "t10k-labels-idx1-ubyte"

STEPS = 1000
BATCH_SIZE = 100
LEARNING_RATE = 0.5


def calculate_accuracy(dataset: MnistDataset, network: NeuralNetwork) -> float:
    """Fraction of the dataset whose label is the network's strongest activation."""
    if len(dataset) == 0:
        raise ValueError("Cannot measure accuracy on an empty dataset")
    pixels = dataset.images.astype(np.float32) / np.float32(255.0)
    # softmax preserves ordering, so the raw scores pick the same label
    scores = pixels @ network.W.T + network.b
    predictions = scores.argmax(axis=1)
    correct = int(np.count_nonzero(predictions == dataset.labels))
    return correct / len(dataset)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mnistnet", description="Train a softmax classifier on MNIST."
    )
    parser.add_argument("--data-dir", type=Path, default=Path("data"))
    parser.add_argument("--steps", type=int, default=STEPS)
    parser.add_argument("--batch-size", type=int, default=BATCH_SIZE)
    parser.add_argument("--learning-rate", type=float, default=LEARNING_RATE)
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.batch_size <= 0:
        print("Batch size must be positive", file=sys.stderr)
        return 1

    try:
        train = load_dataset(
            args.data_dir / TRAIN_IMAGES_FILE, args.data_dir / TRAIN_LABELS_FILE
        )
        test = load_dataset(
            args.data_dir / TEST_IMAGES_FILE, args.data_dir / TEST_LABELS_FILE
        )
    except (OSError, MnistFormatError) as error:
        print(error, file=sys.stderr)
        return 1

    batches = len(train) // args.batch_size
    if batches == 0:
        print(
            f"Training set of {len(train)} images is smaller than one batch "
            f"of {args.batch_size}",
            file=sys.stderr,
        )
        return 1
    if len(test) == 0:
        print("Test set is empty", file=sys.stderr)
        return 1

    network = NeuralNetwork()
    network.random_weights(np.random.default_rng(args.seed))

    for step in range(args.steps):
        batch = train.batch(args.batch_size, step % batches)
        loss = network.training_step(batch, args.learning_rate)
        accuracy = calculate_accuracy(test, network)
        print(
            f"Step {step:04d}\tAverage Loss: {loss / len(batch):.2f}"
            f"\tAccuracy: {accuracy:.3f}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())