"""Single-layer softmax classifier for MNIST: IDX file reading, training and a command."""

__version__ = "0.1.0"
__all__ = ["cli", "dataset", "network"]