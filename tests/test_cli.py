import re
import struct

import numpy as np
import pytest

from mnistnet.cli import calculate_accuracy, main
from mnistnet.dataset import IMAGE_SIZE, MnistDataset
from mnistnet.network import NeuralNetwork

LINE = re.compile(r"^Step \d{4}\tAverage Loss: \d+\.\d{2}\tAccuracy: [01]\.\d{3}$")


def _write_pair(directory, prefix_images, prefix_labels, labels):
    rng = np.random.default_rng(len(labels))
    images = rng.integers(0, 256, size=(len(labels), IMAGE_SIZE), dtype=np.uint8)
    (directory / prefix_images).write_bytes(
        struct.pack(">IIII", 0x803, len(labels), 28, 28) + images.tobytes()
    )
    (directory / prefix_labels).write_bytes(
        struct.pack(">II", 0x801, len(labels)) + bytes(labels)
    )


@pytest.fixture
def data_dir(tmp_path):
    _write_pair(tmp_path, "train-images-idx3-ubyte", "train-labels-idx1-ubyte", [0, 1, 2, 3, 4])
    _write_pair(tmp_path, "t10k-images-idx3-ubyte", "t10k-labels-idx1-ubyte", [5, 6, 7])
    return tmp_path


def _dataset(labels):
    return MnistDataset(np.zeros((len(labels), IMAGE_SIZE), dtype=np.uint8), labels)


def test_accuracy_ties_pick_first_label():
    assert calculate_accuracy(_dataset([0, 1]), NeuralNetwork()) == pytest.approx(0.5)


def test_accuracy_follows_strongest_bias():
    network = NeuralNetwork()
    network.b[7] = 10.0
    assert calculate_accuracy(_dataset([7, 7, 2, 7]), network) == pytest.approx(0.75)
    assert calculate_accuracy(_dataset([7, 7]), network) == pytest.approx(1.0)


def test_accuracy_empty_dataset_raises():
    with pytest.raises(ValueError):
        calculate_accuracy(_dataset([]), NeuralNetwork())


def test_main_prints_one_line_per_step(data_dir, capsys):
    code = main(["--data-dir", str(data_dir), "--steps", "3", "--batch-size", "2", "--seed", "1"])
    lines = capsys.readouterr().out.splitlines()
    assert code == 0
    assert len(lines) == 3
    assert all(LINE.match(line) for line in lines)
    assert [line.split("\t")[0] for line in lines] == ["Step 0000", "Step 0001", "Step 0002"]


def test_main_is_reproducible_with_seed(data_dir, capsys):
    args = ["--data-dir", str(data_dir), "--steps", "2", "--batch-size", "2", "--seed", "4"]
    main(args)
    first = capsys.readouterr().out
    main(args)
    assert capsys.readouterr().out == first


def test_main_missing_data(tmp_path, capsys):
    assert main(["--data-dir", str(tmp_path), "--steps", "1"]) == 1
    assert capsys.readouterr().err


def test_main_batch_larger_than_training_set(data_dir, capsys):
    assert main(["--data-dir", str(data_dir), "--steps", "1", "--batch-size", "10"]) == 1
    assert "smaller than one batch" in capsys.readouterr().err