# mnistnet

A small handwritten-digit classifier for the MNIST dataset. It is a single
fully connected layer with 784 inputs and 10 outputs, followed by a softmax.
It is trained with mini-batch gradient descent on the cross-entropy loss.

The package reads the IDX files directly. Each file has a big-endian header
followed by raw bytes. Label files use magic number `0x00000801`. Image files
use `0x00000803` and hold 28×28 images.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Command line

By default the command looks for the four MNIST files in a `data/` directory
under the current working directory:

```
data/train-images-idx3-ubyte
data/train-labels-idx1-ubyte
data/t10k-images-idx3-ubyte
data/t10k-labels-idx1-ubyte
```

Then run:

```
mnistnet
```

`python -m mnistnet.cli` does the same thing.

The network starts from random weights and biases in the range [0, 1). It then
runs gradient descent over batches of the training set. The batches wrap
around when the training set is used up. After every step the whole test set
is classified and a line of this form is printed:

```
Step 0000	Average Loss: 2.31	Accuracy: 0.412
```

The loss shown is the total loss of the batch divided by the batch size.

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `--data-dir PATH` | `data` | directory that holds the four files |
| `--steps N` | `1000` | number of gradient-descent steps |
| `--batch-size N` | `100` | training images per step |
| `--learning-rate X` | `0.5` | learning rate |
| `--seed N` | none | seed for the random initial weights |

The command prints an error and exits with status 1 in these cases:

- a file cannot be opened or is malformed;
- the batch size is not positive;
- the training set is smaller than one batch;
- the test set is empty.

## Library use

```python
import numpy as np

from mnistnet.cli import calculate_accuracy
from mnistnet.dataset import load_dataset
from mnistnet.network import NeuralNetwork

train = load_dataset("data/train-images-idx3-ubyte", "data/train-labels-idx1-ubyte")
test = load_dataset("data/t10k-images-idx3-ubyte", "data/t10k-labels-idx1-ubyte")

network = NeuralNetwork()
network.random_weights(np.random.default_rng(0))

batches = len(train) // 100
for step in range(200):
    batch = train.batch(100, step % batches)
    loss = network.training_step(batch, 0.5)
    print(step, loss / len(batch), calculate_accuracy(test, network))
```

### `mnistnet.dataset`

- `read_images(path)` reads an image file and returns a `uint8` array of shape
  `(n, 784)`. If the header gives a row or column count other than 28, the
  function issues a warning but still reads the file.
- `read_labels(path)` reads a label file and returns a `uint8` array.
- `load_dataset(image_path, label_path)` reads both files into an
  `MnistDataset`.
- Errors: a truncated file, a wrong magic number, or an image file and label
  file with different counts raise `MnistFormatError`, a subclass of
  `ValueError`. A file that cannot be opened raises the usual `OSError`.
- `MnistDataset(images, labels)` holds flattened images and their labels. It
  raises `ValueError` if the counts differ. `len()` gives the number of
  examples.
- `MnistDataset.batch(size, number)` returns slice number `number` of `size`
  examples, sharing data with the parent. The last slice may be shorter. A
  slice that would start outside the dataset raises `IndexError`. A size that
  is not positive raises `ValueError`.

### `mnistnet.network`

- `softmax(activations)` is a numerically stable softmax. It raises
  `ValueError` for an empty input.
- `NeuralNetwork` has a bias vector `b` of shape `(10,)` and a weight matrix
  `W` of shape `(10, 784)`. Both start at zero.
- `NeuralNetwork.random_weights(rng=None)` fills `b` and `W` with uniform
  values in [0, 1). It uses the given numpy `Generator`, or a fresh one if
  none is given.
- `NeuralNetwork.hypothesis(image)` returns the 10 softmax activations for one
  image of 784 pixels. Pixels are scaled from 0–255 to 0–1 first. The
  predicted digit is the index of the largest activation.
- `Gradient` accumulates the bias and weight gradients (`b_grad`, `W_grad`).
- `NeuralNetwork.gradient_update(image, label, gradient)` adds one example's
  contribution to a `Gradient` and returns its cross-entropy loss. A label
  outside 0–9 raises `ValueError`.
- `NeuralNetwork.training_step(dataset, learning_rate)` runs one
  gradient-descent step over a dataset, using gradients averaged over its
  examples. It returns the total loss. An empty dataset raises `ValueError`.

### `mnistnet.cli`

- `calculate_accuracy(dataset, network)` returns the fraction of the dataset
  that the network classifies correctly. It raises `ValueError` for an empty
  dataset.
- `main(argv=None)` runs the command described above and returns its exit
  status.

## Limitations

- The package does not download the MNIST files; you supply them.
- There is no way to save or load a trained network. The weights exist only
  while the program runs.