"""K-Nearest Neighbors (KNN) Implementation.

This script provides an implementation of the K-Nearest Neighbors (KNN) classifier.
The fundamental concept behind KNN is that similar data points are close to each other.
KNN assigns the class of a data point based on the majority class of its k nearest
neighbors, measured by Euclidean distance.

The KNN algorithm is non-parametric and lazy, meaning it makes no assumptions about
the underlying data distribution and does not learn a discriminative function from
the training data. Instead, it stores all the training data and performs computation
only during the prediction phase.

Neighbours at exactly the same distance keep the order in which they appear in the
training data, and a tied vote goes to the label that appears first among the k nearest
neighbours. Both rules make predictions fully deterministic.

Features are stored and compared in double precision. JAX defaults to single precision,
so distances are computed with 64-bit mode enabled for the duration of the computation.

References:
- Cover, T., & Hart, P. (1967). Nearest neighbor pattern classification. IEEE
  Transactions on Information Theory, 13(1), 21-27.
  Available at: https://ieeexplore.ieee.org/document/1053964

"""

from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, fields
from itertools import count
from numbers import Number
from typing import Any, NamedTuple

import jax.numpy as jnp
import numpy as np
from jax.experimental import enable_x64

from nearest.arrays import pairwise_distances, value_counts, zip_with_index
from nearest.data.datapoint import Datapoint
from nearest.supervised.base import Neighbors
from nearest.supervised.errors import (
    DimensionalityMismatchError,
    EmptyTrainingSetError,
    NotTrainedError,
    ShapeMismatchError,
)
from nearest.utils.logging import BaseLogger, no_op_logger
from nearest.utils.timer import capture_time


@dataclass
class KNNConfig:
    """Configuration for the KNN classifier."""

    num_neighbours: int = 3
    """Number of nearest neighbours to consider for the majority vote."""

    def __post_init__(self):
        """Ensure the number of neighbours is a positive integer."""
        if (
            isinstance(self.num_neighbours, bool)
            or not isinstance(self.num_neighbours, int)
            or self.num_neighbours < 1
        ):
            raise ValueError(
                "num_neighbours must be a positive integer, "
                f"got {self.num_neighbours!r}"
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "KNNConfig":
        """Build a config from user options merged over the defaults.

        Args:
            options: A mapping of option names to values. Both ``num_neighbours`` and
              ``numNeighbours`` are accepted.

        Returns:
            The config.
        """
        aliases = {"numNeighbours": "num_neighbours"}
        names = {field.name for field in fields(cls)}

        parsed = {}
        for key, value in (options or {}).items():
            name = aliases.get(key, key)
            if name not in names:
                raise ValueError(f"Unknown KNN option: {key}")
            parsed[name] = value

        return cls(**parsed)


class TrainingSet(NamedTuple):
    """An immutable snapshot of the data a KNN model was trained on."""

    X: np.ndarray
    y: tuple[Hashable, ...]


def _as_labels(y: Sequence[Hashable]) -> tuple[Hashable, ...]:
    # Array labels are not hashable, convert them to plain Python values.
    if hasattr(y, "tolist"):
        return tuple(y.tolist())
    return tuple(y)


def _as_matrix(X: Sequence[Sequence[float]]) -> np.ndarray:
    try:
        # np.array always copies, the model must not alias the caller's buffers.
        matrix = np.array(X, dtype=np.float64)
    except ValueError as err:
        raise DimensionalityMismatchError(
            "All data points should have the same number of features."
        ) from err

    if matrix.size == 0 and matrix.ndim == 1:
        matrix = matrix.reshape(0, 0)

    if matrix.ndim != 2:
        raise DimensionalityMismatchError(
            "Expected a sequence of feature vectors, got an array of shape "
            f"{matrix.shape}."
        )

    matrix.setflags(write=False)
    return matrix


class KNN(Neighbors):
    """k-nearest neighbours classifier.

    Classifies points based on the majority vote of their k nearest neighbours in the
    training data.
    """

    def __init__(
        self, config: KNNConfig | None = None, logger: BaseLogger | None = None
    ):
        """Initializes the classifier.

        Args:
            config: The classifier configuration, defaults to ``KNNConfig()``.
            logger: The logger to report to, defaults to a no-op logger.
        """
        self.config = config or KNNConfig()
        self.logger = logger or no_op_logger
        self.training: TrainingSet | None = None
        self._prediction_steps = count(1)

    @property
    def num_neighbours(self) -> int:
        """Number of nearest neighbours considered for the majority vote."""
        return self.config.num_neighbours

    @property
    def is_trained(self) -> bool:
        """Whether the classifier has been trained."""
        return self.training is not None

    def train(self, X: Sequence[Sequence[float]], y: Sequence[Hashable]):
        """Store the training data.

        Any previously stored training data is discarded. The features are copied, so
        later changes to ``X`` or ``y`` do not affect the model. Empty training data
        is accepted, but such a model cannot make predictions.

        Args:
            X: The features of the training data, one vector per data point.
            y: The labels of the training data, one label per data point.

        Raises:
            ShapeMismatchError: If the number of data points and labels differ.
            DimensionalityMismatchError: If the data points do not all have the same
              number of features.
        """
        labels = _as_labels(y)
        if len(X) != len(labels):
            raise ShapeMismatchError(
                "Number of data points should match number of labels."
            )

        features = _as_matrix(X)
        self.training = TrainingSet(X=features, y=labels)
        self.logger.log(
            f"Stored {features.shape[0]} training samples "
            f"with {features.shape[1]} features"
        )

    def predict(self, X: Sequence[Sequence[float]]) -> list[Hashable]:
        """Predict the labels of new data points.

        Args:
            X: The features of the data points to classify.

        Returns:
            The predicted label of each data point, in input order.

        Raises:
            NotTrainedError: If the classifier has not been trained.
            EmptyTrainingSetError: If the classifier was trained on no data points.
            DimensionalityMismatchError: If any data point does not have the same
              number of features as the training data.
        """
        # Read once so a concurrent call to train cannot swap data mid-prediction.
        training = self.training
        if training is None:
            raise NotTrainedError(
                "Model has to be trained in order to make predictions."
            )

        if len(X) == 0:
            return []

        if len(training.y) == 0:
            raise EmptyTrainingSetError(
                "Model was trained on an empty data set and has no neighbours to "
                "vote with."
            )

        queries = _as_matrix(X)
        if queries.shape[1] != training.X.shape[1]:
            raise DimensionalityMismatchError(
                "Number of features of test data should match number of features of "
                f"training data ({queries.shape[1]} != {training.X.shape[1]})."
            )

        with capture_time() as elapsed:
            with enable_x64():
                distances = pairwise_distances(
                    jnp.asarray(queries), jnp.asarray(training.X)
                ).tolist()
            predictions = [self._vote(row, training.y) for row in distances]

        self.logger.log(f"Predicted {len(predictions)} samples in {elapsed():.2f}s")
        self.logger.log_metrics(
            {"num_samples": len(predictions), "predict_time": elapsed()},
            step=next(self._prediction_steps),
        )
        return predictions

    def predict_sample(self, features: Sequence[float]) -> Hashable:
        """Predict the label of a single data point.

        Args:
            features: The features of the data point.

        Returns:
            The label with the highest prevalence among the k nearest neighbours.
        """
        return self.predict([features])[0]

    def classify(self, datapoints: Sequence[Datapoint]) -> list[Hashable]:
        """Predict and assign the class index of each data point.

        Args:
            datapoints: The data points to classify.

        Returns:
            The predicted label of each data point, in input order.
        """
        predictions = self.predict([datapoint.features for datapoint in datapoints])
        for datapoint, label in zip(datapoints, predictions):
            datapoint.set_class_index(label)
        return predictions

    def _vote(self, distances: list[float], labels: tuple[Hashable, ...]) -> Hashable:
        # sorted is stable, equidistant neighbours keep their training order
        nearest = sorted(zip_with_index(distances), key=lambda entry: entry[0])
        k = min(self.num_neighbours, len(nearest))

        votes = value_counts(labels[index] for _, index in nearest[:k])

        highest = -1
        highest_label = None
        for label, count in votes:
            if count > highest:
                highest = count
                highest_label = label

        return highest_label


def knn(
    X_train: Sequence[Sequence[float]],
    y_train: Sequence[Hashable],
    X_test: Sequence[Sequence[float]],
    k: int = 3,
):
    """K-Nearest Neighbors (KNN) algorithm.

    Trains a ``KNN`` classifier on the training data and classifies the test data in
    one call.

    Args:
        X_train: An array representing the features of the training data.
        y_train: An array representing the labels of the training data.
        X_test: An array representing the features of the test data.
        k: An integer representing the number of neighbors to consider.

    Returns:
        An array of predicted labels for the test data, or a list if any label is not
        numeric.
    """
    model = KNN(KNNConfig(num_neighbours=k))
    model.train(X_train, y_train)
    y_pred = model.predict(X_test)

    if all(isinstance(label, Number) for label in y_pred):
        return jnp.asarray(y_pred)
    return y_pred
