"""Base classes for supervised classifiers."""

from abc import ABC, abstractmethod
from collections.abc import Hashable, Sequence


class Classifier(ABC):
    """Base classifier class."""

    @abstractmethod
    def train(self, X: Sequence[Sequence[float]], y: Sequence[Hashable]):
        """Train the classifier.

        Args:
            X: The features of the training data, one vector per data point.
            y: The labels of the training data, one label per data point.
        """
        pass

    @abstractmethod
    def predict(self, X: Sequence[Sequence[float]]) -> list[Hashable]:
        """Predict the labels of new data points.

        Args:
            X: The features of the data points to classify.

        Returns:
            The predicted label of each data point, in input order.
        """
        pass


class Neighbors(Classifier):
    """Base class for classifiers that predict from the nearest training points."""

    @abstractmethod
    def predict_sample(self, features: Sequence[float]) -> Hashable:
        """Predict the label of a single data point.

        Args:
            features: The features of the data point.

        Returns:
            The predicted label.
        """
        pass
