"""Errors raised by the supervised models."""


class KNNError(Exception):
    """Base class for errors raised by neighbour based models."""


class ShapeMismatchError(KNNError, ValueError):
    """The number of data points does not match the number of labels."""


class NotTrainedError(KNNError, RuntimeError):
    """A prediction was requested from a model that has not been trained."""


class DimensionalityMismatchError(KNNError, ValueError):
    """The query features do not match the features of the training data."""


class EmptyTrainingSetError(KNNError, ValueError):
    """A prediction was requested from a model trained on no data points."""
