"""Datapoint model for samples in a dataset."""

from collections.abc import Hashable, Sequence
from dataclasses import dataclass


@dataclass(eq=False)
class Datapoint:
    """A sample in a dataset, with features and possibly a class index.

    Can be used as the model for data points shown by a visualization layer. Two
    datapoints are only equal if they are the same object.
    """

    features: Sequence[float]
    """The feature vector of the data point."""
    class_index: Hashable | None = None
    """The label of the data point's class, if known."""
    marked: bool = False
    """Whether the data point is marked, e.g. as a support vector."""

    def set_class_index(self, class_index: Hashable | None):
        """Change the class index of this data point."""
        self.class_index = class_index

    def get_class_index(self) -> Hashable | None:
        """Get the class index of this data point."""
        return self.class_index

    def set_marked(self, marked: bool):
        """Change the "marked" status of this data point."""
        self.marked = marked

    def is_marked(self) -> bool:
        """Whether the data point is marked."""
        return self.marked
