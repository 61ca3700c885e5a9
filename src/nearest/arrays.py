"""Vector arithmetic utilities.

Small, pure helpers over one-dimensional feature vectors used by the neighbour based
models. Every element-wise operation requires both operands to have exactly the same
shape. Broadcasting is not allowed, a mismatch raises a ``ValueError``
instead of silently producing a result of the wrong size.

The Euclidean distance between two vectors ``p`` and ``q`` is composed from these
primitives as:

        d(p, q) = norm(elementwise_sum(p, scale(q, -1)))
"""

from collections import Counter
from collections.abc import Hashable, Iterable, Sequence
from typing import Any

import jax
import jax.numpy as jnp


def _check_same_shape(a: jnp.ndarray, b: jnp.ndarray):
    if a.shape != b.shape:
        raise ValueError(
            f"Vectors must have the same shape, got {a.shape} and {b.shape}."
        )


def elementwise_sum(a: jnp.ndarray, b: jnp.ndarray) -> jnp.ndarray:
    """Add two vectors element by element.

    Args:
        a: The first vector.
        b: The second vector, same shape as ``a``.

    Returns:
        A new vector where element i is ``a[i] + b[i]``.
    """
    a, b = jnp.asarray(a), jnp.asarray(b)
    _check_same_shape(a, b)
    return a + b


def subtract(a: jnp.ndarray, b: jnp.ndarray) -> jnp.ndarray:
    """Subtract two vectors element by element.

    Args:
        a: The first vector.
        b: The vector to subtract, same shape as ``a``.

    Returns:
        A new vector where element i is ``a[i] - b[i]``.
    """
    return elementwise_sum(a, scale(b, -1))


def scale(a: jnp.ndarray, k: float) -> jnp.ndarray:
    """Multiply every element of a vector by a scalar.

    Args:
        a: The vector.
        k: The scaling factor.

    Returns:
        A new vector where element i is ``a[i] * k``.
    """
    return jnp.asarray(a) * k


def norm(a: jnp.ndarray) -> jnp.ndarray:
    """The Euclidean (L2) norm of a vector.

    The elements are divided by the largest magnitude before squaring, so very small
    or very large vectors do not underflow to zero or overflow to infinity.

    Args:
        a: The vector.

    Returns:
        The square root of the sum of squares of the elements.
    """
    a = jnp.asarray(a)
    largest = jnp.max(jnp.abs(a), initial=0)
    scale_by = jnp.where(largest > 0, largest, 1)
    scaled = a / scale_by
    return scale_by * jnp.sqrt(jnp.sum(scaled * scaled))


def euclidean_distance(p: jnp.ndarray, q: jnp.ndarray) -> jnp.ndarray:
    """The Euclidean distance between two vectors.

    Args:
        p: The first vector.
        q: The second vector, same shape as ``p``.

    Returns:
        The (non-negative) distance between ``p`` and ``q``.
    """
    return norm(elementwise_sum(p, scale(q, -1)))


def pairwise_distances(X_query: jnp.ndarray, X_train: jnp.ndarray) -> jnp.ndarray:
    """Euclidean distances between every query row and every training row.

    Args:
        X_query: An array of shape ``(m, d)``.
        X_train: An array of shape ``(n, d)``.

    Returns:
        An array of shape ``(m, n)`` where entry ``(i, j)`` is the distance between
        ``X_query[i]`` and ``X_train[j]``.
    """
    X_query, X_train = jnp.asarray(X_query), jnp.asarray(X_train)
    return jax.vmap(
        lambda q: jax.vmap(lambda x: euclidean_distance(q, x))(X_train)
    )(X_query)


def value_counts(labels: Iterable[Hashable]) -> list[tuple[Hashable, int]]:
    """Count the occurrences of each distinct label.

    The result is ordered by first appearance of each label in ``labels``, which makes
    any tie-breaking done on top of it reproducible.

    Args:
        labels: A sequence of hashable labels.

    Returns:
        A list of ``(label, count)`` pairs.
    """
    return list(Counter(labels).items())


def zip_with_index(values: Sequence[Any]) -> list[tuple[Any, int]]:
    """Pair every value with its position in the input.

    Args:
        values: A sequence of values.

    Returns:
        A list of ``(value, index)`` pairs in input order.
    """
    return [(value, index) for index, value in enumerate(values)]
