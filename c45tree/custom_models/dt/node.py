from enum import Enum
from types import MappingProxyType


__all__ = ['LeafOrigin', 'Prediction', 'UNKNOWN', 'TreeNode', 'LeafNode', 'DecisionNode']


class LeafOrigin(Enum):
    PURE = 0        # all training rows reaching the leaf share its label
    MAJORITY = 1    # attributes (or depth) exhausted, label chosen by majority vote


class Prediction(Enum):
    UNKNOWN = 'unknown'

    def __repr__(self):
        return 'UNKNOWN'


# Result of classifying an instance whose attribute value was never observed at the reached node
UNKNOWN = Prediction.UNKNOWN


class TreeNode:
    """Base class of the two node variants. Nodes are read-only once built."""
    is_leaf = False

    def __init__(self, n_samples):
        self._n_samples = n_samples

    @property
    def n_samples(self):
        """Number of training rows that reached this node"""
        return self._n_samples


class LeafNode(TreeNode):
    is_leaf = True

    def __init__(self, label, origin=LeafOrigin.PURE, n_samples=0):
        super().__init__(n_samples)
        self._label = label
        self._origin = origin

    @property
    def label(self):
        return self._label

    @property
    def origin(self):
        return self._origin

    def __repr__(self):
        return f"LeafNode(label={self._label!r}, origin={self._origin.name}, n_samples={self._n_samples})"


class DecisionNode(TreeNode):
    def __init__(self, attribute, children, n_samples=0):
        super().__init__(n_samples)
        if not children:
            raise ValueError("A decision node needs at least one child")
        self._attribute = attribute
        self._children = MappingProxyType({value: children[value] for value in sorted(children)})

    @property
    def attribute(self):
        return self._attribute

    @property
    def children(self):
        """Read-only mapping: observed attribute value -> child node, in ascending value order"""
        return self._children

    def __repr__(self):
        return (f"DecisionNode(attribute={self._attribute}, values={list(self._children)}, "
                f"n_samples={self._n_samples})")
