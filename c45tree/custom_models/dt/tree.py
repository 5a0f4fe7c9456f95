import logging
import numpy as np
from c45tree.custom_models.dt.node import LeafNode, DecisionNode, LeafOrigin, UNKNOWN
from c45tree.errors import InvalidInputError, NotFittedError
from c45tree.utils import partition, entropy, best_attribute, majority_label


__all__ = [
    'C45DecisionTreeClassifier', 'train', 'build_tree', 'predict', 'classify',
    'get_depth', 'get_n_leaves', 'extract_rules', 'rules_to_text', 'decision_path',
]

logger = logging.getLogger(__name__)


class C45DecisionTreeClassifier:
    """Estimator-style wrapper around `train` and `predict`.

    Parameters
    ----------
    max_depth : int | None
        Depth at which induction stops and a majority leaf is made. None grows the
        tree until every leaf is pure or no attributes remain.
    """

    def __init__(self, max_depth=None):
        self.max_depth = max_depth
        self.root = None
        self.attributes_ = None

    def fit(self, X, y, attributes=None):
        if attributes is None and len(X) > 0:
            attributes = range(len(X[0]))
        self.attributes_ = frozenset(attributes) if attributes is not None else frozenset()
        self.root = train(X, y, self.attributes_, max_depth=self.max_depth)
        return self

    def _check_fitted(self):
        if self.root is None:
            raise NotFittedError("Estimator not fitted, call `fit` first.")

    def predict_one(self, x):
        self._check_fitted()
        return classify(x, self.root)

    def predict(self, X):
        self._check_fitted()
        return [classify(x, self.root) for x in X]

    def get_depth(self):
        self._check_fitted()
        return get_depth(self.root)

    def get_n_leaves(self):
        self._check_fitted()
        return get_n_leaves(self.root)

    def extract_rules(self, feature_names=None):
        self._check_fitted()
        return rules_to_text(extract_rules(self.root), feature_names)

    def decision_path(self, x):
        self._check_fitted()
        return decision_path(x, self.root)


def _check_inputs(X, y, attributes):
    if len(X) != len(y):
        raise InvalidInputError(f"Dataset and labels must have the same length ({len(X)} != {len(y)})")
    if len(X) == 0:
        raise InvalidInputError("Cannot train on an empty dataset")
    for attribute in attributes:
        if isinstance(attribute, bool) or not isinstance(attribute, (int, np.integer)) or attribute < 0:
            raise InvalidInputError(f"Attribute indices must be non-negative integers (received {attribute!r})")
    if attributes:
        n_required = max(attributes) + 1
        for i, row in enumerate(X):
            if len(row) < n_required:
                raise InvalidInputError(f"Row {i} has {len(row)} values, but attribute {n_required - 1} "
                                        f"is eligible for splitting")


def train(X, y, attributes=None, max_depth=None):
    """Induce a tree from a dataset X, its labels y and the eligible attribute indices.

    If `attributes` is None, every column of X is eligible.
    """
    if attributes is None:
        attributes = range(len(X[0])) if len(X) > 0 else ()
    attributes = frozenset(attributes)
    _check_inputs(X, y, attributes)

    logger.debug(f"Training on {len(X)} rows with attributes {sorted(attributes)}")
    root = build_tree(list(X), list(y), attributes, depth=0, max_depth=max_depth)
    logger.debug(f"Induced tree with depth {get_depth(root)} and {get_n_leaves(root)} leaves")
    return root


def build_tree(X, y, attributes, depth=0, max_depth=None):
    if len(y) == 0 or len(X) != len(y):
        raise InvalidInputError("build_tree needs a non-empty dataset with one label per row")
    indent = "|  " * depth

    # Stopping conditions; purity is checked before attribute exhaustion
    if len(set(y)) == 1:
        return LeafNode(y[0], origin=LeafOrigin.PURE, n_samples=len(y))
    if not attributes:
        return LeafNode(majority_label(y), origin=LeafOrigin.MAJORITY, n_samples=len(y))
    if max_depth is not None and depth >= max_depth:
        logger.debug(f"{indent}Depth limit {max_depth} reached with n={len(y)}")
        return LeafNode(majority_label(y), origin=LeafOrigin.MAJORITY, n_samples=len(y))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"{indent}Node depth={depth}, n={len(y)}, H={entropy(y):.3f}")

    # Find best attribute
    best_attr = best_attribute(X, y, attributes)
    logger.debug(f"{indent}=> split on attribute {best_attr}")

    # Each branch consumes the chosen attribute
    remaining = attributes - {best_attr}
    children = {
        value: build_tree(X_sub, y_sub, remaining, depth + 1, max_depth)
        for value, (X_sub, y_sub) in partition(X, y, best_attr).items()
    }
    return DecisionNode(best_attr, children, n_samples=len(y))


def classify(x, node):
    """Walk the tree for instance x; UNKNOWN if a value was not seen during training at some node."""
    if node.is_leaf:
        return node.label
    value = x[node.attribute]
    if value in node.children:
        return classify(x, node.children[value])
    return UNKNOWN


def predict(tree, x):
    return classify(x, tree)


def get_depth(node):
    """Number of edges on the longest root-to-leaf path."""
    if node.is_leaf:
        return 0
    return 1 + max(get_depth(child) for child in node.children.values())


def get_n_leaves(node):
    if node.is_leaf:
        return 1
    return sum(get_n_leaves(child) for child in node.children.values())


def extract_rules(node):
    """Collect one (conditions, label) pair per leaf, conditions being (attribute, value) tuples."""
    rules = []

    def recurse(node, path):
        if node.is_leaf:
            rules.append((path, node.label))
            return
        for value, child in node.children.items():
            recurse(child, path + [(node.attribute, value)])

    recurse(node, [])
    return rules


def rules_to_text(rules, feature_names=None):
    def name(attribute):
        return feature_names[attribute] if feature_names is not None else f"x{attribute}"

    lines = []
    for path, label in rules:
        conditions = " AND ".join(f"{name(attribute)} = {value}" for attribute, value in path)
        lines.append(f"IF {conditions} THEN label = {label}" if conditions else f"label = {label}")
    return lines


def decision_path(x, node):
    """Return the (attribute, value) steps taken for instance x and the resulting prediction."""
    path = []
    while not node.is_leaf:
        value = x[node.attribute]
        path.append((node.attribute, value))
        if value not in node.children:
            return path, UNKNOWN
        node = node.children[value]
    return path, node.label
