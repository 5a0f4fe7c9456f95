import logging
from sklearn import metrics
from c45tree.args import AccuracyMetric
from c45tree.custom_models.dt.node import UNKNOWN
from c45tree.custom_models.dt.tree import C45DecisionTreeClassifier
from c45tree.errors import InvalidInputError


logger = logging.getLogger(__name__)


class C45ClassifierWrapper:
    """Train the tree and score it on held-out data with a scikit-learn metric."""

    def __init__(self, accuracy_metric=AccuracyMetric.Accuracy, max_depth=None):
        self._clf = C45DecisionTreeClassifier(max_depth=max_depth)
        self.coverage = None
        self.set_accuracy_function(accuracy_metric)

    @property
    def clf(self):
        return self._clf

    def set_accuracy_function(self, accuracy_metric):
        self.accuracy_metric = accuracy_metric
        self.accuracy_params = {}
        if accuracy_metric == AccuracyMetric.Accuracy:
            self.accuracy_f = metrics.accuracy_score
        elif accuracy_metric == AccuracyMetric.F1:
            self.accuracy_f = metrics.f1_score
            self.accuracy_params['average'] = 'weighted'
            self.accuracy_params['zero_division'] = 0
        else:
            raise ValueError(f"Unknown accuracy metric: {accuracy_metric}")

    def train(self, x_train, y_train, x_test=None, y_test=None, attributes=None):
        self._clf.fit(x_train, y_train, attributes=attributes)
        logger.info(f"Trained tree: depth={self._clf.get_depth()}, leaves={self._clf.get_n_leaves()}")
        if x_test is None or y_test is None:
            return
        return self.test(x_test, y_test)

    def test(self, x_test, y_test):
        if len(x_test) == 0 or len(x_test) != len(y_test):
            raise InvalidInputError(f"Cannot score on a test set of {len(x_test)} instances "
                                    f"and {len(y_test)} labels")
        y_pred = self._clf.predict(x_test)
        known = [pred for pred in y_pred if pred is not UNKNOWN]
        self.coverage = len(known) / len(y_pred) if y_pred else 0.0
        if len(known) < len(y_pred):
            logger.warning(f"{len(y_pred) - len(known)}/{len(y_pred)} test instances could not be classified")

        # unclassifiable instances count as errors: give them a code no true label has
        unknown_code = min(list(y_test) + known) - 1
        y_pred = [unknown_code if pred is UNKNOWN else pred for pred in y_pred]
        accuracy = self.accuracy_f(y_test, y_pred, **self.accuracy_params)
        return float(accuracy)

    def get_architecture(self):
        return self._clf.get_n_leaves(), self._clf.get_depth()
