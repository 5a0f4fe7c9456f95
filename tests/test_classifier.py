import pytest
from c45tree.args import AccuracyMetric
from c45tree.classifier import C45ClassifierWrapper
from c45tree.dataset import get_dataset
from c45tree.errors import InvalidInputError


def test_train_without_test_data_returns_none(demo_data):
    X, y, attributes = demo_data
    wrapper = C45ClassifierWrapper()
    assert wrapper.train(X, y, attributes=attributes) is None
    assert wrapper.get_architecture() == (2, 1)


def test_unknown_predictions_count_as_errors(demo_data):
    X, y, attributes = demo_data
    wrapper = C45ClassifierWrapper(AccuracyMetric.Accuracy)
    score = wrapper.train(X, y, [[1, 0, 0], [0, 1, 1], [1, 1, 2]], [0, 1, 1], attributes=attributes)
    assert score == pytest.approx(2 / 3)
    assert wrapper.coverage == pytest.approx(2 / 3)


def test_f1_on_training_data(play_tennis_file):
    (X, y), _, _ = get_dataset(play_tennis_file, label_column='PlayTennis')
    wrapper = C45ClassifierWrapper(AccuracyMetric.F1)
    assert wrapper.train(X, y, X, y) == pytest.approx(1.0)
    assert wrapper.coverage == 1.0


def test_max_depth_is_forwarded(demo_data):
    X, y, attributes = demo_data
    wrapper = C45ClassifierWrapper(max_depth=0)
    assert wrapper.train(X, y, X, y, attributes=attributes) == pytest.approx(3 / 5)


def test_unknown_metric_is_rejected():
    with pytest.raises(ValueError):
        C45ClassifierWrapper(accuracy_metric='auc')


def test_empty_test_set_is_rejected(demo_data):
    X, y, attributes = demo_data
    wrapper = C45ClassifierWrapper()
    with pytest.raises(InvalidInputError):
        wrapper.train(X, y, [], [], attributes=attributes)
