import pandas as pd
import pytest
from c45tree.custom_models.dt.node import UNKNOWN
from c45tree.custom_models.dt.tree import train, predict
from c45tree.dataset import (
    get_dataset, get_demo_dataset, split_dataset, encode_categorical, encode_instance, decode_label, UNSEEN_CODE
)
from c45tree.errors import InvalidInputError


def test_demo_dataset_shape():
    X, y, attributes = get_demo_dataset()
    assert len(X) == len(y) == 5
    assert attributes == {0, 1, 2}
    assert all(len(row) == 3 for row in X)


def test_get_dataset_encodes_categories(play_tennis_file):
    (X, y), feature_names, encoders = get_dataset(play_tennis_file, label_column='PlayTennis')
    assert feature_names == ['Outlook', 'Temperature', 'Humidity', 'Wind']
    assert encoders['Outlook'] == ['Overcast', 'Rain', 'Sunny']
    assert encoders['PlayTennis'] == ['No', 'Yes']
    assert len(X) == len(y) == 14
    assert X[0] == [2, 1, 0, 1]
    assert y[:3] == [0, 0, 1]


def test_play_tennis_tree(play_tennis_file):
    (X, y), feature_names, encoders = get_dataset(play_tennis_file, label_column='PlayTennis')
    tree = train(X, y)
    assert feature_names[tree.attribute] == 'Outlook'
    assert [predict(tree, x) for x in X] == y

    overcast = encode_instance(['Overcast', 'Mild', 'High', 'Strong'], feature_names, encoders)
    assert decode_label(predict(tree, overcast), encoders, 'PlayTennis') == 'Yes'

    foggy = encode_instance(['Foggy', 'Mild', 'High', 'Strong'], feature_names, encoders)
    assert foggy[0] == UNSEEN_CODE
    assert decode_label(predict(tree, foggy), encoders, 'PlayTennis') is UNKNOWN


def test_get_dataset_with_split(play_tennis_file):
    data, _, _ = get_dataset(play_tennis_file, label_column='PlayTennis', test_size=0.5, seed=1)
    (x_train, y_train), (x_test, y_test) = data
    assert len(x_train) + len(x_test) == 14
    assert len(y_train) == len(x_train)
    assert set(y_train) == set(y_test) == {0, 1}


def test_split_dataset_falls_back_without_stratification():
    X = [[0], [1], [0], [1]]
    y = [0, 0, 0, 1]
    (x_train, y_train), (x_test, y_test) = split_dataset(X, y, test_size=0.5, seed=0)
    assert len(x_train) == len(x_test) == 2


def test_missing_label_column(play_tennis_file):
    with pytest.raises(InvalidInputError):
        get_dataset(play_tennis_file, label_column='label')


def test_missing_values_are_rejected(tmp_path):
    path = tmp_path / "missing.csv"
    path.write_text("a,b,label\nx,1,0\n,2,1\n")
    with pytest.raises(InvalidInputError):
        get_dataset(str(path))


def test_integer_columns_are_kept(tmp_path):
    path = tmp_path / "ints.csv"
    path.write_text("a,b,label\n5,x,0\n7,y,1\n")
    (X, y), feature_names, encoders = get_dataset(str(path))
    assert encoders['a'] is None
    assert encoders['label'] is None
    assert X == [[5, 0], [7, 1]]
    assert encode_instance(['7', 'y'], feature_names, encoders) == [7, 1]
    assert decode_label(1, encoders) == 1


def test_encode_categorical_does_not_modify_input():
    data = pd.DataFrame({'color': ['red', 'blue', 'red'], 'label': [1, 0, 1]})
    encoded, encoders = encode_categorical(data)
    assert encoded['color'].tolist() == [1, 0, 1]
    assert data['color'].tolist() == ['red', 'blue', 'red']


def test_encode_instance_length_mismatch():
    with pytest.raises(InvalidInputError):
        encode_instance([1], ['a', 'b'], {'a': None, 'b': None})


def test_encode_instance_non_numeric_value_for_integer_column():
    with pytest.raises(InvalidInputError):
        encode_instance(['seven', 'y'], ['a', 'b'], {'a': None, 'b': ['x', 'y']})
