import logging
import numpy as np
import pandas as pd
from pandas.api.types import is_integer_dtype
from sklearn.model_selection import train_test_split
from c45tree.errors import InvalidInputError

logger = logging.getLogger(__name__)

__all__ = [
    'get_dataset', 'get_demo_dataset', 'split_dataset',
    'encode_categorical', 'encode_instance', 'decode_label',
]

# code for raw values never seen while encoding; it matches no branch of a trained tree
UNSEEN_CODE = -1


def get_demo_dataset():
    """Five rows over three binary attributes"""
    X = [
        [1, 0, 0],
        [1, 1, 1],
        [0, 0, 0],
        [0, 1, 1],
        [1, 0, 1],
    ]
    y = [0, 1, 0, 1, 1]
    attributes = {0, 1, 2}
    return X, y, attributes


def get_dataset(dataset_file, label_column='label', test_size=None, seed=None):
    """Load a CSV dataset of categorical attributes and integer-encode it.

    Returns the (X, y) data, or ((x_train, y_train), (x_test, y_test)) if a test
    size is given, together with the feature names and the per-column encoders.
    """
    data = pd.read_csv(dataset_file)
    if label_column not in data.columns:
        raise InvalidInputError(f"A column '{label_column}' must be present in the raw data")
    if data.isnull().values.any():
        raise InvalidInputError("Missing values are not supported")

    # reorganize columns to have the label at the end
    columns = [col for col in data.columns if col != label_column] + [label_column]
    data, encoders = encode_categorical(data[columns])
    feature_names = columns[:-1]
    logger.info(f"Loaded {len(data)} rows with {len(feature_names)} attributes from {dataset_file}")

    X = data[feature_names].values.tolist()
    y = data[label_column].values.tolist()
    if test_size is None:
        return (X, y), feature_names, encoders

    return split_dataset(X, y, test_size, seed), feature_names, encoders


def split_dataset(X, y, test_size=0.3, seed=None):
    """Split the dataset into training and testing sets, stratified by label when possible"""
    try:
        x_train, x_test, y_train, y_test = train_test_split(X, y, test_size=test_size, random_state=seed, stratify=y)
    except ValueError:
        logger.warning("Stratified split not possible for this label distribution, splitting randomly")
        x_train, x_test, y_train, y_test = train_test_split(X, y, test_size=test_size, random_state=seed)
    logger.info(f"Splitting dataset: {len(y_train)} training rows, {len(y_test)} testing rows")
    return (x_train, y_train), (x_test, y_test)


def encode_categorical(data):
    """Replace the values of every non-integer column with integer codes.

    Codes follow the sorted order of the distinct values. Integer columns are kept
    as they are and get no encoder.
    """
    data = data.copy()
    encoders = {}
    for column in data.columns:
        if is_integer_dtype(data[column]):
            encoders[column] = None
            continue
        codes, categories = pd.factorize(data[column], sort=True)
        data[column] = codes
        encoders[column] = categories.tolist()
    return data, encoders


def encode_instance(values, feature_names, encoders):
    """Map raw attribute values to the codes used during training"""
    if len(values) != len(feature_names):
        raise InvalidInputError(f"Expected {len(feature_names)} values, received {len(values)}")

    encoded = []
    for name, value in zip(feature_names, values):
        categories = encoders.get(name)
        if categories is None:
            try:
                encoded.append(int(value))
            except (TypeError, ValueError):
                raise InvalidInputError(f"Attribute '{name}' takes integer values (received {value!r})")
            continue
        # raw values usually come from the command line as strings
        lookup = {str(category): code for code, category in enumerate(categories)}
        encoded.append(lookup.get(str(value), UNSEEN_CODE))
    return encoded


def decode_label(label, encoders, label_column='label'):
    """Inverse of the label encoding; non-integer results (e.g. UNKNOWN) are returned unchanged"""
    categories = encoders.get(label_column)
    if categories is None or not isinstance(label, (int, np.integer)):
        return label
    return categories[label]
