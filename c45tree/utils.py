import logging
import logging.config
import os
import sys
import random
import argparse
import numpy as np
import yaml
from collections import Counter, OrderedDict
from enum import Enum
from datetime import datetime
from c45tree import project_dir
from c45tree.args import cmd_args, validate_args, list_arg_names
from c45tree.errors import InvalidArgumentError, InvalidStateError


__all__ = [
    'env_cfg', 'cfg_from_yaml', 'logging_cfg', 'get_timestamp',
    'partition', 'entropy', 'split_info', 'information_gain', 'gain_ratio',
    'best_attribute', 'majority_label',
]

logger = logging.getLogger(__name__)


def env_cfg(argv=None):
    """Configure the environment to train and evaluate the tree"""
    parser = argparse.ArgumentParser("C4.5 decision tree induction over categorical attributes")
    parser = cmd_args(parser)
    args = parser.parse_args(argv)

    # overwrite if a yaml configuration file is given
    if args.yaml_cfg_file is not None:
        cfg_from_yaml(args, args.yaml_cfg_file, list_args=list_arg_names(parser))

    # check for errors
    validate_args(args)

    if args.deterministic:
        np.random.seed(args.global_seed)
        random.seed(args.global_seed)

    # configure logging
    logging_cfg(args)

    # deep trees are built recursively
    if sys.getrecursionlimit() < 10000:
        sys.setrecursionlimit(10000)

    return args


def cfg_from_yaml(args, cfg_yaml_file, list_args=None):
    """Configure environment based on arguments from a yaml file

    Single values given for the arguments in `list_args` (those declared with
    nargs='+'/'*') are wrapped in a list. By default they are taken from `cmd_args`.
    """
    if list_args is None:
        list_args = list_arg_names(cmd_args(argparse.ArgumentParser()))

    def replace_arg(name, value):
        # special handling for Enum type of arguments
        if isinstance(getattr(args, name, None), Enum) and value is not None:
            assert isinstance(value, str)
            enum_cls = getattr(args, name).__class__
            try:
                value = next(entry for entry in enum_cls if entry.name.lower() == value.lower())
            except StopIteration:
                raise ValueError(f"Invalid value '{value}' for '{name}': must be one of "
                                 f"{[entry.name.lower() for entry in enum_cls]}")
        # special handling for lists (nargs='+/*/?')
        elif (name in list_args or isinstance(getattr(args, name, None), list)) and value is not None:
            value = [value] if not isinstance(value, list) else value
        setattr(args, name, value)

    # read configuration file
    with open(cfg_yaml_file, 'r') as stream:
        yaml_dict = yaml.safe_load(stream) or {}

    # inspect all arguments
    for name, value in yaml_dict.items():
        # we assume a two-level nested dictionary
        if isinstance(value, dict):
            # usually this branch gets executed
            for _name, _value in value.items():
                replace_arg(_name, _value)
        else:
            # this is rarely executed
            replace_arg(name, value)


def logging_cfg(args):
    """Configure logging for entire framework"""
    if not os.path.exists(os.path.join(project_dir, 'logs')):
        os.makedirs(os.path.join(project_dir, 'logs'))

    # set the name of the log file and directory
    timestr = get_timestamp()
    exp_full_name = timestr if args.name is None else args.name + '___' + timestr
    logdir = os.path.join(project_dir, 'logs', exp_full_name)
    if not os.path.exists(logdir):
        os.makedirs(logdir)

    # use the logging config file
    log_filename = os.path.join(logdir, exp_full_name + '.log')
    logging.config.fileConfig(
        os.path.join(project_dir, 'logging.conf'),
        disable_existing_loggers=False,
        defaults={
            'main_log_filename': f'{project_dir}/logs/out.log',
            'all_log_filename': log_filename,
        }
    )
    if args.verbose:
        for handler in logging.getLogger().handlers:
            if type(handler) == logging.StreamHandler:
                handler.setLevel(logging.DEBUG)

    # initialized logger and first messages
    logging.getLogger().logdir = logdir
    logger.log_filename = log_filename
    logger.info('Log file for this run: ' + os.path.realpath(log_filename))
    logger.debug("Command line: {}".format(" ".join(sys.argv)))
    arguments = {argument: getattr(args, argument) for argument in dir(args)
                 if not callable(getattr(args, argument)) and not argument.startswith('__')}
    logger.debug(f"Arguments: {arguments}")

    # Create a symbollic link to the last log file created (for easier access)
    try:
        os.unlink("latest_log_file")
    except FileNotFoundError:
        pass
    try:
        os.unlink("latest_log_dir")
    except FileNotFoundError:
        pass
    try:
        os.symlink(logdir, "latest_log_dir")
        os.symlink(log_filename, "latest_log_file")
    except OSError:
        logger.debug("Failed to create symlinks to latest logs")


def get_timestamp():
    return datetime.now().strftime("%Y.%m.%d-%H.%M.%S.%f")[:-3]


def partition(X, y, attribute):
    """Group rows and labels by the observed value of an attribute, in ascending value order."""
    groups = {}
    for row, label in zip(X, y):
        X_sub, y_sub = groups.setdefault(row[attribute], ([], []))
        X_sub.append(row)
        y_sub.append(label)
    return OrderedDict((value, groups[value]) for value in sorted(groups))


def entropy(y):
    """Shannon entropy (in bits) of a non-empty list of class labels y."""
    if len(y) == 0:
        raise InvalidArgumentError("Entropy is undefined for an empty set of labels")
    counts = Counter(y)
    total = len(y)
    # only observed labels are counted, so log2(0) is never evaluated
    return float(-sum((count / total) * np.log2(count / total) for count in counts.values()))


def split_info(X, attribute):
    """Entropy of the distribution of rows across the values of an attribute."""
    return entropy([row[attribute] for row in X])


def information_gain(X, y, attribute):
    """Reduction in label entropy obtained by splitting on an attribute."""
    total = len(y)
    weighted_entropy = sum(
        (len(y_sub) / total) * entropy(y_sub)
        for _, y_sub in partition(X, y, attribute).values()
    )
    return entropy(y) - weighted_entropy


def gain_ratio(X, y, attribute):
    """Information gain of an attribute normalized by its split information.

    Returns 0 when the attribute takes a single value across the subset, since
    such a split carries no discriminating information.
    """
    base_entropy = entropy(y)
    total = len(y)

    new_entropy = 0.0
    split_information = 0.0
    for _, y_sub in partition(X, y, attribute).values():
        weight = len(y_sub) / total
        new_entropy += weight * entropy(y_sub)
        split_information -= weight * np.log2(weight)

    gain = base_entropy - new_entropy
    if split_information == 0:
        return 0.0
    return float(gain / split_information)


def best_attribute(X, y, attributes):
    """Find the attribute with the highest gain ratio.

    Candidates are scanned in ascending index order and only a strictly greater
    ratio replaces the current best, so ties go to the smallest index.
    """
    if not attributes:
        raise InvalidStateError("Cannot select a splitting attribute from an empty attribute set")

    best_ratio = -1.0
    best_attr = None
    for attribute in sorted(attributes):
        ratio = gain_ratio(X, y, attribute)
        logger.debug(f"  - attribute {attribute}: gain ratio={ratio:.4f}")
        if ratio > best_ratio:
            best_ratio = ratio
            best_attr = attribute
    return best_attr


def majority_label(y):
    """Most frequent label in y; ties go to the smallest label value."""
    if len(y) == 0:
        raise InvalidArgumentError("Majority label is undefined for an empty set of labels")
    counts = Counter(y)
    # max() keeps the first maximum, and the candidates are visited in ascending order
    return max(sorted(counts), key=counts.get)
