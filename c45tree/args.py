import argparse
from enum import Enum


__all__ = [
    'cmd_args', 'validate_args', 'list_arg_names', 'AccuracyMetric', 'accuracy_metric_arg',
]


def cmd_args(parser):
    """Arguments for running the main application"""
    parser.add_argument('--name', '-n', help='Experiment name')
    parser.add_argument('--verbose', '-v', action='store_true', help='Emit debug log messages')
    parser.add_argument('--deterministic', action='store_true', help='Run the application in a deterministic way')
    parser.add_argument('--global-seed', '--seed', type=int, default=123, dest='global_seed',
                        help='Global seed for the application. Used if deterministic is set to True')
    parser.add_argument('--yaml-cfg-file', help='YAML file containing the experiment description')

    app_args = parser.add_argument_group("Problem-specific arguments")

    # Dataset-specific arguments
    app_args.add_argument("--dataset-file", type=str,
                          help="Specify the dataset file path (CSV). If omitted, the built-in demo dataset is used.")
    app_args.add_argument("--label-column", type=str, default='label',
                          help="Name of the column holding the class labels. Default is 'label'.")
    app_args.add_argument("--attributes", type=int, nargs='+', default=None,
                          help="Attribute (column) indices eligible for splitting. Default is all of them.")
    app_args.add_argument("--test-size", type=float, default=None,
                          help="Specify the test size for the train-test split. Default is no split.")

    # Tree-specific arguments
    app_args.add_argument("--max-depth", type=int, default=None,
                          help="Maximum depth of the induced tree. Default is unlimited.")
    app_args.add_argument("--accuracy-metric", type=accuracy_metric_arg, default='accuracy',
                          help=f"Metric for the held-out evaluation. Options: {' | '.join(str_to_accuracy_metric_map.keys())}")

    # Prediction-specific arguments
    app_args.add_argument("--instance", type=str, nargs='+', default=None,
                          help="Raw attribute values of an instance to classify after training.")
    return parser


def list_arg_names(parser):
    """Destinations of the arguments that take a list of values"""
    return {action.dest for action in parser._actions if action.nargs in ('+', '*')}


def validate_args(args):
    if not args.deterministic:
        args.global_seed = None

    if args.test_size is not None and not 0.0 < args.test_size < 1.0:
        raise ValueError(f"--test-size must be in (0, 1) (received {args.test_size})")
    if args.max_depth is not None and args.max_depth < 0:
        raise ValueError(f"--max-depth must be non-negative (received {args.max_depth})")
    if args.attributes is not None:
        args.attributes = sorted(set(args.attributes))


### Enumeration and argument type functions

class AccuracyMetric(Enum):
    Accuracy = 0
    F1 = 1

str_to_accuracy_metric_map = {
    'accuracy': AccuracyMetric.Accuracy,
    'f1': AccuracyMetric.F1
}

def accuracy_metric_arg(metric_str):
    if metric_str is None:
        return
    if isinstance(metric_str, AccuracyMetric):
        return metric_str
    try:
        return str_to_accuracy_metric_map[metric_str.replace('_', '').replace('-', '').lower()]
    except KeyError:
        raise argparse.ArgumentTypeError('--accuracy-metric argument must be one of {0} (received {1})'.format(
            list(str_to_accuracy_metric_map.keys()), metric_str
        ))
