import traceback
import logging
from c45tree.utils import env_cfg
from c45tree.dataset import get_dataset, get_demo_dataset, encode_instance, decode_label
from c45tree.classifier import C45ClassifierWrapper

logger = logging.getLogger(__name__)


def main():
    args = env_cfg()
    args.resdir = logging.getLogger().logdir

    if args.dataset_file is None:
        logger.info("No dataset file specified, training on the demo dataset...")
        x_train, y_train, attributes = get_demo_dataset()
        if args.attributes is not None:
            attributes = args.attributes
        x_test = y_test = None
        feature_names, encoders = None, {}
        instance = [int(value) for value in args.instance] if args.instance is not None else [1, 0, 0]
    else:
        data, feature_names, encoders = get_dataset(
            args.dataset_file, label_column=args.label_column,
            test_size=args.test_size, seed=args.global_seed
        )
        if args.test_size is None:
            (x_train, y_train), (x_test, y_test) = data, (None, None)
        else:
            (x_train, y_train), (x_test, y_test) = data
        attributes = args.attributes
        instance = encode_instance(args.instance, feature_names, encoders) if args.instance is not None else None

    classifier = C45ClassifierWrapper(args.accuracy_metric, max_depth=args.max_depth)
    score = classifier.train(x_train, y_train, x_test, y_test, attributes=attributes)

    logger.info("Extracted rules:")
    for rule in classifier.clf.extract_rules(feature_names):
        logger.info(f"  {rule}")

    if score is not None:
        logger.info(f"{args.accuracy_metric.name} on the test set: {score:.4f} "
                    f"(coverage {classifier.coverage:.2%})")

    if instance is not None:
        prediction = classifier.clf.predict_one(instance)
        logger.info(f"Prediction for {instance}: {decode_label(prediction, encoders, args.label_column)}")


if __name__ == '__main__':
    try:
        main()
    except Exception:
        if logger is not None:
            # log unhandled exceptions to the log file only; re-raising prints the trace to stdout
            handlers_bak = logger.handlers
            logger.handlers = [h for h in logger.handlers if type(h) != logging.StreamHandler]
            logger.error(traceback.format_exc())
            logger.handlers = handlers_bak
        raise
    except KeyboardInterrupt:
        logger.info("")
        logger.info("--- Keyboard Interrupt ---")
    finally:
        if logger.handlers:
            logfiles = [handler.baseFilename for handler in logger.handlers if
                        type(handler) == logging.FileHandler]
            logger.info(f"Log file(s) for this run in {' | '.join(logfiles)}")
