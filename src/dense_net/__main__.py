#!/usr/bin/env python3

import logging

from dense_net import datasets
from dense_net.activations import Activation
from dense_net.loss import Cost
from dense_net.network import Network
from dense_net.optimizers import Adam

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

logger = logging.getLogger(__name__)

SHAPE = [2, (Activation.RELU, 32), (Activation.RELU, 32),
         (Activation.SIGMOID, 3)]
BATCH_SIZE = 128
EVAL_SAMPLE_SIZE = 256
NUM_EPOCHS = 3000
RESOLUTION = 32
SEED = 42


def main():
    try:
        dataset = datasets.rgb_donut(seed=SEED)

        optimizer = Adam()
        network = Network(SHAPE, optimizer, cost=Cost.QUADRATIC, seed=SEED)

        history = network.train_and_log(dataset, BATCH_SIZE, EVAL_SAMPLE_SIZE,
                                        NUM_EPOCHS)

        (rows, cols), predictions = network.predict_unit_square(RESOLUTION)

        run_name = f"{dataset.name}_{network.summarize()}"
        logger.info("Run %s finished: %d history points, final cost %.8f.",
                    run_name, len(history), history[-1][1])
        logger.info("Unit-square prediction: %dx%d grid, %d outputs per "
                    "point.", rows, cols, len(predictions[0]))
    except ValueError as e:
        logger.error("ValueError during training: %s", e, exc_info=True)
    except RuntimeError as e:
        logger.error("RuntimeError during training: %s", e, exc_info=True)


if __name__ == "__main__":
    main()
