import logging
import timeit

from lcsdiff import lcs

logging.getLogger().setLevel(logging.INFO)

BENCHMARKS = {
    "1000 equal items": ([0] * 1000, [0] * 1000),
    "1000 non-equal items": ([0] * 1000, [1] * 1000),
}


def run(repeat=5, number=1):
    """Time each benchmark and return the best run, in seconds."""
    timings = {}
    for name, (old, new) in BENCHMARKS.items():
        timings[name] = min(timeit.repeat(lambda: lcs.diff(old, new),
                                          repeat=repeat, number=number))
        logging.info("{}: {:.6f}s".format(name, timings[name]))
    return timings


if __name__ == "__main__":
    logging.basicConfig(format="%(message)s")
    run()
