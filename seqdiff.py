import sys
import json
import logging

import requests

import cli_utils as cu
import lcsdiff.diff as tokendiff
from lcsdiff import lcs
import lcsdiff.utils as lcu

EXIT_EQUAL = 0
EXIT_DIFFERENT = 1
EXIT_TROUBLE = 2


def ignore_case_equal(new_item, old_item):
    return str(new_item).lower() == str(old_item).lower()


def collect_params(args):
    """Merge configuration file and command line arguments,
    the latter taking precedence."""
    diff_config = None
    if args.conffile:
        with open(args.conffile, "r") as conf_fh:
            diff_config = cu.get_config(conf_fh)
    overrides = {}
    for key, value in ((cu.GRANULARITY, args.granularity),\
                       (cu.OUTPUT, args.output),\
                       (cu.IGNORE_CASE, args.ignore_case),\
                       (cu.TRIM, args.trim)):
        if value is not None:
            overrides[key] = value
    return cu.get_diff_params(diff_config, overrides)


def write_diff(results, output, stream):
    if output == "edits":
        for type_, position, tokens in tokendiff.edit_script(results):
            stream.write(json.dumps([type_, position, list(tokens)]) + "\n")
    else:
        for record in tokendiff.to_records(results):
            stream.write(json.dumps(record) + "\n")


def main(argv=None, stream=None):
    """Diff the two given sources and print the result.

    Returns:
      0 if the sequences are equal, 1 if they differ and
      2 if something went wrong.
    """
    if stream is None:
        stream = sys.stdout
    args = cu.define_argparse().parse_args(argv)
    cu.set_verbosity(args.verbose)
    try:
        params = collect_params(args)
        old = lcu.load_sequence(args.old, params[cu.GRANULARITY],\
                                params[cu.ENCODING])
        new = lcu.load_sequence(args.new, params[cu.GRANULARITY],\
                                params[cu.ENCODING])
    except (OSError, ValueError, requests.RequestException,\
            cu.ConfigurationException) as error:
        logging.error("Unable to load the sequences: {}".format(error))
        return EXIT_TROUBLE

    equal_function = None
    if params[cu.IGNORE_CASE]:
        equal_function = ignore_case_equal
    results = lcs.diff(old, new, equal_function, params[cu.TRIM])
    counts = tokendiff.count_actions(results)
    logging.info("{} common, {} added, {} removed".format(counts["Common"],\
                                                         counts["Added"],\
                                                         counts["Removed"]))
    write_diff(results, params[cu.OUTPUT], stream)
    if counts["Added"] or counts["Removed"]:
        return EXIT_DIFFERENT
    return EXIT_EQUAL


if __name__ == "__main__":
    sys.exit(main())
