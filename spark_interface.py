import json
import logging

import cli_utils as cu
import lcsdiff.diff as tokendiff
from lcsdiff import lcs

from pyspark.sql import SparkSession

logging.getLogger().setLevel(logging.INFO)


def diff_entry(entry):
    """Given an entry `(key, ((version1, sequence1), (version2, sequence2)))`
    diff the older version against the newer one.

    Returns:
      A tuple <key, old_version, new_version, edits> where
      edits are the runs of changes as computed by
      `lcsdiff.diff.edit_script`.
    """
    key, (first, second) = entry
    if first[0] <= second[0]:
        entry_current, entry_successive = first, second
    else:
        entry_current, entry_successive = second, first

    version_current, sequence_current = entry_current
    version_successive, sequence_successive = entry_successive
    results = lcs.diff(sequence_current, sequence_successive)
    return key, version_current, version_successive,\
        tuple(tokendiff.edit_script(results))


def parse_pair(json_line):
    """Turn a JSON line of the input file into an entry
    for `diff_entry`."""
    pair = json.loads(json_line)
    return pair["key"],\
        ((pair.get("old_version", 0), pair["old"]),\
         (pair.get("new_version", 1), pair["new"]))


def jsonify(diff_tuple):
    key, version_current, version_successive, edits = diff_tuple
    return json.dumps({"key": key,\
                       "old_version": version_current,\
                       "new_version": version_successive,\
                       "edits": [[type_, position, list(tokens)]\
                                 for type_, position, tokens in edits]})


def diff_pairs(spark_context, entries, num_slices=None):
    """Diff every entry in parallel.

    Note:
      Each diff is independent from the others, so
      no ordering is needed between partitions.
    """
    entries_rdd = spark_context.parallelize(entries, numSlices=num_slices)
    return entries_rdd.map(diff_entry).collect()


def main(argv=None):
    args = cu.define_spark_argparse().parse_args(argv)
    spark_config = cu.DEFAULT_SPARK_CONFIGURATIONS
    if args.spark_conffile:
        with open(args.spark_conffile, "r") as conf_fh:
            spark_config = cu.get_config(conf_fh)

    with open(args.input, "r") as input_fh:
        entries = [parse_pair(line) for line in input_fh\
                   if len(line.strip()) > 0]

    spark = cu.spark_builder(SparkSession.builder, spark_config)
    count = 0
    with open(args.output, "w") as fh:
        for diff_tuple in diff_pairs(spark.sparkContext, entries):
            fh.write(jsonify(diff_tuple) + "\n")
            count += 1
    logging.info("{} diffs written in {}".format(count, args.output))
    spark.stop()


if __name__ == "__main__":
    main()
