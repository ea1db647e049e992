import argparse
import re
import json
import logging

from lcsdiff.utils import GRANULARITIES

SPARK_APP_NAME = "appName"
SPARK_MASTER = "master"
SPARK_CONFIG = "config"
DEFAULT_SPARK_CONFIGURATIONS = {\
                                "master" : "local",\
                                "appName" : "SequenceDiff",\
                                "config" : {"spark.executor.memory" : "2g",\
                                            "spark.executor.instances" : "4",\
                                            "spark.executor.cores" : "1"}}

GRANULARITY = "granularity"
OUTPUT = "output"
IGNORE_CASE = "ignore-case"
ENCODING = "encoding"
TRIM = "trim"
OUTPUT_FORMATS = ("records", "edits")
DEFAULT_DIFF_CONFIGURATIONS = {\
                               GRANULARITY : "line",\
                               OUTPUT : "records",\
                               IGNORE_CASE : False,\
                               ENCODING : "utf-8",\
                               TRIM : True}


class ConfigurationException(Exception): pass


def set_verbosity(verbose=False):
    """Set the level of the root logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger().setLevel(level)


def spark_builder(builder, spark_config):
    """Build the Spark Session given the
    session builder and the configurations hash.

    Returns:
      A SparkSession with the configurations defined in the
      given Python hash.
    """
    try:
        builder.master(spark_config[SPARK_MASTER])\
               .appName(spark_config[SPARK_APP_NAME])
        for param_name, param_value in spark_config[SPARK_CONFIG].items():
            builder.config(param_name, param_value)
        return builder.getOrCreate()
    except KeyError as ke:
        logging.error("SPARK-CONF-FILE-ERROR: missing "\
                      + "required object: {}".format(ke))
        raise ke


def get_diff_params(diff_config=None, overrides=None):
    """Merge the given configurations over the default ones
    and check them.

    Args:
      diff_config: the hash read from the configuration file.
      overrides: values taking precedence over `diff_config`
        (the command line arguments).

    Returns:
      A new hash with every key of DEFAULT_DIFF_CONFIGURATIONS.

    Raises:
      ConfigurationException on unknown keys or invalid values.
    """
    params = dict(DEFAULT_DIFF_CONFIGURATIONS)
    if diff_config is None:
        diff_config = {}
    if not isinstance(diff_config, dict):
        logging.error("DIFF-CONF-FILE-ERROR: the configuration "\
                      + "must be a json object, found "\
                      + "{}".format(type(diff_config).__name__))
        raise ConfigurationException("The configuration must be "\
                                     + "a json object")
    diff_config = dict(diff_config)
    if overrides:
        diff_config.update(overrides)
    unknown = set(diff_config) - set(DEFAULT_DIFF_CONFIGURATIONS)
    if unknown:
        logging.error("DIFF-CONF-FILE-ERROR: unknown "\
                      + "parameters: {}".format(sorted(unknown)))
        raise ConfigurationException("Unknown parameters: {}"\
                                     .format(", ".join(sorted(unknown))))
    params.update(diff_config)
    if params[GRANULARITY] not in GRANULARITIES:
        logging.error("DIFF-CONF-FILE-ERROR: invalid "\
                      + "granularity: {}".format(params[GRANULARITY]))
        raise ConfigurationException("Invalid granularity: {}"\
                                     .format(params[GRANULARITY]))
    if params[OUTPUT] not in OUTPUT_FORMATS:
        logging.error("DIFF-CONF-FILE-ERROR: invalid "\
                      + "output: {}".format(params[OUTPUT]))
        raise ConfigurationException("Invalid output: {}"\
                                     .format(params[OUTPUT]))
    for flag in (IGNORE_CASE, TRIM):
        if not isinstance(params[flag], bool):
            logging.error("DIFF-CONF-FILE-ERROR: {} ".format(flag)\
                          + "must be true or false")
            raise ConfigurationException("{} must be a boolean"\
                                         .format(flag))
    return params


def remove_comments(file_stream):
    """Remove all lines starting with the
    # char.

    Returns:
       The uncommented lines joined in a single string.
    """
    uncommented_lines = []
    comment_reg = re.compile("^[^'\"]*?(('[^']*'|\"[^\"]*\")[^#'\"]*)*#")
    for line in file_stream:
        temp_line = line.strip()
        comment_found = comment_reg.search(temp_line)
        uncommented_line = temp_line
        if comment_found:
            uncommented_line = comment_found.group()[:-1]
        uncommented_lines.append(uncommented_line)
    return str.join("\n", uncommented_lines)


def get_config(conf_file):
    """Given a json file stream remove the comments
    present and return the equivalent python hash."""
    try:
        config_json_string = remove_comments(conf_file)
        return json.loads(config_json_string)
    except json.decoder.JSONDecodeError as decode_e:
        logging.error("CONF-FILE-ERROR: The given json "\
                      + "configuration file "\
                      + "is not properly formatted.")
        logging.error(decode_e)
        raise decode_e


def define_argparse():
    """Define the argument parser for the seqdiff program."""
    parser = argparse.ArgumentParser(description="Diff two sequences "\
                                     + "using their longest common "\
                                     + "subsequence.")
    parser.add_argument("old",\
                        help="The original sequence (file, .bz2 file "\
                        + "or http(s) url)")
    parser.add_argument("new",\
                        help="The modified sequence (file, .bz2 file "\
                        + "or http(s) url)")
    parser.add_argument("-c", "--conffile",\
                        help="The json file describing the diff "\
                        + "configurations",\
                        type=str)
    parser.add_argument("-g", "--granularity",\
                        help="How sources are split into elements",\
                        choices=GRANULARITIES)
    parser.add_argument("-f", "--output",\
                        help="Print every element of the diff (records) "\
                        + "or only the runs of changes (edits)",\
                        choices=OUTPUT_FORMATS)
    parser.add_argument("-i", "--ignore-case",\
                        help="Compare elements ignoring the case",\
                        action="store_true",\
                        default=None)
    parser.add_argument("--no-trim",\
                        help="Do not exclude the common prefix and "\
                        + "suffix from the LCS computation",\
                        dest="trim",\
                        action="store_false",\
                        default=None)
    parser.add_argument("-v", "--verbose",\
                        help="Log debug messages",\
                        action="store_true")
    return parser


def define_spark_argparse():
    """Define the argument parser for the batch diff program."""
    parser = argparse.ArgumentParser()
    parser.add_argument("-i", "--input",\
                        help="JSON lines file, one pair of sequences "\
                        + "per line",\
                        type=str,\
                        required=True)
    parser.add_argument("-o", "--output",\
                        help="The file where diffs are written",\
                        type=str,\
                        required=True)
    parser.add_argument("-c", "--spark-conffile",\
                        help="The file describing the configurations "\
                        + "used to build the Spark session", \
                        type=str)
    return parser
