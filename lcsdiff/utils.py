import bz2
import logging

import mwparserfromhell as pfh
import requests
from nltk.tokenize import wordpunct_tokenize

GRANULARITIES = ("line", "word", "char", "wikitext")
REMOTE_PREFIXES = ("http://", "https://")


def read_text(filename, encoding="utf-8"):
    """Return the content of a text file.

    Files ending in `.bz2` are decompressed on the fly."""
    if filename.endswith(".bz2"):
        with bz2.open(filename, "rt", encoding=encoding) as bz2_fh:
            return bz2_fh.read()
    with open(filename, "r", encoding=encoding) as fh:
        return fh.read()


def fetch_text(url, timeout=30):
    """Download the text found at the given url.

    Raises:
      requests.HTTPError if the server does not answer
      with a successful status.
    """
    logging.info("Downloading sequence: {}".format(url))
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.text


def split_words(text):
    """Separate words and punctuation, dropping spaces."""
    if text is None:
        return []
    return wordpunct_tokenize(text)


def wikitext_words(wikitext):
    """Given a wikicode string, strip its markup and
    return the words of the rendered text.

    Note:
      Templates, tags and link targets are removed by
      mwparserfromhell, only the text shown to the reader
      is kept (the label of a wikilink, not its title).
    """
    if wikitext is None:
        return []
    content = pfh.parse(wikitext)
    return split_words(content.strip_code())


def to_sequence(text, granularity="line"):
    """Split a text into the sequence of elements to diff."""
    if granularity == "line":
        return text.splitlines()
    if granularity == "word":
        return split_words(text)
    if granularity == "char":
        return list(text)
    if granularity == "wikitext":
        return wikitext_words(text)
    raise ValueError("Unknown granularity: {}. Expected one of {}."
                     .format(granularity, ", ".join(GRANULARITIES)))


def load_sequence(source, granularity="line", encoding="utf-8"):
    """Load a sequence either from a local file or from a url.

    Args:
      source (str): path of the file (plain or bz2) or http(s) url.
      granularity (str): how the text is split, see `to_sequence`.
      encoding (str): encoding of local files.

    Returns:
      The list of elements of the sequence.
    """
    if granularity not in GRANULARITIES:
        raise ValueError("Unknown granularity: {}. Expected one of {}."
                         .format(granularity, ", ".join(GRANULARITIES)))
    if source.startswith(REMOTE_PREFIXES):
        text = fetch_text(source)
    else:
        text = read_text(source, encoding)
    sequence = to_sequence(text, granularity)
    logging.debug("Loaded {} elements from {}".format(len(sequence), source))
    return sequence
