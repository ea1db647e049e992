import json

import spark_interface as si


class FakeRDD:
    def __init__(self, items):
        self.items = list(items)

    def map(self, function):
        return FakeRDD(function(item) for item in self.items)

    def collect(self):
        return self.items


class FakeContext:
    def parallelize(self, items, numSlices=None):
        return FakeRDD(items)


def test_diff_entry_orders_versions():
    entry = ("page", (("2018-02", ["a", "b"]), ("2018-01", ["a", "c", "b"])))
    assert si.diff_entry(entry) == ("page", "2018-01", "2018-02",
                                    (("DEL", 1, ("c",)),))


def test_parse_pair():
    line = json.dumps({"key": "k", "old": [1, 2], "new": [2]})
    assert si.parse_pair(line) == ("k", ((0, [1, 2]), (1, [2])))


def test_jsonify():
    diff_tuple = ("k", 0, 1, (("DEL", 0, (1,)),))
    assert json.loads(si.jsonify(diff_tuple)) == {"key": "k",
                                                  "old_version": 0,
                                                  "new_version": 1,
                                                  "edits": [["DEL", 0, [1]]]}


def test_diff_pairs():
    entries = [("a", ((0, [1, 2, 3]), (1, [1, 3]))),
               ("b", ((0, []), (1, ["x"])))]
    assert si.diff_pairs(FakeContext(), entries) == [
        ("a", 0, 1, (("DEL", 1, (2,)),)),
        ("b", 0, 1, (("INS", 0, ("x",)),)),
    ]


class FakeSession:
    def __init__(self):
        self.sparkContext = FakeContext()
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeBuilder:
    def __init__(self):
        self.session = FakeSession()
        self.settings = {}

    def master(self, value):
        self.settings["master"] = value
        return self

    def appName(self, value):
        self.settings["appName"] = value
        return self

    def config(self, name, value):
        self.settings[name] = value
        return self

    def getOrCreate(self):
        return self.session


class FakeSparkSession:
    builder = None


def test_main(tmp_path, monkeypatch):
    builder = FakeBuilder()
    FakeSparkSession.builder = builder
    monkeypatch.setattr(si, "SparkSession", FakeSparkSession)
    pairs = tmp_path / 'pairs.jsonl'
    pairs.write_text(json.dumps({"key": "a", "old": ["x", "y"], "new": ["x"]}) + "\n"
                     + "\n"
                     + json.dumps({"key": "b", "old": [], "new": [1],
                                   "old_version": 3, "new_version": 2}) + "\n")
    output = tmp_path / 'diffs.jsonl'
    si.main(["-i", str(pairs), "-o", str(output)])
    lines = [json.loads(line) for line in output.read_text().splitlines()]
    assert lines == [
        {"key": "a", "old_version": 0, "new_version": 1, "edits": [["DEL", 1, ["y"]]]},
        {"key": "b", "old_version": 2, "new_version": 3, "edits": [["DEL", 0, [1]]]},
    ]
    assert builder.settings["appName"] == "SequenceDiff"
    assert builder.session.stopped
