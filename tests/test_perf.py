# tests/test_perf.py - rough perf check over a generated word list
import random
import string
import time

import pytest

from fuzzy_trie import Trie, add_from_file

RUNS = 20


@pytest.fixture(scope="module")
def words(tmp_path_factory):
    rng = random.Random(1234)
    out = sorted({
        "".join(rng.choice(string.ascii_lowercase) for _ in range(rng.randint(3, 10)))
        for _ in range(20000)
    })
    path = tmp_path_factory.mktemp("dict") / "words"
    path.write_text("\n".join(out) + "\n", encoding="utf-8")
    return str(path), out


@pytest.fixture(scope="module")
def loaded(words):
    path, _ = words
    t = Trie()
    t0 = time.time()
    add_from_file(t, path)
    print(f"load: {round((time.time() - t0) * 1000, 2)} ms for {len(t)} words")
    return t


def _avg_ms(fn):
    times = []
    for _ in range(RUNS):
        t0 = time.time()
        fn()
        times.append(time.time() - t0)
    return round(sum(times) / len(times) * 1000, 2)


def test_keys_perf(loaded, words):
    _, expected = words
    avg = _avg_ms(loaded.keys)
    print(f"keys avg latency: {avg} ms over {RUNS} runs")
    assert loaded.keys() == expected


def test_prefix_search_perf(loaded, words):
    _, expected = words
    avg = _avg_ms(lambda: loaded.prefix_search("fo"))
    print(f"prefix_search('fo') avg latency: {avg} ms over {RUNS} runs")
    assert loaded.prefix_search("fo") == [w for w in expected if w.startswith("fo")]


def test_fuzzy_search_perf(loaded, words):
    _, expected = words
    avg = _avg_ms(lambda: loaded.fuzzy_search("fs"))
    print(f"fuzzy_search('fs') avg latency: {avg} ms over {RUNS} runs")
    hits = {w for w in expected if "f" in w and "s" in w[w.index("f") + 1:]}
    assert set(loaded.fuzzy_search("fs")) == hits
