"""Plain ``assert`` statements, recorded without stopping the test.

The command line loads this module with its asserts rewritten:

    stest run examples/plain_asserts.py:build_runner --failures-only
"""

from stest import Runner, Suite


def parse_pair(text):
    key, _, value = text.partition("=")
    return key.strip(), value.strip()


def parsing():
    key, value = parse_pair("name = stest")
    assert key == "name"
    assert value == "stest", f"unexpected value {value!r}"
    assert value != key


def missing_separator():
    key, value = parse_pair("name")
    assert key == "name"
    assert value, "a pair without '=' has no value"


def build_runner():
    suite = Suite("parsing")
    suite.add_tests([parsing, missing_separator])

    runner = Runner()
    runner.add_suite(suite)
    return runner
