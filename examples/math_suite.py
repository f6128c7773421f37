"""Two suites run through a runner, with the helper assertions.

Run directly:

    python examples/math_suite.py

or through the command line:

    stest run examples/math_suite.py
"""

from stest import Runner, Suite, assert_eq, assert_neq, assert_str_eq, assert_true, test


def add(a: int, b: int) -> int:
    return a + b


def greet(name: str) -> str:
    return f"hello {name}"


@test
def two_plus_two():
    assert_eq(add(2, 2), 4)


@test
def compare_strings():
    # Fails on purpose; the run keeps going.
    assert_str_eq("a", "b")


@test
def greeting():
    message = greet("bob")
    assert_str_eq(message, "hello bob")
    assert_neq(message, "")
    assert_true(message.startswith("hello"))


math = Suite("math")
math.add_tests([two_plus_two, compare_strings])

strings = Suite("strings")
strings.add_test(greeting)

runner = Runner()
runner.add_suites([math, strings])


if __name__ == "__main__":
    with runner:
        result = runner.run()
    raise SystemExit(0 if result.ok else 1)
