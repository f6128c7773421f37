"""Error types raised while building and tearing down runners and suites.

Assertion failures are never exceptions: they are recorded and reported.
Everything here describes a problem with the harness configuration itself.
"""


class StestError(Exception):
    """Base class for all stest errors."""


class ConfigurationError(StestError):
    """A suite or runner could not be built as requested."""


class InvalidSuiteNameError(ConfigurationError, ValueError):
    """Suite name is missing or empty."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Suite name must be a non-empty string, got {name!r}")


class InvalidTestError(ConfigurationError, TypeError):
    """Test entry is not callable or its name cannot be determined."""


class OwnershipError(ConfigurationError):
    """Suite is owned by a runner and cannot be registered, mutated or released by the caller."""


class RegistrationError(ConfigurationError):
    """Growing a registry failed; previously registered items are untouched."""


class ReleasedError(StestError):
    """Runner or suite was used after it was released."""
