class ReportError(Exception):
    """Base class for every failure raised while building a sales report."""


class ValidationError(ReportError, ValueError):
    """The dataset or the options are malformed; nothing was computed."""


class UnknownReferenceError(ReportError, LookupError):
    """A purchase record points at a seller or product that is not in the dataset."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"Unknown {kind} '{key}' referenced by purchase records")


class PolicyError(ReportError, TypeError):
    """An injected policy returned something that is not a finite number."""

    def __init__(self, policy: str, value: object) -> None:
        self.policy = policy
        self.value = value
        super().__init__(f"Policy '{policy}' returned {value!r}, expected a number")
