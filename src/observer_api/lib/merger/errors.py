"""Application merge exceptions."""


class MergeError(Exception):
    """Base class for application merge errors."""


class InvalidMergeInput(MergeError):
    """The list of applications to merge is empty or malformed."""
