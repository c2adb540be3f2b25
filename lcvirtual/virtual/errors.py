"""Errors raised while running a virtual contest command."""


class VirtualContestError(Exception):
    """Base class for failures reported to the user.

    Fatal errors stop the whole invocation; the others only stop the
    current action.
    """

    fatal = False


class FileNotFound(VirtualContestError):
    fatal = True

    def __init__(self, filename: str):
        super().__init__(f"File {filename} not exist!")
        self.filename = filename


class NotTestable(VirtualContestError):
    def __init__(self):
        super().__init__("not testable? please submit directly!")


class MissingTestCase(VirtualContestError):
    def __init__(self):
        super().__init__("missing testcase?")


class ProblemNotFound(VirtualContestError):
    def __init__(self, slug: str):
        super().__init__(f"Problem {slug} is not part of this contest")
        self.slug = slug


class IndexOutOfRange(VirtualContestError, IndexError):
    def __init__(self, index: int, size: int):
        if size:
            message = f"Question {index} out of range [0, {size - 1}]"
        else:
            message = f"Question {index} out of range, the contest has no questions"
        super().__init__(message)
        self.index = index
        self.size = size


class RemoteError(VirtualContestError):
    """Transport failure, non-2xx response or judge-side error body."""
