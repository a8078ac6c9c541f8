class VoteError(Exception):
    pass


class InvalidChoice(VoteError):
    """
    Vote value outside the allowed set. Nothing was persisted.
    """

    def __init__(self, choice):
        super().__init__(f"Invalid vote: {choice!r}")
        self.choice = choice


class PersistenceCorruption(VoteError):
    """
    Backing file exists but could not be read or decoded.
    Only ever raised and caught inside CounterStore.
    """


class PersistenceWriteFailure(VoteError):
    """
    Save did not complete; the previous file is left in place.
    """
