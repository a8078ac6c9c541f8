import logging
from contextlib import nullcontext

from .config import CHOICES
from .errors import InvalidChoice
from .models import Counter, coerce_count
from .state import CounterStore

logger = logging.getLogger(__name__)


class VoteService:
    def __init__(self, store: CounterStore, serialize: bool = True):
        self.store = store
        self.serialize = serialize

    def cast_vote(self, choice) -> Counter:
        """
        Add one vote for `choice` and return the new tally.
        Raises InvalidChoice (and writes nothing) for anything but an exact
        option name. With serialize=False two overlapping calls can lose
        an update.
        """
        if not isinstance(choice, str) or choice not in CHOICES:
            raise InvalidChoice(choice)

        with self.store.lock if self.serialize else nullcontext():
            state = self.store.load()
            current = coerce_count(getattr(state, choice))
            updated = state.model_copy(update={choice: current + 1})
            self.store.save(updated)

        logger.info("Vote recorded for %s -> %s", choice, updated.model_dump())
        return updated


class ResultService:
    def __init__(self, store: CounterStore):
        self.store = store

    def get_results(self) -> Counter:
        return self.store.load()
