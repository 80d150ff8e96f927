"""Game rules for Word Scramble.

A round starts from a root word. Every submission is checked, in order, against
the root itself, the words already played, the letters available in the root,
and finally a dictionary. Accepted words score their length. The host shows an
alert for any rejection and then calls :meth:`WordValidator.apply_penalty`.

All transitions take a :class:`GameState` and return a new one; nothing here
holds on to state between calls.
"""

import random
from collections.abc import Iterable
from enum import Enum

from loguru import logger
from pydantic import BaseModel, ConfigDict

from word_scramble.dictionary_client import DictionaryOracle

DEFAULT_ROOT_WORD = "cauliflower"
MAX_PENALTY = 6  # exclusive upper bound


class Sentiment(Enum):
    """Mood shown next to the score. Values are what the host displays."""

    NEUTRAL = "😐"
    HAPPY = "😀"
    ECSTATIC = "😊😱"
    BAD = "🤮🤮🤮"


class SubmissionOutcome(Enum):
    ACCEPTED = "accepted"
    REJECTED_SAME_AS_ROOT = "same_as_root"
    REJECTED_DUPLICATE = "duplicate"
    REJECTED_IMPOSSIBLE_LETTERS = "impossible_letters"
    REJECTED_NOT_A_WORD = "not_a_word"


class GameState(BaseModel):
    """Snapshot of one round.

    Attributes:
        root_word: Word whose letters bound every submission
        used_words: Accepted words, most recent first
        score: Running score; penalties can push it below zero
        sentiment: Mood derived from the score at the last accepted word
        negative: Set by a penalty, cleared by the next accepted word
    """

    model_config = ConfigDict(frozen=True)

    root_word: str
    used_words: tuple[str, ...] = ()
    score: int = 0
    sentiment: Sentiment = Sentiment.NEUTRAL
    negative: bool = False


class SubmissionResult(BaseModel):
    """What happened to a single submitted word."""

    model_config = ConfigDict(frozen=True)

    outcome: SubmissionOutcome
    word: str
    length_bonus: int = 0

    @property
    def accepted(self) -> bool:
        return self.outcome is SubmissionOutcome.ACCEPTED

    @property
    def title(self) -> str:
        """Alert title for a rejection (empty for accepted words)."""
        return _ALERT_TITLES.get(self.outcome, "")

    def message(self, root_word: str) -> str:
        """Alert body for a rejection (empty for accepted words).

        Args:
            root_word: Root word of the round, quoted back for letter errors
        """
        template = _ALERT_MESSAGES.get(self.outcome, "")
        return template.format(root_word=root_word)


_ALERT_TITLES = {
    SubmissionOutcome.REJECTED_SAME_AS_ROOT: "Come on, man!",
    SubmissionOutcome.REJECTED_DUPLICATE: "Word used already",
    SubmissionOutcome.REJECTED_IMPOSSIBLE_LETTERS: "Word not possible",
    SubmissionOutcome.REJECTED_NOT_A_WORD: "Not a real word",
}

_ALERT_MESSAGES = {
    SubmissionOutcome.REJECTED_SAME_AS_ROOT: "Don't just put the same word in, that's lame!",
    SubmissionOutcome.REJECTED_DUPLICATE: "Be more original, darn it!",
    SubmissionOutcome.REJECTED_IMPOSSIBLE_LETTERS: (
        "Check the word again. You must only use the letters in the original word. "
        "The original word was {root_word}."
    ),
    SubmissionOutcome.REJECTED_NOT_A_WORD: (
        "Your word does not appear in the English dictionary. Try again."
    ),
}


def normalize_word(raw: str) -> str:
    """Lowercase a raw submission and trim surrounding whitespace."""
    return raw.lower().strip()


def is_possible(word: str, root: str) -> bool:
    """Check that ``word`` can be spelled with the letters of ``root``.

    Each letter of ``word`` uses up one matching letter of ``root``, so a
    letter can only appear as many times as it does in the root.

    Example:
        >>> is_possible("kat", "tack")
        True
        >>> is_possible("tacks", "tack")
        False
    """
    remaining = list(root)

    for letter in word:
        if letter not in remaining:
            return False
        remaining.remove(letter)

    return True


def sentiment_analysis(score: int) -> Sentiment:
    """Map a score to the mood shown beside it."""
    if score == 0:
        return Sentiment.NEUTRAL
    elif 0 < score <= 3:
        return Sentiment.HAPPY
    elif score > 3:
        return Sentiment.ECSTATIC
    else:
        return Sentiment.BAD


class WordValidator:
    """Runs the rules of a Word Scramble round.

    Attributes:
        oracle: Decides whether a string is a real word
        rng: Source of randomness for root selection and penalties
        fallback_root_word: Root used when the word list has no usable entries
        language: Language passed to the oracle
    """

    def __init__(
        self,
        oracle: DictionaryOracle,
        rng: random.Random | None = None,
        fallback_root_word: str = DEFAULT_ROOT_WORD,
        language: str = "en",
    ):
        """Initialize the validator.

        Args:
            oracle: Dictionary used for the final "is it a real word" check
            rng: Seedable random source; a fresh unseeded one if None
            fallback_root_word: Root used when the word list is empty
            language: Language code passed to the oracle

        Raises:
            ValueError: If fallback_root_word is empty or whitespace-only
        """
        fallback = normalize_word(fallback_root_word)
        if not fallback:
            msg = "fallback root word cannot be empty"
            logger.error(msg)
            raise ValueError(msg)

        self.oracle = oracle
        self.rng = rng if rng is not None else random.Random()
        self.fallback_root_word = fallback
        self.language = language

    def start_game(self, word_list: Iterable[str]) -> GameState:
        """Pick a root word and return a fresh game state.

        Blank entries are ignored. If nothing usable is left, the fallback
        root word is used instead.

        Args:
            word_list: Candidate root words, already loaded

        Returns:
            A new state with no used words, score 0 and neutral sentiment
        """
        candidates = [word for word in (normalize_word(w) for w in word_list) if word]

        if candidates:
            root_word = self.rng.choice(candidates)
        else:
            logger.warning(
                f"No usable root words supplied, falling back to '{self.fallback_root_word}'"
            )
            root_word = self.fallback_root_word

        logger.debug(f"Starting new game with root word '{root_word}' ({len(candidates)} candidates)")
        return GameState(root_word=root_word)

    def submit_word(
        self, state: GameState, raw: str
    ) -> tuple[GameState, SubmissionResult | None]:
        """Validate a submission and apply it to the game state.

        Args:
            state: Current game state
            raw: Text as typed by the player

        Returns:
            The new state and the result. Blank input returns the state
            untouched and None. Rejections also return the state untouched.
        """
        word = normalize_word(raw)
        if not word:
            logger.debug("Ignoring empty submission")
            return state, None

        outcome = self._check(state, word)
        if outcome is not SubmissionOutcome.ACCEPTED:
            logger.info(f"Rejected '{word}' for root '{state.root_word}': {outcome.value}")
            return state, SubmissionResult(outcome=outcome, word=word)

        score = state.score + len(word)
        new_state = state.model_copy(
            update={
                "used_words": (word, *state.used_words),
                "score": score,
                "sentiment": sentiment_analysis(score),
                "negative": False,
            }
        )
        logger.info(f"Accepted '{word}' (+{len(word)}), score is now {score}")
        return new_state, SubmissionResult(outcome=outcome, word=word, length_bonus=len(word))

    def apply_penalty(self, state: GameState) -> GameState:
        """Deduct a random 0-5 points after a rejection has been shown.

        Sentiment is left as it was; only an accepted word recomputes it.
        """
        penalty = self.rng.randrange(0, MAX_PENALTY)
        logger.info(f"Applying penalty of {penalty} point(s)")
        return state.model_copy(update={"score": state.score - penalty, "negative": True})

    def _check(self, state: GameState, word: str) -> SubmissionOutcome:
        if word == state.root_word:
            return SubmissionOutcome.REJECTED_SAME_AS_ROOT
        if word in state.used_words:
            return SubmissionOutcome.REJECTED_DUPLICATE
        if not is_possible(word, state.root_word):
            return SubmissionOutcome.REJECTED_IMPOSSIBLE_LETTERS
        if not self.oracle.is_real(word, language=self.language):
            return SubmissionOutcome.REJECTED_NOT_A_WORD
        return SubmissionOutcome.ACCEPTED
