"""
Round engine for Unscramble.

One RoundEngine holds the state of one game session: the score, how many
words have been dealt, which words were already used, and the current word
with its scrambled form. Callers drive it with submit_guess, advance_or_end
and reset, and watch score, round count and scrambled word through observe().
"""
import logging
import random

from config import GAME_CONFIG
from events import ObservableValue, SCORE, ROUND_COUNT, SCRAMBLED_WORD
from words import WORD_LIST

logger = logging.getLogger(__name__)

MAX_WORDS = GAME_CONFIG['max_words']
SCORE_INCREASE = GAME_CONFIG['score_increase']


class ConfigurationError(ValueError):
    """The word list or round settings cannot support a full session."""


def scramble_word(word, rng=random):
    """Jumbles the letters of a word."""
    shuffled_word = list(word)
    rng.shuffle(shuffled_word)
    # Make sure the jumbled word is different from the original
    while ''.join(shuffled_word) == word:
        rng.shuffle(shuffled_word)
    return ''.join(shuffled_word)


def validate_config(word_list, max_words, score_increase):
    """
    Check that a session can always be dealt to the end.

    Raises:
        ConfigurationError: if the list is empty or has duplicates, if a word
            cannot be scrambled into something different, if there are fewer
            words than rounds, or if the round settings are not positive.
    """
    if not word_list:
        raise ConfigurationError("Word list is empty")

    seen = set()
    for word in word_list:
        if not isinstance(word, str) or not word:
            raise ConfigurationError(f"Invalid word in word list: {word!r}")
        if len(set(word)) < 2:
            raise ConfigurationError(f"Word cannot be scrambled: {word!r}")
        if word in seen:
            raise ConfigurationError(f"Duplicate word in word list: {word!r}")
        seen.add(word)

    if not isinstance(max_words, int) or max_words < 1:
        raise ConfigurationError(f"max_words must be a positive integer, got {max_words!r}")
    if max_words > len(seen):
        raise ConfigurationError(
            f"max_words ({max_words}) exceeds the number of distinct words ({len(seen)})"
        )
    if not isinstance(score_increase, int) or score_increase < 1:
        raise ConfigurationError(
            f"score_increase must be a positive integer, got {score_increase!r}"
        )


class RoundEngine:
    """Score and round progression for a single game session."""

    OBSERVABLES = (SCORE, ROUND_COUNT, SCRAMBLED_WORD)

    def __init__(self, word_list=WORD_LIST, max_words=MAX_WORDS,
                 score_increase=SCORE_INCREASE, rng=None):
        self._init_state(word_list, max_words, score_increase, rng)
        self._deal_next_word()

    def _init_state(self, word_list, max_words, score_increase, rng):
        """Set up an engine with no word dealt yet."""
        validate_config(word_list, max_words, score_increase)
        self.word_list = tuple(word_list)
        self.max_words = max_words
        self.score_increase = score_increase
        self.rng = rng or random.Random()

        self._observables = {
            SCORE: ObservableValue(0),
            ROUND_COUNT: ObservableValue(0),
            SCRAMBLED_WORD: ObservableValue(),
        }
        self.used_words = set()
        self.current_word = None
        self._solved = False
        self._finished = False

    # ===== Observable state =====

    @property
    def score(self):
        return self._observables[SCORE].value

    @property
    def round_count(self):
        return self._observables[ROUND_COUNT].value

    @property
    def current_scrambled(self):
        return self._observables[SCRAMBLED_WORD].value

    @property
    def is_game_over(self):
        return self._finished

    def observe(self, name, callback, replay=True):
        """
        Subscribe to one of OBSERVABLES.

        The callback runs synchronously on every change. With replay, it is
        called right away with the latest value. Returns an unsubscribe function.
        """
        if name not in self._observables:
            raise KeyError(f"Unknown observable: {name}")
        return self._observables[name].subscribe(callback, replay=replay)

    @property
    def state(self):
        """Snapshot of what a player may see. The answer is not included."""
        return {
            'score': self.score,
            'round_count': self.round_count,
            'max_words': self.max_words,
            'scrambled_word': self.current_scrambled,
            'words_used': len(self.used_words),
            'solved': self._solved,
            'game_over': self._finished,
        }

    # ===== Operations =====

    def _deal_next_word(self):
        """Pick an unused word, scramble it and start the next round."""
        unused = [word for word in self.word_list if word not in self.used_words]
        if not unused:
            # validate_config rules this out for a session of max_words rounds
            raise ConfigurationError("Word list exhausted")

        word = self.rng.choice(unused)
        scrambled = scramble_word(word, self.rng)

        self.used_words.add(word)
        self.current_word = word
        self._solved = False
        self._observables[SCRAMBLED_WORD].set(scrambled)
        self._observables[ROUND_COUNT].set(self.round_count + 1)
        logger.debug("Dealt round %d/%d: %s", self.round_count, self.max_words, scrambled)

    def submit_guess(self, candidate):
        """
        Check a guess against the current word, ignoring case.

        A correct guess adds score_increase to the score; each round scores
        at most once. Returns False for a wrong, repeated or empty guess and
        for any guess after the session has ended.
        """
        if self._finished or self._solved or not candidate:
            return False
        if candidate.lower() != self.current_word.lower():
            return False

        self._solved = True
        self._observables[SCORE].set(self.score + self.score_increase)
        return True

    def advance_or_end(self):
        """Deal the next word if rounds remain. Returns False once the session is over."""
        if self.round_count < self.max_words:
            self._deal_next_word()
            return True

        if not self._finished:
            self._finished = True
            logger.info("Session complete: score %d over %d rounds", self.score, self.round_count)
        return False

    def reset(self):
        """Start a fresh session on this engine."""
        logger.info("Resetting session (previous score %d)", self.score)
        self._finished = False
        self.used_words.clear()
        self._observables[SCORE].set(0)
        self._observables[ROUND_COUNT].set(0)
        self._deal_next_word()

    # ===== Serialisation =====

    def to_dict(self):
        return {
            'score': self.score,
            'round_count': self.round_count,
            'used_words': sorted(self.used_words),
            'current_word': self.current_word,
            'current_scrambled': self.current_scrambled,
            'solved': self._solved,
            'finished': self._finished,
        }

    @classmethod
    def from_dict(cls, data, word_list=WORD_LIST, max_words=MAX_WORDS,
                  score_increase=SCORE_INCREASE, rng=None):
        """
        Rebuild an engine from to_dict() output.

        Raises:
            ValueError: if the data is malformed or describes a state the
                engine could not have reached.
        """
        if not isinstance(data, dict):
            raise ValueError("Engine state must be a dict")

        engine = cls.__new__(cls)
        engine._init_state(word_list, max_words, score_increase, rng)
        try:
            score = int(data['score'])
            round_count = int(data['round_count'])
            used_words = {str(w) for w in data['used_words']}
            current_word = str(data['current_word'])
            current_scrambled = str(data['current_scrambled'])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed engine state: {e}") from e

        if not used_words <= set(engine.word_list):
            raise ValueError("Engine state uses words outside the word list")
        if current_word not in used_words:
            raise ValueError("Current word is not among the used words")
        if round_count != len(used_words) or not 1 <= round_count <= max_words:
            raise ValueError(f"Inconsistent round count: {round_count}")
        solved = bool(data.get('solved', False))
        # Earlier rounds score at most once each; the current round only if solved
        scored_rounds = round_count if solved else round_count - 1
        if score < 0 or score % score_increase or score > scored_rounds * score_increase:
            raise ValueError(f"Inconsistent score: {score}")
        if solved and score < score_increase:
            raise ValueError("Round marked solved but its points are missing")
        if sorted(current_scrambled) != sorted(current_word) or current_scrambled == current_word:
            raise ValueError("Scrambled word does not match the current word")

        finished = bool(data.get('finished', False))
        if finished and round_count < max_words:
            raise ValueError("Session marked finished before its last round")

        engine.used_words = used_words
        engine.current_word = current_word
        engine._solved = solved
        engine._finished = finished
        engine._observables[SCORE].set(score)
        engine._observables[ROUND_COUNT].set(round_count)
        engine._observables[SCRAMBLED_WORD].set(current_scrambled)
        return engine
