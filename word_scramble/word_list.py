"""Root words for new games.

A root word list is UTF-8 text with one word per line. Players spell their
answers from the root's letters, so every root must be a single run of
letters: no spaces, digits, hyphens or apostrophes.
"""

from collections.abc import Iterable
from importlib import resources
from pathlib import Path

from loguru import logger

BUNDLED_LIST = "start.txt"


def is_valid_root_word(word: str) -> bool:
    """Return True if ``word`` is non-empty, lowercase and letters only."""
    return bool(word) and word.isalpha() and word == word.lower()


class RootWordSource:
    """Loads the candidate root words a game picks from."""

    def parse(self, lines: Iterable[str], source: str = "<input>") -> list[str]:
        """Turn raw lines into a list of unique root words.

        Lines are stripped and lowercased, blank lines are skipped and
        repeats keep their first position.

        Args:
            lines: Raw lines, newlines included or not
            source: Name used in log and error messages

        Returns:
            Root words in first-seen order

        Raises:
            ValueError: If a line is not a valid root word
        """
        words = []
        seen = set()
        repeats = 0

        for line_num, line in enumerate(lines, start=1):
            word = line.strip().lower()
            if not word:
                continue

            if not is_valid_root_word(word):
                error_msg = (
                    f"Invalid root word at {source}:{line_num}: '{word}'. "
                    f"Root words must be a single run of letters."
                )
                logger.error(error_msg)
                raise ValueError(error_msg)

            if word in seen:
                repeats += 1
                continue
            seen.add(word)
            words.append(word)

        if repeats:
            logger.info(f"Skipped {repeats} repeated root word(s) in {source}")
        logger.info(f"Loaded {len(words)} root words from {source}")
        return words

    def load_from_file(self, file_path: str) -> list[str]:
        """Load root words from a file on disk.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not UTF-8 or holds an invalid root word
        """
        path = Path(file_path)

        if not path.is_file():
            error_msg = f"Root word list not found: {file_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        try:
            with path.open("r", encoding="utf-8") as f:
                return self.parse(f, source=str(path))
        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode root word list as UTF-8: {file_path}")
            encoding_error_msg = f"File encoding error: {e}"
            raise ValueError(encoding_error_msg) from e

    def load_bundled(self) -> list[str]:
        """Load the root word list shipped as package data."""
        bundled = resources.files("word_scramble").joinpath("data").joinpath(BUNDLED_LIST)
        with bundled.open("r", encoding="utf-8") as f:
            return self.parse(f, source=f"bundled {BUNDLED_LIST}")
