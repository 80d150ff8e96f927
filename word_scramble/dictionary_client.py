"""Dictionary lookups for deciding whether a submission is a real word.

Two backends are provided: a local word file (such as ``/usr/share/dict/words``)
and the Merriam-Webster dictionary API, reached through a cached HTTP session.
"""

import time
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import requests
from loguru import logger
from requests_cache import CachedSession

SUPPORTED_LANGUAGES = ("en",)


class DictionaryOracle(Protocol):
    """Anything that can say whether a string is a real word."""

    def is_real(self, word: str, language: str = "en") -> bool: ...


def _check_language(language: str) -> None:
    if language not in SUPPORTED_LANGUAGES:
        msg = f"Unsupported dictionary language: {language}"
        logger.error(msg)
        raise ValueError(msg)


class WordListDictionary:
    """Dictionary backed by an in-memory set of known words."""

    def __init__(self, words: Iterable[str], language: str = "en"):
        _check_language(language)
        self.language = language
        self._words = frozenset(word.strip().lower() for word in words if word.strip())
        logger.debug(f"Initialized WordListDictionary with {len(self._words)} words")

    @classmethod
    def from_file(cls, file_path: str, language: str = "en") -> "WordListDictionary":
        """Build a dictionary from a file with one word per line.

        Unlike root word lists, dictionary files are not validated: proper
        nouns, digits and punctuation are kept and simply never match.

        Args:
            file_path: Path to the dictionary file
            language: Language of the words in the file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not valid UTF-8
        """
        path = Path(file_path)

        if not path.exists():
            error_msg = f"Dictionary file not found: {file_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading dictionary from: {file_path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                dictionary = cls(f, language=language)
        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode dictionary with UTF-8 encoding: {file_path}")
            encoding_error_msg = f"File encoding error: {e}"
            raise ValueError(encoding_error_msg) from e

        logger.info(f"Loaded {len(dictionary)} dictionary words from {file_path}")
        return dictionary

    def __len__(self) -> int:
        return len(self._words)

    def is_real(self, word: str, language: str = "en") -> bool:
        _check_language(language)
        return word.strip().lower() in self._words


class MerriamWebsterClient:
    """Client for the Merriam-Webster dictionary API.

    A word counts as real when the API returns at least one entry for it.
    The client uses a cached session so repeated lookups stay local, and
    retries timeouts with exponential backoff.

    Attributes:
        api_key: Merriam-Webster API key
        session: Cached HTTP session for making requests
    """

    BASE_URL = "https://dictionaryapi.com/api/v3/references/sd2/json"
    MAX_RETRIES = 3
    RETRY_DELAY = 2  # seconds

    def __init__(self, api_key: str, session: CachedSession):
        """Initialize the Merriam-Webster client.

        Args:
            api_key: Merriam-Webster API key
            session: CachedSession instance for making HTTP requests

        Raises:
            ValueError: If api_key is empty or whitespace-only
        """
        if not api_key or not api_key.strip():
            msg = "API key cannot be empty"
            logger.error(msg)
            raise ValueError(msg)

        self.api_key = api_key.strip()
        self.session = session
        logger.debug(f"Initialized MerriamWebsterClient with API key: {self.api_key[:8]}...")

    def get_word_data(self, word: str) -> list | None:
        """Fetch word entries from the Merriam-Webster API.

        Args:
            word: The word to look up

        Returns:
            List of entries, or None if the word is not in the dictionary
            (the API answers with spelling suggestions or nothing at all)

        Raises:
            ValueError: If word is empty
            requests.Timeout: If all retries fail due to timeout
            requests.HTTPError: If API returns non-200 status code
        """
        if not word or not word.strip():
            msg = "word cannot be empty"
            logger.error(msg)
            raise ValueError(msg)

        word = word.strip()
        url = f"{self.BASE_URL}/{word}"
        params = {"key": self.api_key}

        for attempt in range(self.MAX_RETRIES):
            try:
                logger.debug(
                    f"Fetching word data for '{word}' (attempt {attempt + 1}/{self.MAX_RETRIES})"
                )
                response = self.session.get(url, params=params, timeout=10)
                logger.debug(f"Response status code: {response.status_code}")
                response.raise_for_status()

                data = response.json()

                # Unknown words come back as a list of suggestion strings
                if not data or isinstance(data[0], str):
                    logger.info(f"Word '{word}' not found in dictionary. Suggestions: {data}")
                    return None

                logger.info(f"Successfully fetched data for word '{word}'")
                return data

            except requests.Timeout:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.RETRY_DELAY * (2**attempt)
                    logger.warning(
                        f"Timeout fetching '{word}' on attempt {attempt + 1}, "
                        f"retrying in {delay}s..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(f"Failed to fetch '{word}' after {self.MAX_RETRIES} attempts")
                    raise

            except requests.HTTPError:
                logger.error(f"HTTP error fetching data for '{word}'")
                raise
        return None

    def is_real(self, word: str, language: str = "en") -> bool:
        _check_language(language)
        return self.get_word_data(word) is not None
