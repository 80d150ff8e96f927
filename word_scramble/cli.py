"""Command-line interface for Word Scramble."""

import random
from datetime import timedelta
from pathlib import Path

import click
import requests
import requests_cache
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from word_scramble import __version__, add_log_file, install_exception_hook
from word_scramble.config import Settings, get_settings
from word_scramble.dictionary_client import (
    DictionaryOracle,
    MerriamWebsterClient,
    WordListDictionary,
)
from word_scramble.game import GameState, SubmissionResult, WordValidator
from word_scramble.word_list import RootWordSource, is_valid_root_word

console = Console()

SYSTEM_DICTIONARY = Path("/usr/share/dict/words")
NEW_GAME_COMMAND = ":new"
QUIT_COMMAND = ":quit"


def configure_verbose_logging() -> None:
    """Configure verbose debug logging."""
    logger.remove()
    logger.add(
        lambda msg: console.print(msg, end="", markup=False, highlight=False),
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    console.print("[dim]Debug logging enabled[/dim]")


def configure_quiet_logging() -> None:
    """Configure quiet logging - suppress library logs and only show warnings/errors."""
    logger.remove()
    logger.add(lambda msg: None, level="WARNING")

    # Suppress noisy library loggers
    import logging
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests_cache").setLevel(logging.WARNING)


def setup(verbose: bool) -> Settings:
    """Configure logging and load settings for a command."""
    if verbose:
        configure_verbose_logging()
    else:
        configure_quiet_logging()

    settings = load_settings_or_abort()
    if settings.log_file:
        add_log_file(settings.log_file, settings.log_level)
    return settings


def load_settings_or_abort() -> Settings:
    """Load settings from the environment/.env or abort with a helpful error message."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[bold red]Error:[/bold red] Invalid configuration")
        console.print("\nCheck the values in your environment or .env file, e.g.:")
        console.print("  MW_API_KEY=your-api-key-here\n")
        console.print(f"Details: {e}")
        raise click.Abort from e


def validate_word_file(words_file: Path) -> None:
    """Validate that the word file exists and is a file."""
    if not words_file.exists():
        console.print(f"[bold red]Error:[/bold red] Word file not found: {words_file}")
        raise click.Abort

    if not words_file.is_file():
        console.print(
            f"[bold red]Error:[/bold red] Path is not a file (it's a directory): {words_file}"
        )
        raise click.Abort


def load_root_words(words_file: Path | None, settings: Settings) -> list[str]:
    """Load the root word list from the given file, the settings, or the bundled list."""
    source = RootWordSource()

    if words_file is None and settings.start_words_file:
        words_file = Path(settings.start_words_file)

    try:
        if words_file is None:
            return source.load_bundled()
        validate_word_file(words_file)
        return source.load_from_file(str(words_file))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to load word list: {e}")
        raise click.Abort from e


def build_oracle(dictionary_file: Path | None, settings: Settings) -> DictionaryOracle:
    """Pick the dictionary used to check submissions.

    Preference order: the --dictionary option, DICTIONARY_FILE, the
    Merriam-Webster API when MW_API_KEY is set, then the system word list.
    """
    if dictionary_file is None and settings.dictionary_file:
        dictionary_file = Path(settings.dictionary_file)

    if dictionary_file is None and settings.mw_api_key:
        session = requests_cache.CachedSession(
            str(Path(settings.cache_dir) / "word_scramble_cache"),
            backend="sqlite",
            expire_after=timedelta(days=30),
        )
        logger.debug("Using Merriam-Webster dictionary API")
        return MerriamWebsterClient(settings.mw_api_key, session)

    if dictionary_file is None and SYSTEM_DICTIONARY.is_file():
        dictionary_file = SYSTEM_DICTIONARY

    if dictionary_file is None:
        console.print("[bold red]Error:[/bold red] No dictionary available")
        console.print("\nPass --dictionary, or set one of these in your environment or .env file:")
        console.print("  DICTIONARY_FILE=/path/to/words.txt")
        console.print("  MW_API_KEY=your-api-key-here\n")
        raise click.Abort

    try:
        return WordListDictionary.from_file(str(dictionary_file))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to load dictionary: {e}")
        raise click.Abort from e


def submit_or_abort(
    validator: WordValidator, state: GameState, raw: str
) -> tuple[GameState, SubmissionResult | None]:
    """Submit a word, aborting if the dictionary lookup fails."""
    try:
        return validator.submit_word(state, raw)
    except requests.RequestException as e:
        console.print(f"[bold red]Error:[/bold red] Dictionary lookup failed: {e}")
        logger.exception("Dictionary lookup failed")
        raise click.Abort from e


def show_state(state: GameState) -> None:
    """Print the root word, the score and the words found so far."""
    color = "red" if state.negative else "green"
    console.rule(f"[bold]{escape(state.root_word)}[/bold]")
    console.print(f"Current score: [{color}]{state.score} {state.sentiment.value}[/{color}]")
    for word in state.used_words:
        console.print(f"  [green]({len(word)})[/green] {escape(word)}")


def show_result(result: SubmissionResult, root_word: str) -> None:
    """Print the outcome of one submission."""
    if result.accepted:
        console.print(f"[green]✓[/green] {escape(result.word)} [green]+{result.length_bonus}[/green]")
        return

    console.print(f"[bold red]✗ {result.title}[/bold red] ({escape(result.word)})")
    console.print(f"  {escape(result.message(root_word))}")


@click.group()
@click.version_option(__version__, prog_name="word-scramble")
def cli() -> None:
    """Word Scramble - make as many words as you can from one root word."""
    install_exception_hook()


@cli.command()
@click.option(
    "--words",
    "-w",
    "words_file",
    type=click.Path(path_type=Path),
    help="Path to root word list (one word per line). Defaults to the bundled list.",
)
@click.option(
    "--dictionary",
    "-d",
    "dictionary_file",
    type=click.Path(path_type=Path),
    help="Path to dictionary file used to check words (one word per line)",
)
@click.option("--seed", type=int, default=None, help="Seed for root word choice and penalties")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def play(
    words_file: Path | None, dictionary_file: Path | None, seed: int | None, verbose: bool
) -> None:
    """Play an interactive game.

    Type words made from the letters of the root word. Rejected words cost
    up to five points. Enter :new for a new root word and :quit to stop.
    """
    settings = setup(verbose)
    words = load_root_words(words_file, settings)
    oracle = build_oracle(dictionary_file, settings)
    validator = WordValidator(oracle, rng=random.Random(seed))

    state = validator.start_game(words)
    show_state(state)

    while True:
        try:
            raw = click.prompt("Enter your word", default="", show_default=False)
        except click.Abort:
            # End of input
            break

        command = raw.strip().lower()
        if command == QUIT_COMMAND:
            break
        if command == NEW_GAME_COMMAND:
            state = validator.start_game(words)
            show_state(state)
            continue

        state, result = submit_or_abort(validator, state, raw)
        if result is None:
            continue

        show_result(result, state.root_word)
        if not result.accepted:
            state = validator.apply_penalty(state)
        show_state(state)

    console.print(
        f"\n[bold]Final score:[/bold] {state.score} {state.sentiment.value} "
        f"({len(state.used_words)} word(s) found)"
    )


@cli.command()
@click.argument("root")
@click.argument("words", nargs=-1)
@click.option(
    "--dictionary",
    "-d",
    "dictionary_file",
    type=click.Path(path_type=Path),
    help="Path to dictionary file used to check words (one word per line)",
)
@click.option(
    "--penalize/--no-penalize",
    default=False,
    help="Apply the random penalty after each rejected word",
)
@click.option("--seed", type=int, default=None, help="Seed for penalties")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def check(
    root: str,
    words: tuple[str, ...],
    dictionary_file: Path | None,
    penalize: bool,
    seed: int | None,
    verbose: bool,
) -> None:
    """Score WORDS, in order, against the root word ROOT."""
    settings = setup(verbose)

    root_word = root.strip().lower()
    if not is_valid_root_word(root_word):
        console.print(
            f"[bold red]Error:[/bold red] Invalid root word {escape(repr(root))}: "
            f"root words must be a single run of letters"
        )
        raise click.Abort

    oracle = build_oracle(dictionary_file, settings)
    validator = WordValidator(oracle, rng=random.Random(seed))
    state = validator.start_game([root_word])

    accepted = 0
    for raw in words:
        state, result = submit_or_abort(validator, state, raw)
        if result is None:
            continue
        show_result(result, state.root_word)
        if result.accepted:
            accepted += 1
        elif penalize:
            state = validator.apply_penalty(state)

    color = "red" if state.negative else "green"
    console.print(
        f"\n[bold]Final score:[/bold] [{color}]{state.score} {state.sentiment.value}[/{color}] "
        f"({accepted}/{len(words)} accepted)"
    )


if __name__ == "__main__":
    cli()
