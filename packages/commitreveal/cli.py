import logging
import typer
import sentry_sdk
from requests.exceptions import RequestException
from pythonjsonlogger import jsonlogger
from web3.exceptions import Web3Exception

from . import config
from .client import VotingClient
from .commitment import VoteIntent, parse_choice
from .errors import CommitRevealError, ConfigurationError, InvalidChoice, error_reason
from .events import EventListener, EventLog
from .session import connect

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

COMMAND_PROMPT = "Enter command (commit/reveal/winner/votes/events/exit)"
EXIT_COMMANDS = {"exit", "quit"}

# mode -> (client method, success message, failure prefix)
VOTE_ACTIONS = {
    "commit": ("commit_vote", "Vote committed successfully.", "Failed to commit vote"),
    "reveal": ("reveal_vote", "Vote revealed successfully.", "Failed to reveal vote"),
}


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigurationError(f"LOG_LEVEL is invalid: {level}")
    handler = logging.StreamHandler()
    handler.setFormatter(jsonlogger.JsonFormatter())
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def ask(text: str) -> str:
    return typer.prompt(text, default="", show_default=False).strip()


def handle_vote(client: VotingClient, mode: str) -> None:
    """Prompt for a choice and secret, then commit or reveal the vote."""
    method, success, failure = VOTE_ACTIONS[mode]
    try:
        choice = parse_choice(ask("Enter your choice (YES/NO)"))
    except InvalidChoice as exc:
        typer.echo(str(exc))
        return

    intent = VoteIntent(choice=choice, secret=ask("Enter your secret"))
    try:
        getattr(client, method)(intent)
    except Exception as exc:
        logger.info(f"{mode} failed", exc_info=True)
        typer.echo(f"{failure}: {error_reason(exc)}", err=True)
        return
    typer.echo(success)


def show_winner(client: VotingClient) -> None:
    try:
        winner = client.get_winner()
    except Exception as exc:
        logger.info("getWinner failed", exc_info=True)
        typer.echo(f"Failed to retrieve winner: {error_reason(exc)}", err=True)
        return
    typer.echo(f"Winner: {winner}")


def show_votes(client: VotingClient) -> None:
    try:
        votes = client.get_vote_commits()
    except Exception as exc:
        logger.info("getVoteCommitsArray failed", exc_info=True)
        typer.echo(f"Failed to retrieve votes: {error_reason(exc)}", err=True)
        return
    typer.echo(f"Votes commits: {votes}")


def show_events(log: EventLog) -> None:
    events = log.snapshot()
    if not events:
        typer.echo("No events captured.")
        return
    typer.echo("Captured Events:")
    for event in events:
        typer.echo(event.model_dump())


def dispatch(client: VotingClient, log: EventLog, command: str) -> None:
    if command in VOTE_ACTIONS:
        handle_vote(client, command)
    elif command == "winner":
        show_winner(client)
    elif command == "votes":
        show_votes(client)
    elif command == "events":
        show_events(log)
    else:
        typer.echo("Invalid command")


def run_shell(client: VotingClient, log: EventLog) -> None:
    """Read commands until exit, end of input or Ctrl-C."""
    while True:
        try:
            command = ask(COMMAND_PROMPT).lower()
            if command in EXIT_COMMANDS:
                break
            dispatch(client, log, command)
        except (typer.Abort, KeyboardInterrupt):
            typer.echo()
            break


@app.command()
def main():
    """Commit, reveal and inspect votes on the commit-reveal contract."""
    log = EventLog()
    try:
        configure_logging()
        sentry_sdk.init(dsn=config.SENTRY_DSN)
        session = connect()
        listener = EventListener(session.contract, log)
        listener.start()
    except (ConnectionError, RequestException, CommitRevealError, Web3Exception) as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)

    try:
        run_shell(VotingClient(session), log)
    finally:
        listener.stop()


if __name__ == "__main__":
    app()
