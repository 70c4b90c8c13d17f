"""EnvConfigurator: seeds the project's .env from remote blocks and answers."""

import os
from dataclasses import dataclass
from typing import Callable, Optional

from bvdb_installer.patch_cmd.text_patcher import ENCODING_ERRORS, inject_marker, set_key_value
from bvdb_installer.provision.errors import FetchError

SALTS_MARKER = "WPSALTS"
LICENSES_MARKER = "WPLICENSES"


@dataclass(frozen=True)
class EnvQuestion:
    """One interactive question and the .env key its answer is written to."""

    key: str
    prompt: str
    default: Optional[str] = None
    default_fn: Optional[Callable[[dict], str]] = None
    secret: bool = False

    def resolve_default(self, answers):
        if self.default_fn is not None:
            return self.default_fn(answers)
        return self.default or ""


def env_questions(env_path):
    """The questions asked during configuration, in the order they are asked."""
    domain_default = os.path.basename(os.path.dirname(os.path.abspath(env_path)))
    return [
        EnvQuestion("DB_USER", "Database username", "root"),
        EnvQuestion("DB_PASSWORD", "Database password", "", secret=True),
        EnvQuestion("DB_NAME", "Database name", "wordpress"),
        EnvQuestion("DB_PREFIX", "Database prefix", "vmst_"),
        EnvQuestion("DB_HOST", "Database host", "127.0.0.1"),
        EnvQuestion("DOMAIN", "Domain (for WP_HOME)", domain_default),
        EnvQuestion(
            "WP_HOME", "WP_HOME url",
            default_fn=lambda answers: f"https://{answers['DOMAIN']}",
        ),
        EnvQuestion("WP_ENV", "WP_ENV (development/acceptance/production)", "development"),
    ]


# DOMAIN only feeds the WP_HOME default; it is not written to .env.
_WRITE_ORDER = ("DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PREFIX", "WP_HOME", "WP_ENV")


def quote(value):
    """Wrap a non-empty value in double quotes unless it already is."""
    if value == "":
        return ""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value
    return f'"{value}"'


def collect_answers(questions, answer_provider):
    """Ask each question; blank or missing answers fall back to the default."""
    answers = {}
    for question in questions:
        default = question.resolve_default(answers)
        answer = answer_provider.ask(question.prompt, default, secret=question.secret)
        answer = answer.strip() if isinstance(answer, str) else ""
        answers[question.key] = answer or default
    return answers


def inject_remote_marker(env_path, marker, url, fetcher, reporter):
    """Replace the marker line with content fetched from url.

    Unconfigured, failed or empty fetches leave the placeholder untouched.

    Returns True if content was injected.
    """
    if not url:
        reporter.advisory(f"No URL configured for {marker}; leaving placeholder.")
        return False

    try:
        body = fetcher.fetch(url)
    except FetchError as err:
        reporter.advisory(f"Could not download {marker}; placeholder left unchanged. ({err})")
        return False

    content = body.decode("utf-8", errors=ENCODING_ERRORS)
    if not content.strip():
        reporter.advisory(f"Downloaded {marker} was empty; placeholder left unchanged.")
        return False

    inject_marker(env_path, marker, content)
    reporter.info(f"Injected {marker} into {os.path.basename(env_path)}")
    return True


def configure_env(env_path, config, fetcher, answer_provider, reporter):
    """Inject remote blocks and write the answered values into the .env file.

    Returns False (nothing done) when the .env file does not exist.
    """
    if not os.path.isfile(env_path):
        reporter.advisory("No .env file found to configure.")
        return False

    reporter.info("Configuring environment variables…")
    inject_remote_marker(env_path, SALTS_MARKER, config.salts_url, fetcher, reporter)
    inject_remote_marker(env_path, LICENSES_MARKER, config.licenses_url, fetcher, reporter)

    answers = collect_answers(env_questions(env_path), answer_provider)
    answers["DB_PASSWORD"] = quote(answers["DB_PASSWORD"])

    for key in _WRITE_ORDER:
        set_key_value(env_path, key, answers[key])
    return True
