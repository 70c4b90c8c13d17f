"""AnswerProvider implementations for the .env questions."""

import click


class ClickAnswerProvider:
    """Asks on the terminal via click.prompt; secret answers are not echoed."""

    def ask(self, prompt, default, secret=False):
        return click.prompt(
            prompt, default=default, show_default=bool(default) and not secret,
            hide_input=secret, err=True,
        )


class DefaultAnswerProvider:
    """Non-interactive provider: every question takes its default."""

    def ask(self, prompt, default, secret=False):
        return default
