"""FakeAnswerProvider: test double for the interactive AnswerProvider."""


class FakeAnswerProvider:
    """Answers questions from a prompt -> answer mapping.

    Prompts without a scripted answer get "" (the user pressed enter), so
    the caller's default applies. Every question is recorded in calls as
    (prompt, default); prompts asked with secret=True are
    also recorded in secret_prompts.
    """

    def __init__(self, answers=None):
        self._answers = dict(answers or {})
        self.calls = []
        self.secret_prompts = []

    def set_answer(self, prompt, answer):
        self._answers[prompt] = answer

    def ask(self, prompt, default, secret=False):
        self.calls.append((prompt, default))
        if secret:
            self.secret_prompts.append(prompt)
        return self._answers.get(prompt, "")
