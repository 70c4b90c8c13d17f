"""Reporter: progress and advisory lines for a provisioning run."""

import sys
from dataclasses import dataclass, field
from typing import List, TextIO


@dataclass
class Reporter:
    """Writes progress lines to an output stream and remembers advisories."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    advisories: List[str] = field(default_factory=list)

    def info(self, message):
        print(message, file=self.output)

    def advisory(self, message):
        self.advisories.append(message)
        print(f"Note: {message}", file=self.output)
