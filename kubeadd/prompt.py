"""Interactive prompts."""
import re

import typer

from kubeadd.models import Asker

YES_PATTERN = re.compile(r"^[Yy]$")


def ask(prompt: str) -> str:
    """Read one line from the user; pressing Enter returns an empty string."""
    return typer.prompt(prompt, default="", show_default=False, prompt_suffix="")


def confirm(question: str, asker: Asker = ask) -> bool:
    """Ask a y/N question. Only a single 'y' or 'Y' counts as yes."""
    answer = asker(f"{question} (y/N): ")
    return bool(YES_PATTERN.match(answer.strip()))
