import logging
from pathlib import Path
from typing import Optional

from ..config import Config
from . import run_command

logger = logging.getLogger(__name__)

VALUE_ENV = "KUBEADD_VALUE"


class YqAccessor:
    """Reads and assigns YAML scalars with mikefarah's yq (v4)."""

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or Config.YQ_BIN

    def read(self, expression: str, path: Path) -> Optional[str]:
        result = run_command([self.binary, "eval", expression, str(path)])
        value = result.stdout.strip()
        logger.debug(f"{expression} in {path} -> {value!r}")
        if value in ("", "null"):
            return None
        return value

    def write(self, expression: str, value: str, path: Path) -> None:
        # strenv() keeps the value out of the expression itself
        run_command(
            [self.binary, "eval", "-i", f"{expression} = strenv({VALUE_ENV})", str(path)],
            env={VALUE_ENV: value},
        )
