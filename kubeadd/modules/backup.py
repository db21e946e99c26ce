import logging
import shutil
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from kubeadd.config import Config

logger = logging.getLogger(__name__)


def backup_path_for(path: Path, now: Optional[datetime] = None) -> Path:
    stamp = (now or datetime.now()).strftime(Config.BACKUP_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.name}.backup.{stamp}")


def create_backup(path: Path, now: Optional[datetime] = None) -> Optional[Path]:
    """Copy ``path`` to ``<path>.backup.<YYYYMMDD_HHMMSS>``.

    An existing backup is never overwritten: when the timestamp is already
    taken (two mutations within one second), the next free second is used.

    Returns the backup path, or None when there is nothing to back up yet.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No existing kubeconfig at {path}, skipping backup")
        return None
    stamp_time = now or datetime.now()
    backup = backup_path_for(path, stamp_time)
    while backup.exists():
        stamp_time += timedelta(seconds=1)
        backup = backup_path_for(path, stamp_time)
    shutil.copy2(path, backup)
    logger.debug(f"Backed up {path} to {backup}")
    return backup
