"""Configuration management for the kubeadd application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Kubeconfig locations
    KUBECONFIG_PATH: str = os.getenv("KUBEADD_KUBECONFIG", "~/.kube/config")
    LOCAL_KUBECONFIG_PATH: str = os.getenv("KUBEADD_LOCAL_KUBECONFIG", ".kube/config")

    # External tools
    KUBECTL_BIN: str = os.getenv("KUBECTL_BIN", "kubectl")
    YQ_BIN: str = os.getenv("YQ_BIN", "yq")

    # Timeouts (in seconds)
    COMMAND_TIMEOUT: int = int(os.getenv("COMMAND_TIMEOUT", "60"))

    # Backups: <path>.backup.<timestamp>
    BACKUP_TIMESTAMP_FORMAT: str = "%Y%m%d_%H%M%S"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    INSTALL_HINTS: dict = {
        "kubectl": "Install kubectl: https://kubernetes.io/docs/tasks/tools/",
        "yq": "Please install yq: brew install yq (or see https://github.com/mikefarah/yq)",
    }

    @classmethod
    def required_binaries(cls) -> tuple:
        """Executables that must be on PATH before touching a kubeconfig."""
        return (cls.KUBECTL_BIN, cls.YQ_BIN)
