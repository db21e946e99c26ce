import re

# https://host[.domain...][:port][/path]
SERVER_URL_PATTERN = re.compile(
    r"^https://[a-zA-Z0-9._-]+(\.[a-zA-Z0-9._-]+)*(:[0-9]+)?(/.*)?$"
)


def validate_server_url(server_url) -> bool:
    """Return True if ``server_url`` is an https Kubernetes API server address."""
    if not isinstance(server_url, str):
        return False
    return SERVER_URL_PATTERN.fullmatch(server_url) is not None
