"""Where the ``go.version`` property comes from when no override is given."""
import functools, logging, os, subprocess
from typing import Callable

VersionProvider = Callable[[], str]

UNKNOWN_VERSION = "unknown"

log = logging.getLogger("go_allure_report")

@functools.lru_cache(maxsize=None)
def go_runtime_version() -> str:
    """Version of the Go toolchain on this machine, e.g. ``go1.22.3``.

    ``$GOVERSION`` wins if set, otherwise ``go env GOVERSION`` is asked.
    """
    env = os.environ.get("GOVERSION", "").strip()
    if env:
        return env
    try:
        proc = subprocess.run(["go", "env", "GOVERSION"], capture_output=True, text=True,
                              check=True, timeout=30)
    except (OSError, subprocess.SubprocessError) as e:
        log.warning("Go toolchain not available (%s); go.version set to %r", e, UNKNOWN_VERSION)
        return UNKNOWN_VERSION
    return proc.stdout.strip() or UNKNOWN_VERSION

def resolve_go_version(override: str, provider: VersionProvider = go_runtime_version) -> str:
    if override:
        return override
    return provider()
