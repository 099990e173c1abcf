import os


CURRENT_DUMP = "dump.current"
FRESH_DUMP = "dump.fresh"


def ensure_dir(path: str) -> None:
    """Create directory if it does not exist."""
    os.makedirs(path, exist_ok=True)


def dump_path(dump_dir: str, filename: str) -> str:
    """
    Return absolute path to a file inside the dump directory.
    Relative dump directories are resolved against the working directory.
    """
    return os.path.join(os.path.abspath(dump_dir), filename)
