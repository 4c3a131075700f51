"""Version Metadata."""

from pathlib import Path

__version__ = "0.1.0"  # Keep in sync with pyproject.toml, enforced in a test.
PROGRAM_NAME = "hlsstitch"

UNKNOWN = "unknown"


def _read_git_ref(git_dir: Path) -> tuple[str, str]:
    """Branch and short commit of a checkout, unknown when we aren't in one."""
    branch = commit = UNKNOWN

    head = git_dir / "HEAD"
    if head.is_file():
        ref = head.read_text().strip()
        if ref.startswith("ref:"):
            branch = ref.rsplit("/", maxsplit=1)[-1]
        else:  # Detached, HEAD is the commit
            commit = ref[:7]

    head_log = git_dir / "logs" / "HEAD"
    if commit == UNKNOWN and head_log.is_file():
        entries = head_log.read_text().splitlines()
        if entries:  # pragma: no cover # Not a checkout in CI
            commit = entries[-1].split(" ")[1][:7]

    return branch, commit


def get_version_str() -> str:
    """Version with the branch and commit, when running from a checkout."""
    branch, commit = _read_git_ref(Path.cwd() / ".git")

    if branch == UNKNOWN:
        return f"{__version__}-{commit}"

    return f"{__version__}-{branch}/{commit}"


VERSION_FULL = get_version_str()
