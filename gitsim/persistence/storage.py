"""
Saved-state storage.

The repository is stored as a single JSON envelope:

    {"version": 1, "savedAt": "<iso timestamp>", "state": {...}}

Loading is forgiving: a missing file, invalid JSON, a version mismatch or a
malformed state all mean "no saved state".
"""

import json
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, TextIO, Union

from gitsim.errors import CorruptedStateError
from gitsim.logging import get_gitsim_logger
from gitsim.state.models import RepositoryState

log = get_gitsim_logger("persistence")

STORAGE_VERSION = 1


class StateStorage:
    """
    File-based storage for the simulator state.

    Writes are atomic: the envelope goes to a temporary file in the target
    directory which then replaces the state file.
    """

    def __init__(self, path: Union[str, Path], version: int = STORAGE_VERSION):
        """
        Initialize storage.

        Args:
            path: State file location
            version: Envelope version written and accepted on load
        """
        self.path = Path(path)
        self.version = version

    def save_state(self, state: RepositoryState) -> None:
        """
        Persist ``state`` inside a versioned envelope.

        Args:
            state: State to save
        """
        payload = {
            "version": self.version,
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "state": state.to_dict(),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._atomic_write() as f:
            json.dump(payload, f, indent=2)
        log.debug(f"Saved state to {self.path}", commits=len(state.commits))

    def read_envelope(self) -> Dict[str, Any]:
        """
        Read and check the envelope strictly.

        Raises:
            FileNotFoundError: If there is no state file
            CorruptedStateError: If the file is not a valid envelope of this version
        """
        with open(self.path, "r") as f:
            raw = f.read()

        try:
            envelope = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptedStateError(f"Invalid JSON: {e}", str(self.path)) from e

        if not isinstance(envelope, dict) or "state" not in envelope:
            raise CorruptedStateError("Missing state envelope", str(self.path))
        if envelope.get("version") != self.version:
            raise CorruptedStateError(
                f"Unsupported version {envelope.get('version')!r}", str(self.path)
            )
        return envelope

    def load_state(self) -> Optional[RepositoryState]:
        """
        Load the saved state.

        Returns:
            The saved RepositoryState, or None if absent or unusable
        """
        if not self.path.exists():
            return None

        try:
            envelope = self.read_envelope()
            state = RepositoryState.from_dict(envelope["state"])
        except (OSError, CorruptedStateError) as e:
            log.warning(f"Ignoring saved state: {e}")
            return None
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            log.warning(f"Ignoring malformed saved state: {e!r}")
            return None

        problems = state.validate()
        if problems:
            log.warning("Ignoring inconsistent saved state", problems=problems)
            return None
        return state

    def clear_state(self) -> bool:
        """
        Delete the state file.

        Returns:
            True if a file was removed, False if none existed
        """
        if self.path.exists():
            self.path.unlink()
            return True
        return False

    @contextmanager
    def _atomic_write(self) -> Iterator[TextIO]:
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(temp_fd, "w") as f:
                yield f
            os.replace(temp_path, self.path)
        except Exception:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass
            raise
