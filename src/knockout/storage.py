"""
YAML file storage for bracket state.

New brackets go through ``BracketStore.create()`` and load-modify-save cycles
through ``BracketStore.apply()``. Both hold a file lock so two writers never
interleave on the same bracket.
"""
import logging
import os

import yaml
from filelock import FileLock

from .errors import BracketAlreadyExists, BracketInvariantError
from .models import BracketState

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 10


class BracketStore:
    def __init__(self, file_path, timeout=LOCK_TIMEOUT_SECONDS):
        self.file_path = file_path
        self.lock = FileLock(f'{file_path}.lock', timeout=timeout)

    def exists(self):
        return os.path.exists(self.file_path)

    def load(self) -> BracketState:
        with open(self.file_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise BracketInvariantError(f'Failed to parse {self.file_path}: {e}') from e
        if not isinstance(data, dict):
            raise BracketInvariantError(f'{self.file_path} does not hold a bracket')
        return BracketState.from_dict(data)

    def _ensure_directory(self):
        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def save(self, bracket: BracketState):
        self._ensure_directory()
        with open(self.file_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(bracket.to_dict(), f, default_flow_style=False, sort_keys=False)
        logger.debug(f'Saved bracket to {self.file_path}')

    def create(self, bracket: BracketState, overwrite=False):
        """Store a newly generated bracket, refusing to replace one already in play."""
        self._ensure_directory()
        with self.lock:
            if self.exists() and not overwrite:
                raise BracketAlreadyExists(self.file_path)
            self.save(bracket)

    def apply(self, operation, *args):
        """
        Load the bracket, run ``operation(bracket, *args)`` and save what it
        returns, all under the file lock. Nothing is written if it raises.
        """
        with self.lock:
            updated = operation(self.load(), *args)
            self.save(updated)
        return updated
