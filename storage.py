import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileStore:
    def __init__(self, data_dir: Union[str, Path], read_only: bool = False):
        self.data_dir = Path(data_dir)
        self.read_only = read_only
        # Read-only deployments keep writes here for the life of the process
        self._memory: Dict[str, Any] = {}

    def path_for(self, name: str) -> Path:
        if not self.read_only:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / name

    def load(self, name: str, fallback: T) -> T:
        if self.read_only:
            if name in self._memory:
                return copy.deepcopy(self._memory[name])
            return copy.deepcopy(fallback)

        path = self.path_for(name)
        if not path.exists():
            self.save(name, fallback)
            return copy.deepcopy(fallback)

        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            logger.error("Failed to read %s: %s", name, e)
            return copy.deepcopy(fallback)

    def save(self, name: str, data: Any) -> None:
        if self.read_only:
            self._memory[name] = copy.deepcopy(data)
            return

        try:
            path = self.path_for(name)
            with path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save %s: %s", name, e)
