"""Key-value persistence for the last selected profile and handedness"""
import abc
import logging
from pathlib import Path

import yaml

from core.errors import ResourceLoadError

LOG = logging.getLogger("xrprofiles.store")


class SelectionStore(abc.ABC):
    @abc.abstractmethod
    def get(self, key: str):
        raise NotImplementedError

    @abc.abstractmethod
    def set(self, key: str, value: str):
        raise NotImplementedError

    @abc.abstractmethod
    def remove(self, key: str):
        raise NotImplementedError


class MemoryStore(SelectionStore):
    def __init__(self, initial=None):
        self._data = dict(initial or {})

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def remove(self, key):
        self._data.pop(key, None)


class YamlFileStore(SelectionStore):
    """Keeps selections in a small YAML mapping on disk, rewritten on every change."""

    def __init__(self, path):
        self.path = Path(path)
        self._data = self._read()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ResourceLoadError(self.path, e) from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ResourceLoadError(self.path, "expected a mapping")
        return data

    def _write(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._data, f, default_flow_style=False)
        LOG.debug("selection store written: %s", self._data)

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value
        self._write()

    def remove(self, key):
        if key in self._data:
            del self._data[key]
            self._write()
