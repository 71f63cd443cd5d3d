"""
storage.py
----------
Local persistence for wheels and spin results.

WheelStore is the capability the windows rely on:
    load(wheel_id) -> Wheel, append(outcome), list(wheel_id) -> [SpinOutcome]
JsonWheelStore keeps everything in one data.json next to the app, written the
same way the console always saved its settings (json.dump, indent 4, utf-8).
"""
import json
import os
from datetime import datetime

from spinwheel.engine.models import SpinOutcome, Wheel
from spinwheel.log import log_storage
from spinwheel.utils.config import PhysicsConfig


class StorageError(Exception):
    pass


class WheelNotFound(KeyError):
    pass


class WheelStore:
    def load(self, wheel_id):
        raise NotImplementedError

    def append(self, outcome):
        raise NotImplementedError

    def list(self, wheel_id):
        raise NotImplementedError


class JsonWheelStore(WheelStore):
    def __init__(self, path):
        self.path = path

    # -------------------------------------------------------------
    # File access
    # -------------------------------------------------------------
    def _read(self):
        if not os.path.exists(self.path):
            return {"wheels": [], "results": [], "physics": {}}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log_storage(f"cannot read {self.path}: {e}")
            raise StorageError(f"cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        data.setdefault("wheels", [])
        data.setdefault("results", [])
        data.setdefault("physics", {})
        return data

    def _write(self, data):
        folder = os.path.dirname(os.path.abspath(self.path))
        tmp_path = self.path + ".tmp"
        try:
            os.makedirs(folder, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=4)
            os.replace(tmp_path, self.path)
        except OSError as e:
            log_storage(f"cannot write {self.path}: {e}")
            raise StorageError(f"cannot write {self.path}: {e}") from e

    # -------------------------------------------------------------
    # Wheels
    # -------------------------------------------------------------
    def list_wheels(self):
        """Most recently updated first."""
        wheels = [Wheel.from_dict(w) for w in self._read()["wheels"]]
        wheels.sort(key=lambda w: w.updated_at, reverse=True)
        return wheels

    def load(self, wheel_id):
        for raw in self._read()["wheels"]:
            if raw.get("id") == wheel_id:
                return Wheel.from_dict(raw)
        raise WheelNotFound(wheel_id)

    def save_wheel(self, wheel):
        """Insert or replace by id; updated_at is stamped on every save."""
        wheel.updated_at = datetime.now()
        data = self._read()
        wheels = data["wheels"]
        for i, raw in enumerate(wheels):
            if raw.get("id") == wheel.id:
                wheels[i] = wheel.to_dict()
                break
        else:
            wheels.append(wheel.to_dict())
        self._write(data)
        return wheel

    def delete_wheel(self, wheel_id):
        data = self._read()
        before = len(data["wheels"])
        data["wheels"] = [w for w in data["wheels"] if w.get("id") != wheel_id]
        data["results"] = [r for r in data["results"] if r.get("wheel_id") != wheel_id]
        self._write(data)
        return len(data["wheels"]) != before

    # -------------------------------------------------------------
    # Spin results
    # -------------------------------------------------------------
    def append(self, outcome):
        data = self._read()
        data["results"].append(outcome.to_dict())
        self._write(data)

    def list(self, wheel_id):
        """Recorded spins of one wheel; damaged rows are logged and left out."""
        outcomes = []
        for raw in self._read()["results"]:
            if not isinstance(raw, dict) or raw.get("wheel_id") != wheel_id:
                continue
            try:
                outcomes.append(SpinOutcome.from_dict(raw))
            except (KeyError, ValueError, TypeError) as e:
                log_storage(f"skipping damaged spin record in {self.path}: {e}")
        return outcomes

    # -------------------------------------------------------------
    # Physics settings
    # -------------------------------------------------------------
    def load_physics(self):
        return PhysicsConfig.from_dict(self._read()["physics"])

    def save_physics(self, config):
        data = self._read()
        data["physics"] = config.to_dict()
        self._write(data)
