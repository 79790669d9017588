import asyncio
import json
from pathlib import Path

from pydantic import ValidationError

from tripfinder.exceptions.custom import WeightProfileError
from tripfinder.schemas.weights import WeightProfiles


class WeightProfileStore:
    """Reads the profile weight document from disk on every load."""

    def __init__(self, path: Path):
        self._path = path

    async def load(self) -> WeightProfiles:
        try:
            text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except OSError as exc:
            raise WeightProfileError(f"Cannot read {self._path}: {exc}") from exc
        try:
            return WeightProfiles.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise WeightProfileError(f"Invalid weight document {self._path}: {exc}") from exc
