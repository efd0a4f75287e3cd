"""Discovery of deployed model files by keyword."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass

from boxdetect.errors import AlreadyInitializedError, IllegalParamError

_MODEL_SUFFIX = ".axmodel"


@dataclass(frozen=True)
class ModelInfo:
    """Where a model lives, which keyword matched it and its version."""

    path: str
    keyword: str
    version: str


def get_model_version(filename: str) -> str:
    """The text from the first ``V`` up to ``.axmodel``, or ``"unknown"``."""
    start = filename.find("V")
    end = filename.find(_MODEL_SUFFIX)
    if start < 0 or end < 0 or start > end:
        return "unknown"
    return filename[start:end]


class ModelManager:
    """Maps model keywords to the files found in a deployment directory."""

    def __init__(self, keywords: Iterable[str]) -> None:
        self._keywords = tuple(keywords)
        self._models: dict[str, ModelInfo] = {}
        self._has_init = False

    @property
    def has_init(self) -> bool:
        """True once :meth:`init` has succeeded and until :meth:`deinit`."""
        return self._has_init

    def init(self, deploy_path: str | os.PathLike[str]) -> None:
        """Scan ``deploy_path`` for files whose names contain a keyword."""
        if deploy_path is None:
            raise IllegalParamError("model deployment path is missing")
        if self._has_init:
            raise AlreadyInitializedError("model manager has already been initialised")
        directory = os.fspath(deploy_path)
        if not directory:
            raise IllegalParamError("model deployment path is empty")
        prefix = directory if directory.endswith("/") else directory + "/"
        try:
            with os.scandir(directory) as entries:
                names = [e.name for e in entries if not e.is_dir(follow_symlinks=False)]
        except OSError as exc:
            raise IllegalParamError(f"cannot open directory {directory}") from exc

        for name in names:
            for keyword in self._keywords:
                if keyword in self._models or keyword not in name:
                    continue
                self._models[keyword] = ModelInfo(
                    path=prefix + name,
                    keyword=keyword,
                    version=get_model_version(name),
                )
        self._has_init = True

    def deinit(self) -> None:
        """Mark the manager as no longer initialised."""
        self._has_init = False

    def find(self, keyword: str) -> ModelInfo | None:
        """The model registered for ``keyword``, or None."""
        return self._models.get(keyword)