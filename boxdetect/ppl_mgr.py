"""Which pipelines can run, given the models that were found."""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass

from boxdetect.errors import AlreadyInitializedError, NotInitializedError
from boxdetect.model_mgr import ModelManager


@dataclass(frozen=True)
class PipelineConfig:
    """A runnable pipeline and its ``keyword:version`` configuration key."""

    pipeline: Hashable
    config_key: str


class PipelineManager:
    """Works out the pipelines whose required models are all deployed."""

    def __init__(
        self,
        model_manager: ModelManager,
        bindings: Mapping[Hashable, Sequence[str]],
    ) -> None:
        self._models = model_manager
        self._bindings = {ppl: tuple(keywords) for ppl, keywords in bindings.items()}
        self._configs: tuple[PipelineConfig, ...] = ()
        self._has_init = False

    @property
    def has_init(self) -> bool:
        """True once :meth:`init` has succeeded and until :meth:`deinit`."""
        return self._has_init

    def init(self) -> None:
        """Collect the pipelines whose bound models are all available."""
        if not self._models.has_init:
            raise NotInitializedError("model manager must be initialised first")
        if self._has_init:
            raise AlreadyInitializedError("pipeline manager has already been initialised")
        configs = []
        for pipeline, keywords in self._bindings.items():
            if not keywords:
                continue
            if all(self._models.find(keyword) is not None for keyword in keywords):
                info = self._models.find(keywords[0])
                configs.append(PipelineConfig(pipeline, f"{info.keyword}:{info.version}"))
        self._configs = tuple(configs)
        self._has_init = True

    def deinit(self) -> None:
        """Drop the collected capabilities."""
        self._configs = ()
        self._has_init = False

    def capability(self) -> tuple[PipelineConfig, ...]:
        """The runnable pipelines with their configuration keys."""
        if not self._has_init:
            raise NotInitializedError("pipeline manager has not been initialised")
        return self._configs

    def is_valid(self, pipeline: Hashable) -> bool:
        """True if ``pipeline`` is among the runnable pipelines."""
        return any(config.pipeline == pipeline for config in self._configs)