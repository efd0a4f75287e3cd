import pytest

from boxdetect.errors import AlreadyInitializedError, NotInitializedError
from boxdetect.model_mgr import ModelManager
from boxdetect.ppl_mgr import PipelineConfig, PipelineManager

BINDINGS = {
    "HVCFP": ["hvcfp", "plate"],
    "MISSING": ["hvcfp", "absent"],
    "EMPTY": [],
}


@pytest.fixture
def models(tmp_path):
    (tmp_path / "hvcfp_V1.0.axmodel").write_bytes(b"")
    (tmp_path / "plate_V2.1.axmodel").write_bytes(b"")
    manager = ModelManager(["hvcfp", "plate", "absent"])
    manager.init(tmp_path)
    return manager


def test_init_requires_model_manager():
    manager = PipelineManager(ModelManager(["hvcfp"]), BINDINGS)
    with pytest.raises(NotInitializedError):
        manager.init()


def test_capability_lists_only_complete_pipelines(models):
    manager = PipelineManager(models, BINDINGS)
    manager.init()
    assert manager.capability() == (PipelineConfig("HVCFP", "hvcfp:V1.0"),)


def test_is_valid(models):
    manager = PipelineManager(models, BINDINGS)
    manager.init()
    assert manager.is_valid("HVCFP")
    assert not manager.is_valid("MISSING")
    assert not manager.is_valid("EMPTY")


def test_double_init_rejected(models):
    manager = PipelineManager(models, BINDINGS)
    manager.init()
    with pytest.raises(AlreadyInitializedError):
        manager.init()


def test_capability_before_init(models):
    manager = PipelineManager(models, BINDINGS)
    with pytest.raises(NotInitializedError):
        manager.capability()
    assert manager.is_valid("HVCFP") is False


def test_deinit_clears_and_allows_reinit(models):
    manager = PipelineManager(models, BINDINGS)
    manager.init()
    manager.deinit()
    assert manager.has_init is False
    assert manager.is_valid("HVCFP") is False
    manager.init()
    assert [c.pipeline for c in manager.capability()] == ["HVCFP"]


def test_no_models_no_pipelines(tmp_path):
    models = ModelManager(["hvcfp"])
    models.init(tmp_path)
    manager = PipelineManager(models, BINDINGS)
    manager.init()
    assert manager.capability() == ()