import pytest

from hanzicut import config


def test_default_config_is_valid():
    config.validate_config()


def test_segment_params_merges_stage_configs():
    params = config.segment_params()
    assert params['min_aspect_ratio'] == 0.83
    assert params['max_threshold'] == 10
    assert params['min_margin'] == 6
    assert config.segment_params({'min_margin': 3})['min_margin'] == 3


def test_invalid_shape_ratio_is_rejected(monkeypatch):
    monkeypatch.setitem(config.SHAPE_CONFIG, 'min_similarity', 1.5)
    with pytest.raises(ValueError):
        config.validate_config()


def test_invalid_recut_thresholds_are_rejected(monkeypatch):
    monkeypatch.setitem(config.RECUT_CONFIG, 'start_threshold', 12)
    with pytest.raises(ValueError):
        config.validate_config()


def test_summary_lists_every_stage():
    full = config.config_summary(compact=False)
    assert {'RECUT_CONFIG', 'MERGE_CONFIG', 'CLASSIFY_CONFIG', 'OUTPUT_CONFIG'} <= set(full)
