import json

import pytest

from mandelreel.config import DEFAULT_CONFIG, load_config, normalise_config
from mandelreel.errors import InvalidParameter


def test_defaults_without_path():
    cfg = load_config(None)
    assert cfg == DEFAULT_CONFIG
    cfg["width"] = 1
    assert DEFAULT_CONFIG["width"] == 1200


def test_load_from_file(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"width": 320, "frames_per_zoom": 5}), encoding="utf-8")
    cfg = normalise_config(load_config(str(path)))
    assert cfg["width"] == 320
    assert cfg["frames_per_zoom"] == 5
    assert cfg["height"] == 600


def test_load_rejects_bad_json(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidParameter, match="not valid JSON"):
        load_config(str(path))


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidParameter):
        load_config(str(path))


def test_load_missing_file(tmp_path):
    with pytest.raises(InvalidParameter, match="Cannot read"):
        load_config(str(tmp_path / "missing.json"))


def test_normalise_coerces_types():
    cfg = normalise_config({"width": "64", "zoom_factor": "2.5", "draw_axes": 0})
    assert cfg["width"] == 64
    assert cfg["zoom_factor"] == 2.5
    assert cfg["draw_axes"] is False
    assert set(cfg) == set(DEFAULT_CONFIG)


def test_normalise_rejects_unknown_fields():
    with pytest.raises(InvalidParameter, match="colour"):
        normalise_config({"colour": "red"})


@pytest.mark.parametrize("field,value", [
    ("width", 0),
    ("height", -1),
    ("zoom_factor", 0),
    ("zoom_factor", 0.5),
    ("frame_delay_ms", -10),
    ("frames_per_zoom", 0),
    ("x_range", 0),
    ("workers", 0),
    ("band_height", 0),
    ("max_zoom", 0.5),
    ("width", "wide"),
    ("height", None),
])
def test_normalise_rejects_invalid_values(field, value):
    with pytest.raises(InvalidParameter):
        normalise_config({field: value})
