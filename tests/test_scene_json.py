import io
import json

from solidviz.config import SceneConfig
from solidviz.io import scene_to_dict, write_scene_json
from solidviz.scene import SolidScene


def _scene(**overrides):
    config = SceneConfig(sample_count=11, step=1.0, axial_step=1.0, angular_steps=4)
    return SolidScene(config.replace(**overrides))


def test_empty_scene():
    data = scene_to_dict(_scene())
    assert data["schema"] == "solidviz-scene-v1"
    assert len(data["axes"]) == 200
    assert data["curves"] == []
    assert data["cross_sections"] == []
    assert data["revolution"] == {"side_quads": [], "cap_quads": []}
    assert data["config"]["function1"] == "x+6"


def test_full_scene():
    scene = _scene()
    scene.graph()
    scene.graph_cross_sections()
    scene.show_rotation()
    data = scene_to_dict(scene)

    assert [len(c) for c in data["curves"]] == [11, 11]
    assert len(data["cross_sections"]) == 5
    section = data["cross_sections"][0]
    assert section["anchor"] == [-2.0, 4.0, 0.0]
    assert len(section["offsets"]) == 4
    assert len(data["revolution"]["cap_quads"]) == 8


def test_non_finite_written_as_null(tmp_path):
    scene = _scene(function1="1/x", domain=(-1.0, 1.0), sample_count=3)
    scene.graph()
    path = tmp_path / "scene.json"
    write_scene_json(scene, path)

    text = path.read_text()
    assert "Infinity" not in text
    data = json.loads(text)
    assert data["curves"][0][1] == [0.0, None]


def test_write_to_stream():
    buf = io.StringIO()
    write_scene_json(_scene(), buf, indent=2)
    assert json.loads(buf.getvalue())["schema"] == "solidviz-scene-v1"
