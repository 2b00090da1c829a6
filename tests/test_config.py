from colorbook.config import fill_settings, load_config
from colorbook.fill import FillMode
from colorbook.raster import BLACK


def test_load_config_overrides(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "data_root: /tmp/data\nfill:\n  mode: area\n  tolerance: 0.2\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("COLORBOOK_CONFIG", str(config_path))

    config = load_config()
    assert config["data_root"] == "/tmp/data"
    assert config["fill"]["mode"] == "area"
    assert config["fill"]["border_color"] == list(BLACK)
    assert config["palette"]

    monkeypatch.delenv("COLORBOOK_CONFIG", raising=False)


def test_load_config_ignores_non_mapping(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setenv("COLORBOOK_CONFIG", str(config_path))

    config = load_config()
    assert config["fill"]["mode"] == "border"


def test_fill_settings_reads_values():
    settings = fill_settings({"fill": {"mode": "AREA", "tolerance": "0.25", "border_color": [10, 20, 30]}})
    assert settings.mode is FillMode.AREA
    assert settings.tolerance == 0.25
    assert settings.border_color == (10, 20, 30, 255)


def test_fill_settings_falls_back_on_bad_values():
    settings = fill_settings({"fill": {"mode": "spray", "tolerance": "lots", "border_color": "black"}})
    assert settings.mode is FillMode.BORDER
    assert settings.tolerance == 0.05
    assert settings.border_color == BLACK


def test_fill_settings_clamps_tolerance():
    assert fill_settings({"fill": {"tolerance": 3}}).tolerance == 1.0
    assert fill_settings({"fill": {"tolerance": -1}}).tolerance == 0.0
    assert fill_settings({}).mode is FillMode.BORDER
