from pathlib import Path

import pytest

from zip_extremes.common.config_loader import load_settings
from zip_extremes.common.errors import ConfigError


def test_load_settings_from_repo_config_dir():
    settings = load_settings(Path("config"))
    assert settings.encoding == "utf-8"
    assert settings.log_level == "INFO"
    assert settings.report.separator_width == 68
    assert settings.report.code_width == 5


def test_load_settings_falls_back_to_defaults(tmp_path: Path):
    settings = load_settings(tmp_path / "nowhere")
    assert settings.report.region_width == 8
    assert settings.report.column_width == 15


def test_load_settings_applies_overlay_values(tmp_path: Path):
    base = tmp_path / "base"
    overlay = tmp_path / "overlay"
    base.mkdir()
    overlay.mkdir()
    (base / "settings.yml").write_text(
        """reader:
  encoding: latin-1
logging:
  level: debug
""",
        encoding="utf-8",
    )
    (overlay / "settings.yml").write_text(
        """report:
  code_width: 6
""",
        encoding="utf-8",
    )

    settings = load_settings(base, overlay_config_dir=overlay)

    assert settings.encoding == "latin-1"
    assert settings.log_level == "DEBUG"
    assert settings.report.code_width == 6
    assert settings.report.column_width == 15


def test_load_settings_ignores_empty_overlay_file(tmp_path: Path):
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "settings.yml").write_text("", encoding="utf-8")
    settings = load_settings(Path("config"), overlay_config_dir=overlay)
    assert settings.report.code_width == 5


def test_load_settings_rejects_non_mapping(tmp_path: Path):
    (tmp_path / "settings.yml").write_text("- not\n- a\n- mapping\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(tmp_path)


@pytest.mark.parametrize(
    "payload",
    [
        "surprise: true\n",
        "report:\n  code_width: 0\n",
        "report:\n  column_width: yes\n",
        "report:\n  code_width: 20\n",
        "logging:\n  level: LOUD\n",
        "reader:\n  encoding: ''\n",
        "reader: [utf-8]\n",
    ],
)
def test_load_settings_rejects_invalid_values(tmp_path: Path, payload: str):
    (tmp_path / "settings.yml").write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(tmp_path)


def test_load_settings_allow_unknown(tmp_path: Path):
    (tmp_path / "settings.yml").write_text("surprise: true\n", encoding="utf-8")
    settings = load_settings(tmp_path, allow_unknown=True)
    assert settings.encoding == "utf-8"


def test_load_settings_rejects_broken_yaml(tmp_path: Path):
    (tmp_path / "settings.yml").write_text("reader: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(tmp_path)
