import json
from typing import TYPE_CHECKING

import pytest

from hlsstitch.core.config import HLSStitchConf

if TYPE_CHECKING:
    from pathlib import Path
else:
    Path = object


def test_load_missing_config(tmp_path: Path) -> None:
    missing_config = tmp_path / "missing_config.json"

    config = HLSStitchConf.force_load_config_file(missing_config)
    config.write_config(missing_config)

    assert missing_config.is_file()


def test_write_and_load_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config = HLSStitchConf()
    config.app.segment_prefix = "/live/"
    config.app.discontinuity_tags = False

    config.write_config(config_path)
    loaded = HLSStitchConf.force_load_config_file(config_path)

    assert loaded.app.segment_prefix == "/live/"
    assert loaded.app.discontinuity_tags is False


def test_changed_config_is_backed_up(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"app": {"segment_prefix": "old/"}}))

    HLSStitchConf().write_config(config_path)

    backups = list((tmp_path / "config_backups").iterdir())
    assert len(backups) == 1
    assert json.loads(backups[0].read_text()) == {"app": {"segment_prefix": "old/"}}


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HLSSTITCH_APP__SEGMENT_PREFIX", "segments/")
    monkeypatch.setenv("HLSSTITCH_LOGGING__LEVEL", "debug")

    config = HLSStitchConf()

    assert config.app.segment_prefix == "segments/"
    assert config.logging.level == "DEBUG"
