import json
import os

from bionic.config import MAX_INPUT_BYTES, PROJECT_ROOT, Settings, configure_dependencies
from bionic.docs.buffer import BufferManager


def test_configure_dependencies_missing_file_uses_defaults(tmp_path):
    settings = configure_dependencies(str(tmp_path / "absent.json"))
    assert settings == Settings()
    assert settings.max_input_bytes == MAX_INPUT_BYTES == 10 * 1024 * 1024


def test_configure_dependencies_reads_values(tmp_path):
    cfg = tmp_path / "dependencies.json"
    cfg.write_text(json.dumps({
        "font_regular": "fonts/Regular.ttf",
        "font_bold": str(tmp_path / "Bold.ttf"),
        "font_size": 11,
        "max_input_bytes": 2048,
        "log_level": "debug",
    }), encoding="utf-8")
    settings = configure_dependencies(str(cfg))
    assert settings.font_regular == os.path.join(PROJECT_ROOT, "fonts", "Regular.ttf")
    assert settings.font_bold == str(tmp_path / "Bold.ttf")
    assert settings.font_size == 11.0
    assert settings.max_input_bytes == 2048
    assert settings.log_level == "DEBUG"


def test_configure_dependencies_bad_json_uses_defaults(tmp_path):
    cfg = tmp_path / "dependencies.json"
    cfg.write_text("{not json", encoding="utf-8")
    assert configure_dependencies(str(cfg)) == Settings()


def test_buffer_manager_cleans_up_on_error(tmp_path):
    try:
        with BufferManager(base_dir=str(tmp_path)) as buffer:
            path = buffer.write_text("note.txt", "scratch")
            assert os.path.exists(path)
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert not os.path.exists(buffer.base_dir)


def test_buffer_manager_directories_are_unique(tmp_path):
    with BufferManager(base_dir=str(tmp_path)) as a, BufferManager(base_dir=str(tmp_path)) as b:
        assert a.base_dir != b.base_dir
