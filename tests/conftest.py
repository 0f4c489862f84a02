import pytest


@pytest.fixture(autouse=True)
def isolate_home_config(tmp_path, monkeypatch):
    """Point the configuration directory at an empty temporary directory.

    Tests must not pick up a real ``~/.commitinfo/config.json`` from the
    user running them.
    """
    config_dir = tmp_path / "commitinfo-home"
    config_dir.mkdir()
    monkeypatch.setattr(
        "commit_info.config.loader._get_config_directory", lambda: config_dir
    )
    yield config_dir
