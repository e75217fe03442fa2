import pytest

from llm_sql_generator import config, log


@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    config.reset_cfg()
    monkeypatch.setattr(log, "_configured", False)
    yield
    config.reset_cfg()


@pytest.fixture
def cfg_file(tmp_path):
    path = tmp_path / "cfg.yml"
    path.write_text(
        "api:\n"
        "  llm_api_uri: https://llm.example.com/v1/\n"
        "  llm_api_key: sk-test-0123456789\n"
        "  llm_model_name: test-model\n",
        encoding="utf-8",
    )
    return path
