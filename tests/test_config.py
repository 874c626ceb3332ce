import pytest

from dispatch.config import DispatcherSettings, load_settings

ENV_NAMES = [
    "DISPATCH_DEFAULT_STRATEGY",
    "DISPATCH_BENCHMARK_RUNS",
    "DISPATCH_SERVICE_TIME_SCALE",
    "DISPATCH_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_NAMES:
        # setenv first so monkeypatch restores the environment, including values load_dotenv adds
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # an empty .env so a developer's local file does not leak into the tests
    dotenv = tmp_path / ".env"
    dotenv.write_text("")
    return str(dotenv)


def test_defaults(clean_env):
    settings = load_settings(clean_env)
    assert settings == DispatcherSettings()


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("DISPATCH_DEFAULT_STRATEGY", "HeapSort")
    monkeypatch.setenv("DISPATCH_BENCHMARK_RUNS", "5")
    monkeypatch.setenv("DISPATCH_SERVICE_TIME_SCALE", "0.25")
    monkeypatch.setenv("DISPATCH_LOG_LEVEL", "debug")

    settings = load_settings(clean_env)

    assert settings.default_strategy == "heapsort"
    assert settings.benchmark_runs == 5
    assert settings.service_time_scale == 0.25
    assert settings.log_level == "DEBUG"


def test_dotenv_file_is_read(clean_env, tmp_path):
    dotenv = tmp_path / "custom.env"
    dotenv.write_text("DISPATCH_BENCHMARK_RUNS=3\n")

    assert load_settings(str(dotenv)).benchmark_runs == 3


@pytest.mark.parametrize(
    "name, value",
    [
        ("DISPATCH_BENCHMARK_RUNS", "many"),
        ("DISPATCH_BENCHMARK_RUNS", "0"),
        ("DISPATCH_SERVICE_TIME_SCALE", "-1"),
        ("DISPATCH_DEFAULT_STRATEGY", "bubblesort"),
        ("DISPATCH_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_are_rejected(clean_env, monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings(clean_env)
