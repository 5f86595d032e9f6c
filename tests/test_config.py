import pytest
from pydantic import ValidationError

from stopwatch_hil.config import Settings

def test_defaults():
    s = Settings.fromEnv({})
    assert s.watch_interval_ms == 100
    assert s.watchInterval == 0.1
    assert s.log_level == 'WARNING'

def test_reads_prefixed_variables():
    s = Settings.fromEnv({
        'STOPWATCH_WATCH_INTERVAL_MS': '250',
        'STOPWATCH_LOG_LEVEL': 'debug',
        'WATCH_INTERVAL_MS': '1',
    })
    assert s.watch_interval_ms == 250
    assert s.log_level == 'DEBUG'

@pytest.mark.parametrize('env', [
    {'STOPWATCH_WATCH_INTERVAL_MS': '-5'},
    {'STOPWATCH_WATCH_INTERVAL_MS': 'soon'},
    {'STOPWATCH_LOG_LEVEL': 'chatty'},
])
def test_rejects_bad_values(env):
    with pytest.raises(ValidationError):
        Settings.fromEnv(env)

def test_loads_dotenv(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('STOPWATCH_WATCH_INTERVAL_MS', raising=False)
    (tmp_path / '.env').write_text('STOPWATCH_WATCH_INTERVAL_MS=40\n')
    try:
        assert Settings.fromEnv().watch_interval_ms == 40
    finally:
        monkeypatch.delenv('STOPWATCH_WATCH_INTERVAL_MS', raising=False)
