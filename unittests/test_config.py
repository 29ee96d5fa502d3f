import pytest
from sniffer import config


@pytest.fixture
def workdir(tmpdir, monkeypatch):
    monkeypatch.chdir(tmpdir)
    return tmpdir


def test_no_config_file(workdir):
    assert config.load_yaml_config() == {}
    assert config.get_settings() == config.DEFAULTS


def test_config_found_upward(workdir):
    workdir.join('dhcpsniff.yaml').write('port: 6767\nloglevel: debug\n')
    workdir.mkdir('a').mkdir('b').chdir()
    assert config.load_yaml_config() == {'port': 6767, 'loglevel': 'debug'}


def test_empty_config_file(workdir):
    workdir.join('dhcpsniff.yaml').write('')
    assert config.load_yaml_config() == {}


def test_settings_precedence(workdir):
    workdir.join('dhcpsniff.yaml').write('port: 6767\naddress: 10.0.0.1\n')
    settings = config.get_settings(port=1067, address=None)
    assert settings['port'] == 1067
    assert settings['address'] == '10.0.0.1'
    assert settings['bufsize'] == 2048
