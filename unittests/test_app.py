import io
import logging
import pytest
from sniffer.app.__main__ import SnifferApp


@pytest.fixture(autouse=True)
def restore_logging(tmpdir, monkeypatch):
    monkeypatch.chdir(tmpdir)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def run(*argv):
    stdout, stderr = io.StringIO(), io.StringIO()
    app = SnifferApp(stdout=stdout, stderr=stderr)
    ret = app.run(list(argv))
    return ret, stdout.getvalue(), stderr.getvalue()


def test_decode_raw(tmpdir, discover):
    path = tmpdir.join('discover.bin')
    path.write_binary(discover)
    ret, out, _ = run('decode', str(path))
    assert ret == 0
    assert out.splitlines() == [
        'Message Type: Discover',
        'Host name: myhost',
        'Subnet mask: No subnet mask',
        'xid: 3903f326',
    ]


def test_decode_hex_verbose(tmpdir, discover):
    path = tmpdir.join('discover.hex')
    text = discover.hex()
    path.write('\n'.join(text[i:i + 32] for i in range(0, len(text), 32)))
    ret, out, _ = run('decode', '--hex', '--dump', str(path))
    assert ret == 0
    assert 'chaddr: aa:bb:cc:dd:ee:ff' in out
    assert 'Maximum Message Size: 1472' in out


def test_decode_failure(tmpdir, discover):
    path = tmpdir.join('bad.bin')
    path.write_binary(discover[:236] + b'\x00\x00\x00\x00' + discover[240:])
    ret, out, err = run('decode', str(path))
    assert ret == 1
    assert out == ''
    assert 'BadMagicCookie' in err
